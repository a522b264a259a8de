"""Entry point for running synology-cli as a module.

This allows the CLI to be run with:
    python -m synology_cli
"""

from synology_cli.cli import main

if __name__ == "__main__":
    main()
