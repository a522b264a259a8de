"""Main CLI application entry point.

This module defines the main Typer application with global options
and registers all subcommands.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from synology_cli import __version__
from synology_cli.client.exceptions import (
    AuthenticationError,
    ConfigurationError,
    SynologyError,
)
from synology_cli.commands import config as config_commands
from synology_cli.commands import share as share_commands
from synology_cli.commands import storage as storage_commands
from synology_cli.commands import system as system_commands

install_rich_traceback(show_locals=False)

console = Console()

OUTPUT_FORMATS = ("table", "json", "yaml", "plain")

app = typer.Typer(
    name="synology-cli",
    help="Command-line interface for querying Synology DiskStations",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(
    config_commands.app,
    name="config",
    help="Manage CLI configuration and profiles",
)
app.add_typer(
    system_commands.app,
    name="system",
    help="System utilization",
)
app.add_typer(
    share_commands.app,
    name="share",
    help="Shared folders",
)
app.add_typer(
    storage_commands.app,
    name="storage",
    help="Storage inventory (disks, volumes, iSCSI)",
)


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(
        self,
        profile: Optional[str] = None,
        output_format: str = "table",
        verbose: int = 0,
        quiet: bool = False,
        timing: bool = False,
        log_file: Optional[Path] = None,
    ):
        self.profile = profile
        self.output_format = output_format
        self.verbose = verbose
        self.quiet = quiet
        self.timing = timing
        self.log_file = log_file
        self.start_time = time.time() if timing else None


def configure_logging(verbose: int, quiet: bool, log_file: Optional[Path]) -> None:
    """Configure the root logger for the requested verbosity.

    Args:
        verbose: Number of -v flags (0 warnings, 1 info, 2+ debug)
        quiet: Only report errors and drop the console handler
        log_file: Optional file that receives every debug record
    """
    if quiet:
        log_level = logging.ERROR
    elif verbose == 0:
        log_level = logging.WARNING
    elif verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    handlers: list[logging.Handler] = []

    if not quiet:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=verbose >= 2,
            show_path=verbose >= 3,
            rich_tracebacks=True,
        )
        console_handler.setLevel(log_level)
        handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else log_level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO, including the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def version_callback(value: bool) -> None:
    """Print the version and exit before any subcommand runs."""
    if value:
        console.print(f"Synology CLI version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main_callback(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Profile to use (overrides active profile)",
        envvar="SYNOLOGY_PROFILE",
    ),
    output_format: str = typer.Option(
        "table",
        "--output-format",
        "-o",
        help="Output format: table, json, yaml, plain",
        envvar="SYNOLOGY_OUTPUT_FORMAT",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv, -vvv for more detail)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-essential output",
    ),
    timing: bool = typer.Option(
        False,
        "--timing",
        help="Show operation timing information",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write logs to file",
        exists=False,
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Synology CLI - Query Synology DiskStations from the command line.

    Global options can be used with any command to control behavior.

    Examples:
        synology-cli --profile office system info
        synology-cli --output-format json share list
        synology-cli -vv storage volumes
        synology-cli --log-file debug.log --verbose storage disks
    """
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(OUTPUT_FORMATS)}",
            param_hint="--output-format",
        )

    configure_logging(verbose, quiet, log_file)

    logger = logging.getLogger(__name__)
    logger.debug(f"Synology CLI v{__version__}")
    logger.debug(f"Verbosity level: {verbose}")
    logger.debug(f"Output format: {output_format}")
    if profile:
        logger.debug(f"Profile: {profile}")

    ctx.obj = CLIContext(
        profile=profile,
        output_format=output_format,
        verbose=verbose,
        quiet=quiet,
        timing=timing,
        log_file=log_file,
    )


def main() -> None:
    """Main entry point with error handling.

    This function wraps the Typer app to provide consistent error handling
    and proper exit codes for different error types.
    """
    start_time = time.time()

    try:
        app()
    except AuthenticationError as e:
        console.print(f"[bold red]Authentication Error:[/bold red] {e}")
        console.print("\n[yellow]Tip:[/yellow] Check the account with 'synology-cli config test'")
        sys.exit(2)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        console.print("\n[yellow]Tip:[/yellow] Initialize configuration with 'synology-cli config init'")
        sys.exit(3)
    except SynologyError as e:
        console.print(f"[bold red]Synology Error:[/bold red] {e}")
        if e.__cause__:
            console.print(f"[dim]Caused by: {e.__cause__}[/dim]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    finally:
        if "--timing" in sys.argv:
            elapsed = time.time() - start_time
            console.print(f"\n[dim]Operation completed in {elapsed:.2f}s[/dim]")


if __name__ == "__main__":
    main()
