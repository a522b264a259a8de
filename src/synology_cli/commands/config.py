"""Configuration management commands.

This module provides commands for managing CLI configuration including
initializing profiles, listing profiles, switching between them and
checking that a profile can log in.
"""

import typer
from rich.console import Console
from rich.table import Table

from synology_cli.client.base import SynologyClient
from synology_cli.client.exceptions import (
    AuthenticationError,
    ConfigurationError,
    SynologyError,
)
from synology_cli.config import Config, ConfigManager

app = typer.Typer(
    help="Manage CLI configuration and profiles",
    no_args_is_help=True,
)
console = Console()


def load_config(config_mgr: ConfigManager) -> Config:
    try:
        return config_mgr.load()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(3)


@app.command("init")
def init_config(
    profile: str = typer.Option(
        "default",
        "--profile",
        "-p",
        help="Profile name to create or update",
    ),
    host: str = typer.Option(
        ...,
        "--host",
        "-H",
        help="DiskStation hostname or IP (e.g., nas.local)",
        prompt="DiskStation host",
    ),
    port: int = typer.Option(
        5000,
        "--port",
        help="DSM HTTP port",
    ),
    account: str = typer.Option(
        ...,
        "--account",
        "-a",
        help="Account to log in with",
        prompt="Account",
    ),
    password: str = typer.Option(
        ...,
        "--password",
        help="Account password",
        prompt="Password",
        hide_input=True,
    ),
    timeout: int = typer.Option(
        30,
        "--timeout",
        "-t",
        help="Request timeout in seconds",
    ),
    set_active: bool = typer.Option(
        True,
        "--set-active/--no-set-active",
        help="Set this profile as active",
    ),
) -> None:
    """Initialize or update a configuration profile.

    The configuration is stored with 600 permissions since it holds the
    account password.

    Examples:
        # Interactive setup (recommended)
        synology-cli config init

        # Non-interactive setup
        synology-cli config init --host nas.local --account admin --password secret

        # Create an office profile on a non-default port
        synology-cli config init --profile office --port 5050
    """
    config_mgr = ConfigManager()

    try:
        config = config_mgr.load()
        is_new = False
    except ConfigurationError:
        config = Config(active_profile="default", profiles={})
        is_new = True

    is_update = profile in config.profiles

    try:
        config = config_mgr.add_profile(
            config=config,
            name=profile,
            host=host,
            port=port,
            account=account,
            password=password,
            timeout=timeout,
            set_active=set_active,
        )
    except ValueError as e:
        console.print(f"[red]Invalid profile:[/red] {e}")
        raise typer.Exit(3)

    config_mgr.save(config)

    if is_new:
        console.print("[green]Configuration initialized successfully![/green]")
    elif is_update:
        console.print(f"[green]Profile '{profile}' updated successfully![/green]")
    else:
        console.print(f"[green]Profile '{profile}' created successfully![/green]")

    if config.active_profile == profile:
        console.print(f"[dim]Active profile set to: {profile}[/dim]")

    console.print(f"\n[dim]Configuration saved to: {config_mgr.config_file}[/dim]")


@app.command("list")
def list_profiles() -> None:
    """List all configured profiles.

    Passwords are never shown.

    Examples:
        synology-cli config list
    """
    config_mgr = ConfigManager()
    config = load_config(config_mgr)

    if not config.profiles:
        console.print("[yellow]No profiles configured.[/yellow]")
        console.print("\nRun 'synology-cli config init' to create your first profile.")
        return

    table = Table(title="Synology CLI Profiles", show_header=True, header_style="bold magenta")
    table.add_column("Profile", style="cyan", no_wrap=True)
    table.add_column("Address", style="green")
    table.add_column("Account", style="yellow")
    table.add_column("Timeout", style="blue")
    table.add_column("Active", style="bold green")

    for name, profile in config.profiles.items():
        table.add_row(
            name,
            profile.origin,
            profile.account,
            f"{profile.timeout}s",
            "✓" if name == config.active_profile else "",
        )

    console.print(table)


@app.command("show")
def show_config(
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="Profile to show (defaults to active profile)",
    ),
) -> None:
    """Show configuration details for a profile.

    Examples:
        synology-cli config show
        synology-cli config show --profile office
    """
    config_mgr = ConfigManager()

    try:
        config, profile_config, profile_name = config_mgr.get_profile_or_active(profile)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(3)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Property", style="cyan bold")
    table.add_column("Value", style="green")

    table.add_row("Profile", profile_name)
    table.add_row("Host", profile_config.host)
    table.add_row("Port", str(profile_config.port))
    table.add_row("Account", profile_config.account)
    table.add_row("Password", "***" if profile_config.password else "[dim]not set[/dim]")
    table.add_row("Timeout", f"{profile_config.timeout} seconds")
    table.add_row("Active", "✓ Yes" if profile_name == config.active_profile else "No")

    console.print(table)


@app.command("set-profile", no_args_is_help=True)
def set_active_profile(
    profile: str = typer.Argument(..., help="Profile name to activate"),
) -> None:
    """Set the active profile.

    Examples:
        synology-cli config set-profile office
    """
    config_mgr = ConfigManager()
    config = load_config(config_mgr)

    if profile not in config.profiles:
        console.print(f"[red]Error:[/red] Profile '{profile}' not found.")
        console.print(f"\nAvailable profiles: {', '.join(config.profiles.keys())}")
        raise typer.Exit(3)

    config.active_profile = profile
    config_mgr.save(config)

    console.print(f"[green]Active profile set to:[/green] {profile}")


@app.command("delete", no_args_is_help=True)
def delete_profile(
    profile: str = typer.Argument(..., help="Profile name to delete"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Delete without confirmation",
    ),
) -> None:
    """Delete a configuration profile.

    The active profile can only be deleted when it is the last one.

    Examples:
        synology-cli config delete old-nas
        synology-cli config delete test --force
    """
    config_mgr = ConfigManager()
    config = load_config(config_mgr)

    if profile not in config.profiles:
        console.print(f"[red]Error:[/red] Profile '{profile}' not found.")
        raise typer.Exit(3)

    if profile == config.active_profile and len(config.profiles) > 1:
        console.print(
            f"[red]Error:[/red] Cannot delete active profile '{profile}'.\n"
            "Set another profile as active first using 'synology-cli config set-profile'."
        )
        raise typer.Exit(3)

    if not force:
        if not typer.confirm(f"Are you sure you want to delete profile '{profile}'?"):
            console.print("[yellow]Deletion cancelled.[/yellow]")
            return

    del config.profiles[profile]

    if not config.profiles:
        config.active_profile = "default"

    config_mgr.save(config)

    console.print(f"[green]Profile '{profile}' deleted successfully.[/green]")


@app.command("test")
def test_connection(
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="Profile to test (defaults to active profile)",
    ),
) -> None:
    """Check that a profile can log in to its DiskStation.

    Examples:
        synology-cli config test
        synology-cli config test --profile office
    """
    config_mgr = ConfigManager()

    try:
        _, profile_config, profile_name = config_mgr.get_profile_or_active(profile)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(3)

    console.print(f"Testing connection to [cyan]{profile_name}[/cyan] ({profile_config.origin})...")

    client = SynologyClient(timeout=profile_config.timeout)

    try:
        connection = client.login(
            profile_config.host,
            profile_config.port,
            profile_config.account,
            profile_config.password,
        )
        client.logout(connection)
    except AuthenticationError as e:
        console.print(f"[red]✗ Login rejected:[/red] {e}")
        raise typer.Exit(2)
    except SynologyError as e:
        console.print(f"[red]✗ Connection failed:[/red] {e}")
        console.print("\n[yellow]Troubleshooting tips:[/yellow]")
        console.print("  1. Verify the host and port are correct and reachable")
        console.print("  2. Ensure DSM is listening on HTTP (not HTTPS only)")
        console.print("  3. Ensure firewall allows connections")
        raise typer.Exit(1)

    console.print("[green]✓ Login successful[/green]")
