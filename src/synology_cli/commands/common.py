"""Helpers shared by the device query commands."""

import logging
from contextlib import contextmanager
from typing import Iterator, Tuple

import typer
from rich.console import Console

from synology_cli.client.base import SynologyClient
from synology_cli.client.exceptions import (
    AuthenticationError,
    ConfigurationError,
    SynologyError,
)
from synology_cli.client.models import Connection
from synology_cli.config import ConfigManager, ProfileConfig

logger = logging.getLogger(__name__)
console = Console()


def get_profile(ctx: typer.Context) -> ProfileConfig:
    """Get the selected profile from context.

    Raises:
        typer.Exit: With code 3 if configuration is missing or invalid
    """
    config_mgr = ConfigManager()
    cli_ctx = ctx.obj

    try:
        _, profile, _ = config_mgr.get_profile_or_active(cli_ctx.profile)
    except ConfigurationError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(3)

    return profile


@contextmanager
def device_session(ctx: typer.Context) -> Iterator[Tuple[SynologyClient, Connection]]:
    """Log in with the selected profile and log out when done.

    Yields:
        Tuple of (client, connection)

    Raises:
        typer.Exit: With code 2 on rejected login, 1 on other device errors
    """
    profile = get_profile(ctx)
    client = SynologyClient(timeout=profile.timeout, verbose=ctx.obj.verbose >= 2)

    try:
        connection = client.login(profile.host, profile.port, profile.account, profile.password)
    except AuthenticationError as e:
        console.print(f"[red]Authentication Error:[/red] {e}")
        raise typer.Exit(2)
    except SynologyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        yield client, connection
    except SynologyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        try:
            client.logout(connection)
        except SynologyError as e:
            logger.warning(f"Logout from {connection.origin} failed: {e}")
