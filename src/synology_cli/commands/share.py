"""Shared folder commands.

This module provides commands for listing the shared folders configured on
the DiskStation.
"""

import typer
from rich.console import Console

from synology_cli.commands.common import device_session
from synology_cli.utils.formatters import output_data

app = typer.Typer(
    help="Shared folders",
    no_args_is_help=True,
)
console = Console()


@app.command("list")
def list_shares(ctx: typer.Context) -> None:
    """List all shared folders with quota usage.

    Quota figures are in MB as reported by DSM; a quota of 0 means unlimited.

    Examples:
        synology-cli share list
        synology-cli --output-format json share list
        synology-cli --output-format plain share list
    """
    cli_ctx = ctx.obj

    with device_session(ctx) as (client, connection):
        share_set = client.get_share_info(connection)

    if not share_set.shares and cli_ctx.output_format == "table":
        console.print("[yellow]No shared folders found[/yellow]")
        return

    table_columns = [
        {"key": "name", "header": "Name", "style": "cyan bold"},
        {"key": "vol_path", "header": "Volume", "style": ""},
        {"key": "quota_value", "header": "Quota (MB)", "style": ""},
        {"key": "share_quota_used", "header": "Used (MB)", "style": ""},
        {"key": "is_usb_share", "header": "USB", "style": "", "format": "boolean"},
        {"key": "desc", "header": "Description", "style": "dim"},
    ]

    plain_columns = ["name", "vol_path", "quota_value", "share_quota_used", "is_usb_share", "desc"]

    output_data(
        [share.model_dump() for share in share_set.shares],
        output_format=cli_ctx.output_format,
        table_columns=table_columns,
        plain_columns=plain_columns,
        title=f"Shared Folders ({share_set.total})",
        raw=share_set.model_dump(by_alias=True),
    )
