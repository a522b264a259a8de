"""System utilization commands.

This module provides commands for querying the live resource usage of the
DiskStation via SYNO.Core.System.Utilization.
"""

import typer
from rich.console import Console

from synology_cli.commands.common import device_session
from synology_cli.utils.datetime import format_datetime
from synology_cli.utils.formatters import output_data

app = typer.Typer(
    help="System utilization",
    no_args_is_help=True,
)
console = Console()


@app.command("info")
def system_info(ctx: typer.Context) -> None:
    """Show the current system utilization.

    Displays CPU load, memory usage, network throughput and per-disk I/O.

    Examples:
        synology-cli system info
        synology-cli --output-format json system info
        synology-cli --profile office system info
    """
    cli_ctx = ctx.obj

    with device_session(ctx) as (client, connection):
        utilization = client.get_system_info(connection)

    raw = utilization.model_dump(by_alias=True)

    if cli_ctx.output_format in ("json", "yaml"):
        output_data(raw, output_format=cli_ctx.output_format)
        return

    cpu = utilization.cpu
    memory = utilization.memory
    overview = {
        "captured": format_datetime(utilization.time),
        "cpu_user": f"{cpu.user_load}%",
        "cpu_system": f"{cpu.system_load}%",
        "cpu_other": f"{cpu.other_load}%",
        "load_average": f"{cpu.load_1min} / {cpu.load_5min} / {cpu.load_15min}",
        "memory_usage": f"{memory.real_usage}%",
        "memory_total_kb": memory.total_real,
        "memory_available_kb": memory.avail_real,
        "swap_usage": f"{memory.swap_usage}%",
    }
    output_data(overview, output_format=cli_ctx.output_format, title="System Utilization")

    if utilization.network:
        output_data(
            [nic.model_dump() for nic in utilization.network],
            output_format=cli_ctx.output_format,
            table_columns=[
                {"key": "device", "header": "Interface", "style": "cyan bold"},
                {"key": "rx", "header": "RX (B/s)", "style": ""},
                {"key": "tx", "header": "TX (B/s)", "style": ""},
            ],
            plain_columns=["device", "rx", "tx"],
            title="Network",
        )

    if utilization.disk.disks:
        output_data(
            [disk.model_dump() for disk in utilization.disk.disks],
            output_format=cli_ctx.output_format,
            table_columns=[
                {"key": "display_name", "header": "Disk", "style": "cyan bold"},
                {"key": "device", "header": "Device", "style": "dim"},
                {"key": "utilization", "header": "Busy", "style": "", "format": "percent"},
                {"key": "read_byte", "header": "Read (B/s)", "style": ""},
                {"key": "write_byte", "header": "Write (B/s)", "style": ""},
            ],
            plain_columns=["display_name", "device", "utilization", "read_byte", "write_byte"],
            title="Disk I/O",
        )
