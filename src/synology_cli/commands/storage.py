"""Storage inventory commands.

This module provides views over SYNO.Storage.CGI.Storage: physical disks,
volumes, iSCSI LUNs and targets, and an overall summary.
"""

import typer
from rich.console import Console

from synology_cli.client.models import IscsiLunDetail, StorageInventory
from synology_cli.commands.common import device_session
from synology_cli.utils.datetime import parse_dsm_datetime
from synology_cli.utils.formatters import format_bytes, format_percentage, output_data

app = typer.Typer(
    help="Storage inventory (disks, volumes, iSCSI)",
    no_args_is_help=True,
)
console = Console()


def load_inventory(ctx: typer.Context) -> StorageInventory:
    with device_session(ctx) as (client, connection):
        return client.get_storage_info(connection)


def next_snapshot_time(lun: IscsiLunDetail) -> str:
    """Earliest next trigger time of the enabled snapshot tasks of a LUN."""
    times = []
    for task in lun.scheduled_task:
        if not task.general.task_enabled:
            continue
        trigger = parse_dsm_datetime(task.schedule.next_trigger_time)
        if trigger is not None:
            times.append(trigger)

    return min(times).isoformat() if times else ""


@app.command("disks")
def list_disks(ctx: typer.Context) -> None:
    """List physical disks with health, SMART status and temperature.

    Examples:
        synology-cli storage disks
        synology-cli --output-format json storage disks
    """
    cli_ctx = ctx.obj
    inventory = load_inventory(ctx)

    if not inventory.disks and cli_ctx.output_format == "table":
        console.print("[yellow]No disks found[/yellow]")
        return

    table_columns = [
        {"key": "name", "header": "Disk", "style": "cyan bold"},
        {"key": "model", "header": "Model", "style": ""},
        {"key": "size_total", "header": "Size", "style": "", "format": "bytes"},
        {"key": "overview_status", "header": "Health", "style": "", "format": "status"},
        {"key": "smart_status", "header": "SMART", "style": "", "format": "status"},
        {"key": "temp", "header": "Temp (C)", "style": ""},
        {"key": "used_by", "header": "Used By", "style": "dim"},
    ]

    plain_columns = ["id", "name", "model", "serial", "size_total", "overview_status", "smart_status", "temp", "used_by"]

    output_data(
        [disk.model_dump() for disk in inventory.disks],
        output_format=cli_ctx.output_format,
        table_columns=table_columns,
        plain_columns=plain_columns,
        title="Disks",
        raw=[disk.model_dump(by_alias=True) for disk in inventory.disks],
    )


@app.command("volumes")
def list_volumes(ctx: typer.Context) -> None:
    """List volumes with filesystem, RAID type and capacity usage.

    Examples:
        synology-cli storage volumes
        synology-cli --output-format plain storage volumes
    """
    cli_ctx = ctx.obj
    inventory = load_inventory(ctx)

    if not inventory.volumes and cli_ctx.output_format == "table":
        console.print("[yellow]No volumes found[/yellow]")
        return

    rows = []
    for volume in inventory.volumes:
        row = volume.model_dump()
        row["size_total"] = volume.size.total
        row["size_used"] = volume.size.used
        row["usage"] = format_percentage(volume.size.used, volume.size.total)
        row["disk_ids"] = ", ".join(volume.disks)
        rows.append(row)

    table_columns = [
        {"key": "vol_path", "header": "Volume", "style": "cyan bold"},
        {"key": "status", "header": "Status", "style": "", "format": "status"},
        {"key": "fs_type", "header": "FS", "style": ""},
        {"key": "device_type", "header": "RAID", "style": ""},
        {"key": "size_total", "header": "Size", "style": "", "format": "bytes"},
        {"key": "size_used", "header": "Used", "style": "", "format": "bytes"},
        {"key": "usage", "header": "Usage", "style": ""},
        {"key": "disk_ids", "header": "Disks", "style": "dim"},
    ]

    plain_columns = ["id", "vol_path", "status", "fs_type", "device_type", "size_total", "size_used", "disk_ids"]

    output_data(
        rows,
        output_format=cli_ctx.output_format,
        table_columns=table_columns,
        plain_columns=plain_columns,
        title="Volumes",
        raw=[volume.model_dump(by_alias=True) for volume in inventory.volumes],
    )


@app.command("luns")
def list_luns(ctx: typer.Context) -> None:
    """List iSCSI LUNs and their scheduled snapshot tasks.

    Examples:
        synology-cli storage luns
    """
    cli_ctx = ctx.obj
    inventory = load_inventory(ctx)

    if not inventory.iscsi_luns and cli_ctx.output_format == "table":
        console.print("[yellow]No iSCSI LUNs found[/yellow]")
        return

    rows = []
    for lun in inventory.iscsi_luns:
        detail = lun.iscsi_lun
        rows.append(
            {
                "id": lun.id,
                "name": detail.name,
                "status": lun.status,
                "size": detail.size,
                "location": detail.location,
                "thin_provision": detail.thin_provision,
                "mapped_targets": ", ".join(str(tid) for tid in detail.mapped_targets),
                "scheduled_tasks": ", ".join(
                    task.general.task_name for task in detail.scheduled_task
                ),
                "next_snapshot": next_snapshot_time(detail),
            }
        )

    table_columns = [
        {"key": "name", "header": "LUN", "style": "cyan bold"},
        {"key": "status", "header": "Status", "style": "", "format": "status"},
        {"key": "size", "header": "Size", "style": "", "format": "bytes"},
        {"key": "location", "header": "Location", "style": ""},
        {"key": "thin_provision", "header": "Thin", "style": "", "format": "boolean"},
        {"key": "mapped_targets", "header": "Targets", "style": ""},
        {"key": "scheduled_tasks", "header": "Snapshot Tasks", "style": "dim"},
        {"key": "next_snapshot", "header": "Next Snapshot", "style": "", "format": "datetime"},
    ]

    plain_columns = [
        "id", "name", "status", "size", "location", "thin_provision", "mapped_targets", "next_snapshot"
    ]

    output_data(
        rows,
        output_format=cli_ctx.output_format,
        table_columns=table_columns,
        plain_columns=plain_columns,
        title="iSCSI LUNs",
        raw=[lun.model_dump(by_alias=True) for lun in inventory.iscsi_luns],
    )


@app.command("targets")
def list_targets(ctx: typer.Context) -> None:
    """List iSCSI targets with their initiator masking.

    Examples:
        synology-cli storage targets
    """
    cli_ctx = ctx.obj
    inventory = load_inventory(ctx)

    if not inventory.iscsi_targets and cli_ctx.output_format == "table":
        console.print("[yellow]No iSCSI targets found[/yellow]")
        return

    rows = []
    for target in inventory.iscsi_targets:
        row = target.model_dump()
        row["auth_type"] = target.auth.type
        row["initiators"] = ", ".join(
            f"{mask.iqn} ({mask.permission})" for mask in target.masking
        )
        rows.append(row)

    table_columns = [
        {"key": "name", "header": "Target", "style": "cyan bold"},
        {"key": "iqn", "header": "IQN", "style": ""},
        {"key": "status", "header": "Status", "style": "", "format": "status"},
        {"key": "enabled", "header": "Enabled", "style": "", "format": "boolean"},
        {"key": "auth_type", "header": "Auth", "style": ""},
        {"key": "initiators", "header": "Masking", "style": "dim"},
    ]

    plain_columns = ["tid", "name", "iqn", "status", "enabled", "auth_type"]

    output_data(
        rows,
        output_format=cli_ctx.output_format,
        table_columns=table_columns,
        plain_columns=plain_columns,
        title="iSCSI Targets",
        raw=[target.model_dump(by_alias=True) for target in inventory.iscsi_targets],
    )


@app.command("summary")
def storage_summary(ctx: typer.Context) -> None:
    """Show an overview of the storage environment.

    Examples:
        synology-cli storage summary
        synology-cli --output-format yaml storage summary
    """
    cli_ctx = ctx.obj
    inventory = load_inventory(ctx)
    env = inventory.env

    if cli_ctx.output_format in ("json", "yaml"):
        output_data(inventory.model_dump(by_alias=True), output_format=cli_ctx.output_format)
        return

    summary = {
        "model": env.model_name,
        "bays": env.bay_number,
        "ram_mb": env.ram_size,
        "disks": len(inventory.disks),
        "volumes": len(inventory.volumes),
        "iscsi_luns": len(inventory.iscsi_luns),
        "iscsi_targets": len(inventory.iscsi_targets),
        "hot_spares": len(inventory.hot_spares),
        "max_volume_size": format_bytes(env.max_fs_bytes),
        "system_crashed": env.status.system_crashed,
        "system_needs_repair": env.status.system_need_repair,
    }

    output_data(summary, output_format=cli_ctx.output_format, title="Storage Summary")
