"""Output formatting utilities for Synology CLI.

This module provides consistent formatting functions for displaying data
in table, JSON, YAML and plain text formats across all commands.
"""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from synology_cli.utils.datetime import format_datetime

console = Console()


def format_bytes(bytes_value: int | str | None) -> str:
    """Format bytes into human-readable format.

    DSM reports most capacities as decimal strings, so those are accepted too.

    Args:
        bytes_value: Size in bytes

    Returns:
        Human-readable string (e.g., "1.50 GB")
    """
    if bytes_value is None or bytes_value == "":
        return "N/A"

    try:
        size = float(bytes_value)
    except (TypeError, ValueError):
        return str(bytes_value)

    if size == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    unit_index = 0

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.2f} {units[unit_index]}"


def format_percentage(numerator: float | str | None, denominator: float | str | None) -> str:
    """Format a percentage from numerator and denominator.

    Returns:
        Percentage string (e.g., "75.5%")
    """
    try:
        numerator = float(numerator)
        denominator = float(denominator)
    except (TypeError, ValueError):
        return "N/A"

    if denominator == 0:
        return "N/A"

    return f"{numerator / denominator * 100:.1f}%"


def get_status_color(status: str) -> str:
    """Get Rich color for a DSM status string.

    Args:
        status: Status string (e.g., "normal", "degrade", "crashed")

    Returns:
        Rich color name
    """
    status_lower = status.lower()

    if status_lower in ["normal", "healthy", "online", "ok", "connected", "enabled"]:
        return "green"

    if status_lower in ["degrade", "degraded", "warning", "attention", "repairing", "background"]:
        return "yellow"

    if status_lower in ["crashed", "failing", "failed", "error", "critical", "offline", "disabled"]:
        return "red"

    return "blue"


def format_value(value: Any, value_format: str | None = None) -> str:
    """Render one cell value according to a column format."""
    if value_format == "bytes":
        return format_bytes(value)
    if value_format == "status":
        color = get_status_color(str(value))
        return f"[{color}]{value}[/{color}]"
    if value_format == "boolean":
        return "[green]Yes[/green]" if value else "[red]No[/red]"
    if value_format == "percent":
        return f"{value}%"
    if value_format == "datetime":
        return format_datetime(value, format_type="human")
    if value is None or value == "":
        return "[dim]N/A[/dim]"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def format_table_output(
    data: list[dict[str, Any]],
    columns: list[dict[str, str]],
    title: str | None = None,
) -> None:
    """Format and display data as a Rich table.

    Args:
        data: List of dictionaries to display
        columns: Column definitions with 'key', 'header', and optional 'style'
            and 'format'
        title: Optional table title
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")

    for col in columns:
        table.add_column(
            col["header"],
            style=col.get("style", ""),
            no_wrap=col.get("no_wrap", False),
        )

    for item in data:
        table.add_row(
            *[format_value(item.get(col["key"]), col.get("format")) for col in columns]
        )

    console.print(table)


def format_key_value_output(
    data: dict[str, Any],
    title: str | None = None,
) -> None:
    """Format and display data as a key-value table.

    Args:
        data: Dictionary to display
        title: Optional table title
    """
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Property", style="cyan bold")
    table.add_column("Value", style="green")

    for key, value in data.items():
        display_key = key.replace("_", " ").title()

        if isinstance(value, bool):
            display_value = "[green]Yes[/green]" if value else "[red]No[/red]"
        elif isinstance(value, (dict, list)):
            display_value = json.dumps(value, indent=2)
        elif value is None or value == "":
            display_value = "[dim]N/A[/dim]"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    console.print(table)


def format_json_output(data: Any) -> None:
    """Format and display data as JSON."""
    console.print(JSON(json.dumps(data, indent=2, default=str)))


def format_yaml_output(data: Any) -> None:
    """Format and display data as YAML."""
    console.print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")


def format_plain_output(
    data: list[dict[str, Any]],
    columns: list[str],
    delimiter: str = "\t",
) -> None:
    """Format and display data as plain text (TSV by default).

    Args:
        data: List of dictionaries to display
        columns: Column keys to include
        delimiter: Field delimiter (default: tab)
    """
    print(delimiter.join(columns))

    for item in data:
        values = []
        for col in columns:
            value = item.get(col, "")

            if isinstance(value, (dict, list)):
                value = json.dumps(value)
            elif value is None:
                value = ""

            values.append(str(value))

        print(delimiter.join(values))


def output_data(
    data: Any,
    output_format: str = "table",
    table_columns: list[dict[str, str]] | None = None,
    plain_columns: list[str] | None = None,
    title: str | None = None,
    raw: Any = None,
) -> None:
    """Universal output function that handles all formats.

    Args:
        data: Data to output (dict, list of dicts, or other)
        output_format: Output format (table, json, yaml, plain)
        table_columns: Column definitions for table format
        plain_columns: Column keys for plain format
        title: Optional title for table output
        raw: Full payload for json/yaml output, if it differs from data
    """
    if output_format == "json":
        format_json_output(data if raw is None else raw)
    elif output_format == "yaml":
        format_yaml_output(data if raw is None else raw)
    elif output_format == "plain":
        if isinstance(data, list) and plain_columns:
            format_plain_output(data, plain_columns)
        elif isinstance(data, dict):
            for key, value in data.items():
                print(f"{key}={value}")
        else:
            print(str(data))
    else:  # table (default)
        if isinstance(data, list) and table_columns:
            format_table_output(data, table_columns, title)
        elif isinstance(data, dict):
            format_key_value_output(data, title)
        else:
            console.print(data)
