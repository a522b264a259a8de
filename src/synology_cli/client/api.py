"""Module-level shortcuts around :class:`SynologyClient`.

Usage::

    conn = connect("nas.local", 5000, "admin", "secret")
    shares = fetch_shares(conn)
"""

from typing import Optional

from synology_cli.client.base import SynologyClient
from synology_cli.client.models import (
    Connection,
    SharedFolderSet,
    StorageInventory,
    SystemUtilization,
)


def connect(
    host: str,
    port: int | str,
    account: str,
    password: str,
    timeout: Optional[float] = None,
) -> Connection:
    """Log in and return a connection handle for the device."""
    return SynologyClient(timeout=timeout).login(host, port, account, password)


def fetch_system_utilization(
    connection: Connection, timeout: Optional[float] = None
) -> SystemUtilization:
    return SynologyClient(timeout=timeout).get_system_info(connection)


def fetch_shares(connection: Connection, timeout: Optional[float] = None) -> SharedFolderSet:
    return SynologyClient(timeout=timeout).get_share_info(connection)


def fetch_storage_inventory(
    connection: Connection, timeout: Optional[float] = None
) -> StorageInventory:
    return SynologyClient(timeout=timeout).get_storage_info(connection)
