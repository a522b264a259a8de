"""Synology DSM API client package.

This package provides the HTTP client for interacting with the Synology DSM
Web API, including models, exceptions, and the base client implementation.
"""

from synology_cli.client.api import (
    connect,
    fetch_shares,
    fetch_storage_inventory,
    fetch_system_utilization,
)
from synology_cli.client.base import SynologyClient
from synology_cli.client.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    RequestError,
    SynologyError,
)
from synology_cli.client.models import (
    Connection,
    SharedFolderSet,
    StorageInventory,
    SystemUtilization,
)

__all__ = [
    "SynologyClient",
    "connect",
    "fetch_system_utilization",
    "fetch_shares",
    "fetch_storage_inventory",
    "Connection",
    "SystemUtilization",
    "SharedFolderSet",
    "StorageInventory",
    "SynologyError",
    "ConfigurationError",
    "RequestError",
    "NetworkError",
    "DecodeError",
    "APIError",
    "AuthenticationError",
]
