"""Base Synology DSM API client.

This module provides the core HTTP client for interacting with the Synology
DSM Web API. It handles URL building, login, request execution, error
mapping and decoding of the ``{success, data}`` response envelope.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

import httpx
from pydantic import BaseModel, ValidationError

from synology_cli.client.exceptions import (
    APIError,
    AuthenticationError,
    DecodeError,
    NetworkError,
    RequestError,
    describe_error_code,
)
from synology_cli.client.models import (
    AuthResult,
    Connection,
    EmptyResult,
    Envelope,
    SharedFolderSet,
    StorageInventory,
    SystemUtilization,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

AUTH_PATH = "/webapi/auth.cgi"
ENTRY_PATH = "/webapi/entry.cgi"

AUTH_API = "SYNO.API.Auth"
AUTH_VERSION = 6
AUTH_SESSION = "Core"

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "PATCH"})

# Query parameters whose values must never reach the logs.
REDACTED_PARAMS = frozenset({"passwd", "_sid"})


def encode_param(value: Any) -> str:
    """Convert a query parameter value to its DSM wire form.

    Lists and dicts are sent as JSON, booleans as ``true``/``false``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def build_url(origin: str, path: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Build a full API URL with a percent-encoded query string.

    Every value is percent-encoded, so credentials containing ``&``, ``%``,
    ``=`` or ``#`` survive the trip.

    Args:
        origin: Scheme, host and port (e.g. 'http://nas.local:5000')
        path: API path (e.g. '/webapi/entry.cgi')
        params: Query parameters in the order they should appear

    Returns:
        Full URL
    """
    url = origin.rstrip("/") + "/" + path.lstrip("/")
    if not params:
        return url

    query = urlencode(
        [(key, encode_param(value)) for key, value in params.items()],
        quote_via=quote,
        safe="",
    )
    return f"{url}?{query}"


def format_origin(host: str, port: int | str) -> str:
    """Build the HTTP origin of a device.

    IPv6 literals are wrapped in brackets, e.g. 'http://[fd00::10]:5000'.
    """
    host = host.strip("[]")
    if ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{port}"


def redact_url(url: str) -> str:
    """Mask credentials and session IDs in a URL for logging."""
    base, _, query = url.partition("?")
    if not query:
        return url

    parts = []
    for pair in query.split("&"):
        key, sep, _ = pair.partition("=")
        parts.append(f"{key}{sep}***" if key in REDACTED_PARAMS else pair)
    return f"{base}?{'&'.join(parts)}"


class SynologyClient:
    """HTTP client for the Synology DSM Web API.

    The client holds no session state. ``login`` returns a
    :class:`Connection` which the caller passes to every query, so one
    client can talk to several devices at once.

    Attributes:
        timeout: Request timeout in seconds (None for the httpx default)
        verbose: Log response bodies at debug level
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verbose: bool = False,
    ):
        """Initialize Synology client.

        Args:
            timeout: Request timeout in seconds
            verbose: Enable verbose logging
        """
        self.timeout = timeout
        self.verbose = verbose

    def perform_request(self, method: str, url: str) -> httpx.Response:
        """Issue exactly one HTTP request and return the full response.

        The body is read and the connection closed before returning. The
        status code is not inspected and nothing is retried.

        Args:
            method: HTTP method (GET, POST, ...)
            url: Fully-formed URL with the query string already embedded

        Returns:
            HTTP response

        Raises:
            RequestError: For unsupported methods or malformed URLs
            NetworkError: For connection/network errors
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise RequestError(f"Unsupported HTTP method: {method}")

        logger.debug(f"{method} {redact_url(url)}")

        # Leave the httpx default timeout in place unless one was configured
        client_options = {"timeout": self.timeout} if self.timeout is not None else {}

        try:
            with httpx.Client(**client_options) as client:
                return client.request(method, url)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise RequestError(f"Invalid request URL {redact_url(url)}: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Network error: {e}\nFailed to reach {redact_url(url).partition('?')[0]}"
            ) from e

    def _decode(
        self,
        response: httpx.Response,
        model: Type[ModelT],
        auth: bool = False,
    ) -> ModelT:
        """Decode a response envelope into the given model.

        Args:
            response: HTTP response object
            model: Model class for the ``data`` payload
            auth: Map reported failures to AuthenticationError

        Returns:
            Decoded model instance

        Raises:
            APIError: For non-2xx responses and ``success: false`` envelopes
            AuthenticationError: For rejected logins
            DecodeError: For bodies that do not match the expected shape
        """
        if self.verbose:
            logger.debug(f"Response status: {response.status_code}")
            logger.debug(f"Response body: {response.text[:1000]}")  # First 1000 chars

        if not response.is_success:
            raise APIError(
                f"HTTP error ({response.status_code}): {response.reason_phrase}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            envelope = Envelope.model_validate(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Response is not valid JSON: {e}", response_body=response.text) from e
        except ValidationError as e:
            raise DecodeError(f"Unexpected response envelope: {e}", response_body=response.text) from e

        if not envelope.success:
            code = envelope.error.code if envelope.error else 100
            error_class = AuthenticationError if auth else APIError
            raise error_class(
                f"API error {code}: {describe_error_code(code, auth=auth)}",
                code=code,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            return model.model_validate(envelope.data or {})
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected {model.__name__} payload: {e}",
                response_body=response.text,
            ) from e

    def query(
        self,
        connection: Connection,
        api: str,
        method: str,
        model: Type[ModelT],
        version: int = 1,
        **params: Any,
    ) -> ModelT:
        """Query an entry.cgi API and decode its payload.

        Args:
            connection: Authenticated connection
            api: DSM API name (e.g. 'SYNO.Core.Share')
            method: API method (e.g. 'list')
            model: Model class for the payload
            version: API version
            **params: Endpoint-specific query parameters

        Returns:
            Decoded model instance
        """
        query_params: Dict[str, Any] = {"api": api, "version": version, "method": method}
        query_params.update(params)
        query_params["_sid"] = connection.token

        url = build_url(connection.origin, ENTRY_PATH, query_params)
        response = self.perform_request("GET", url)
        return self._decode(response, model)

    # Session management
    def login(self, host: str, port: int | str, account: str, password: str) -> Connection:
        """Log in to the device and return a connection handle.

        Args:
            host: Device hostname or IP address
            port: DSM HTTP port (usually 5000)
            account: Account name
            password: Account password

        Returns:
            Connection holding the origin and session ID

        Raises:
            AuthenticationError: If the device rejects the credentials
        """
        origin = format_origin(host, port)
        url = build_url(
            origin,
            AUTH_PATH,
            {
                "api": AUTH_API,
                "version": AUTH_VERSION,
                "method": "login",
                "account": account,
                "passwd": password,
                "session": AUTH_SESSION,
                "format": "cookie",
            },
        )

        response = self.perform_request("GET", url)
        result = self._decode(response, AuthResult, auth=True)
        logger.info(f"Logged in to {origin} as {account}")

        return Connection(origin=origin, token=result.sid)

    def logout(self, connection: Connection) -> None:
        """End the session behind a connection.

        Args:
            connection: Connection returned by login
        """
        url = build_url(
            connection.origin,
            AUTH_PATH,
            {
                "api": AUTH_API,
                "version": AUTH_VERSION,
                "method": "logout",
                "session": AUTH_SESSION,
                "_sid": connection.token,
            },
        )
        response = self.perform_request("GET", url)
        self._decode(response, EmptyResult)
        logger.info(f"Logged out of {connection.origin}")

    # Queries
    def get_system_info(self, connection: Connection) -> SystemUtilization:
        """Get the current system utilization snapshot.

        Returns:
            CPU, memory, disk, LUN, network and volume utilization
        """
        return self.query(
            connection, "SYNO.Core.System.Utilization", "get", SystemUtilization
        )

    def get_share_info(self, connection: Connection) -> SharedFolderSet:
        """Get all shared folders including quota usage.

        Returns:
            Shared folders and their count
        """
        return self.query(
            connection,
            "SYNO.Core.Share",
            "list",
            SharedFolderSet,
            shareType="all",
            additional=["share_quota"],
        )

    def get_storage_info(self, connection: Connection) -> StorageInventory:
        """Get disks, volumes, iSCSI LUNs/targets and environment flags.

        Returns:
            Storage inventory
        """
        return self.query(
            connection, "SYNO.Storage.CGI.Storage", "load_info", StorageInventory
        )
