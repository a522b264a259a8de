"""Custom exceptions for Synology CLI.

This module defines a hierarchy of exceptions for different error conditions,
making it easier to handle specific error types and provide helpful messages.
"""

# Error codes shared by every DSM Web API.
COMMON_ERROR_CODES = {
    100: "Unknown error",
    101: "No parameter of API, method or version",
    102: "The requested API does not exist",
    103: "The requested method does not exist",
    104: "The requested version does not support the functionality",
    105: "The logged in session does not have permission",
    106: "Session timeout",
    107: "Session interrupted by duplicate login",
    108: "Failed to upload the file",
    109: "The network connection is unstable or the system is busy",
    110: "The network connection is unstable or the system is busy",
    111: "The network connection is unstable or the system is busy",
    114: "Lost parameters for this API",
    115: "Not allowed to upload a file",
    116: "Not allowed to perform for a demo site",
    117: "The network connection is unstable or the system is busy",
    118: "The network connection is unstable or the system is busy",
    119: "Invalid session",
    150: "Request source IP does not match the login IP",
}

# Error codes specific to SYNO.API.Auth.
AUTH_ERROR_CODES = {
    400: "No such account or incorrect password",
    401: "Disabled account",
    402: "Denied permission",
    403: "2-factor authentication code required",
    404: "Failed to authenticate 2-factor authentication code",
    406: "Enforce to authenticate with 2-factor authentication code",
    407: "Blocked IP source",
    408: "Expired password cannot change",
    409: "Expired password",
    410: "Password must be changed",
}


def describe_error_code(code: int | None, auth: bool = False) -> str:
    """Return the documented description for a DSM error code.

    Args:
        code: Numeric error code from the response envelope
        auth: Also look the code up in the SYNO.API.Auth table

    Returns:
        Human-readable description
    """
    if code is None:
        return COMMON_ERROR_CODES[100]
    if auth and code in AUTH_ERROR_CODES:
        return AUTH_ERROR_CODES[code]
    return COMMON_ERROR_CODES.get(code, f"Undocumented error code {code}")


class SynologyError(Exception):
    """Base exception for all Synology CLI errors.

    All custom exceptions in the CLI inherit from this base class,
    making it easy to catch all CLI-related errors if needed.
    """

    pass


class ConfigurationError(SynologyError):
    """Exception raised for configuration-related errors.

    This includes:
    - Missing or invalid configuration files
    - Missing required configuration values
    - Invalid profile names

    Exit code: 3
    """

    pass


class RequestError(SynologyError):
    """Exception raised when a request cannot be built.

    This includes unsupported HTTP methods and URLs httpx refuses to parse.
    """

    pass


class NetworkError(SynologyError):
    """Exception raised for network-related errors.

    This includes:
    - Connection timeouts
    - DNS resolution failures
    - Connection refused
    - Network unreachable
    """

    pass


class DecodeError(SynologyError):
    """Exception raised when a response body cannot be decoded.

    Raised for bodies that are not JSON and for JSON that does not fit the
    response envelope or the expected result model.

    Attributes:
        response_body: Raw response body, if available
    """

    def __init__(self, message: str, response_body: str | None = None):
        super().__init__(message)
        self.response_body = response_body


class APIError(SynologyError):
    """Exception raised when the device reports a failure.

    This covers envelopes with ``success: false`` as well as non-2xx
    HTTP responses.

    Attributes:
        code: DSM error code from the envelope, if any
        status_code: HTTP status code
        response_body: Response body content
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        """Initialize API error.

        Args:
            message: Error message
            code: DSM error code
            status_code: HTTP status code
            response_body: Response body content
        """
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.response_body = response_body


class AuthenticationError(APIError):
    """Exception raised when the device rejects a login.

    This includes:
    - Unknown account or wrong password (400)
    - Disabled accounts (401)
    - Missing 2-factor code (403)

    Exit code: 2
    """

    pass
