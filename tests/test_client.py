"""Tests for the Synology DSM API client."""

import copy
import re

import httpx
import pytest
from pytest_httpx import HTTPXMock

from synology_cli.client import (
    connect,
    fetch_shares,
    fetch_storage_inventory,
    fetch_system_utilization,
)
from synology_cli.client.base import SynologyClient, build_url, format_origin, redact_url
from synology_cli.client.exceptions import (
    APIError,
    AuthenticationError,
    DecodeError,
    NetworkError,
    RequestError,
)
from tests.conftest import (
    AUTH_URL,
    LOGOUT_URL,
    MOCK_AUTH,
    MOCK_AUTH_FAILED,
    MOCK_LOGOUT,
    MOCK_SHARES,
    MOCK_STORAGE,
    MOCK_UTILIZATION,
    SHARE_URL,
    STORAGE_URL,
    UTILIZATION_URL,
)


class TestBuildURL:
    """Tests for query string construction."""

    def test_params_in_order(self):
        """Parameters appear in insertion order after the path."""
        url = build_url("http://nas.local:5000", "/webapi/entry.cgi", {"api": "SYNO.Core.Share", "version": 1})
        assert url == "http://nas.local:5000/webapi/entry.cgi?api=SYNO.Core.Share&version=1"

    def test_reserved_characters_are_encoded(self):
        """Credentials with reserved characters are percent-encoded."""
        url = build_url("http://nas.local:5000", "webapi/auth.cgi", {"passwd": "p&ss=w%rd #1/"})
        assert url.endswith("?passwd=p%26ss%3Dw%25rd%20%231%2F")

    def test_list_values_are_json(self):
        """List values are sent as compact JSON."""
        url = build_url("http://nas.local:5000", "/webapi/entry.cgi", {"additional": ["share_quota"]})
        assert url.endswith("?additional=%5B%22share_quota%22%5D")

    def test_bool_values(self):
        url = build_url("http://nas.local:5000", "/x", {"a": True, "b": False})
        assert url.endswith("?a=true&b=false")

    def test_trailing_slash_on_origin(self):
        assert build_url("http://nas.local:5000/", "/webapi/auth.cgi") == "http://nas.local:5000/webapi/auth.cgi"

    def test_redact_url(self):
        """Passwords and session IDs are masked for logging."""
        url = "http://nas.local:5000/webapi/auth.cgi?account=admin&passwd=secret&_sid=abc"
        assert redact_url(url) == "http://nas.local:5000/webapi/auth.cgi?account=admin&passwd=***&_sid=***"

    @pytest.mark.parametrize(
        "host,port,expected",
        [
            ("nas.local", 5000, "http://nas.local:5000"),
            ("192.168.1.20", "5001", "http://192.168.1.20:5001"),
            ("fd00::10", 5000, "http://[fd00::10]:5000"),
            ("[fd00::10]", 5000, "http://[fd00::10]:5000"),
        ],
    )
    def test_format_origin(self, host, port, expected):
        assert format_origin(host, port) == expected


class TestTransport:
    """Tests for the single request primitive."""

    def test_returns_response_without_inspecting_status(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url="http://nas.local:5000/webapi/entry.cgi", status_code=502, text="bad gateway")

        response = client.perform_request("GET", "http://nas.local:5000/webapi/entry.cgi")

        assert response.status_code == 502
        assert response.text == "bad gateway"

    def test_unsupported_method(self, client):
        with pytest.raises(RequestError):
            client.perform_request("FETCH", "http://nas.local:5000/webapi/entry.cgi")

    def test_invalid_url(self, client):
        with pytest.raises(RequestError):
            client.perform_request("GET", "nas.local:5000/webapi/entry.cgi")

    def test_connection_refused(self, client, httpx_mock: HTTPXMock):
        """Transport failures surface as NetworkError."""
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        with pytest.raises(NetworkError) as exc_info:
            client.perform_request("GET", "http://nas.local:5000/webapi/entry.cgi")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            client.perform_request("GET", "http://nas.local:5000/webapi/entry.cgi")


class TestLogin:
    """Tests for session management."""

    def test_login_returns_connection(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=AUTH_URL, json=MOCK_AUTH)

        conn = connect("nas.local", "5000", "admin", "pw")

        assert conn.token == "abc123"
        assert conn.origin == "http://nas.local:5000"

    def test_login_query_parameters(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=AUTH_URL, json=MOCK_AUTH)

        client.login("nas.local", 5000, "admin", "p&ss=w%rd")

        request = httpx_mock.get_request()
        assert request.method == "GET"
        assert request.url.path == "/webapi/auth.cgi"
        params = request.url.params
        assert params["api"] == "SYNO.API.Auth"
        assert params["version"] == "6"
        assert params["method"] == "login"
        assert params["account"] == "admin"
        assert params["passwd"] == "p&ss=w%rd"
        assert params["session"] == "Core"
        assert params["format"] == "cookie"

    def test_login_rejected(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=AUTH_URL, json=MOCK_AUTH_FAILED)

        with pytest.raises(AuthenticationError) as exc_info:
            client.login("nas.local", 5000, "admin", "wrong")

        assert exc_info.value.code == 400
        assert "incorrect password" in str(exc_info.value)

    def test_connections_are_independent(self, client, httpx_mock: HTTPXMock):
        """Logging in to a second device leaves the first handle untouched."""
        httpx_mock.add_response(url=AUTH_URL, json=MOCK_AUTH)
        httpx_mock.add_response(
            url="http://backup.local:5001/webapi/auth.cgi?api=SYNO.API.Auth&version=6&method=login"
            "&account=admin&passwd=pw&session=Core&format=cookie",
            json={"data": {"sid": "zzz999"}, "success": True},
        )

        first = client.login("nas.local", 5000, "admin", "pw")
        second = client.login("backup.local", 5001, "admin", "pw")

        assert first.token == "abc123"
        assert first.origin == "http://nas.local:5000"
        assert second.token == "zzz999"
        assert second.origin == "http://backup.local:5001"

    def test_logout(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=LOGOUT_URL, json=MOCK_LOGOUT)

        client.logout(connection)

        params = httpx_mock.get_request().url.params
        assert params["method"] == "logout"
        assert params["_sid"] == "abc123"

    def test_logout_ignores_payload(self, client, connection, httpx_mock: HTTPXMock):
        """Whatever a successful logout returns in data is not decoded further."""
        httpx_mock.add_response(url=LOGOUT_URL, json={"data": {"error": "gone"}, "success": True})

        client.logout(connection)

    def test_login_ipv6_host(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=re.compile(r"^http://\[fd00::10\]:5000/webapi/auth\.cgi\?"),
            json=MOCK_AUTH,
        )

        conn = client.login("fd00::10", 5000, "admin", "pw")

        assert conn.origin == "http://[fd00::10]:5000"


class TestQueries:
    """Tests for the query operations."""

    def test_fetch_shares(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json=MOCK_SHARES)

        shares = fetch_shares(connection)

        assert shares.total == 1
        assert shares.shares[0].name == "homes"
        assert shares.shares[0].quota_value == 100.0
        assert shares.shares[0].share_quota_used == 42.5
        assert shares.shares[0].vol_path == "/volume1"

    def test_share_query_parameters(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json=MOCK_SHARES)

        fetch_shares(connection)

        request = httpx_mock.get_request()
        assert request.url.path == "/webapi/entry.cgi"
        params = request.url.params
        assert params["method"] == "list"
        assert params["version"] == "1"
        assert params["shareType"] == "all"
        assert params["additional"] == '["share_quota"]'
        assert params["_sid"] == "abc123"

    def test_fetch_system_utilization(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=UTILIZATION_URL, json=MOCK_UTILIZATION)

        utilization = fetch_system_utilization(connection)

        assert utilization.cpu.load_15min == 12
        assert utilization.memory.real_usage == 27
        assert utilization.time == 1700000000
        assert httpx_mock.get_request().url.params["method"] == "get"

    def test_fetch_storage_inventory(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=STORAGE_URL, json=MOCK_STORAGE)

        inventory = fetch_storage_inventory(connection)

        assert inventory.volumes[0].disks == ["sata1"]
        assert inventory.disks[0].id == "sata1"
        assert httpx_mock.get_request().url.params["method"] == "load_info"

    def test_fetch_with_timeout(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json=MOCK_SHARES)

        fetch_shares(connection, timeout=2.5)

        assert httpx_mock.get_request().extensions["timeout"]["read"] == 2.5

    def test_success_without_data_is_zero_valued(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json={"success": True})

        shares = client.get_share_info(connection)

        assert shares.shares == []
        assert shares.total == 0


class TestErrorMapping:
    """Tests for error classification of responses."""

    def test_api_failure_with_code(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json={"error": {"code": 119}, "success": False})

        with pytest.raises(APIError) as exc_info:
            client.get_share_info(connection)

        assert not isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.code == 119
        assert "Invalid session" in str(exc_info.value)

    def test_api_failure_with_empty_data(self, client, connection, httpx_mock: HTTPXMock):
        """success: false with no error block is an unknown-error APIError."""
        httpx_mock.add_response(url=STORAGE_URL, json={"success": False, "data": {}})

        with pytest.raises(APIError) as exc_info:
            client.get_storage_info(connection)

        assert exc_info.value.code == 100

    def test_http_error_status(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=UTILIZATION_URL, status_code=500, text="Internal Server Error")

        with pytest.raises(APIError) as exc_info:
            client.get_system_info(connection)

        assert exc_info.value.status_code == 500

    def test_body_not_json(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=UTILIZATION_URL, text="<html>DSM</html>")

        with pytest.raises(DecodeError) as exc_info:
            client.get_system_info(connection)

        assert exc_info.value.response_body == "<html>DSM</html>"

    def test_envelope_not_object(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=UTILIZATION_URL, json=["not", "an", "envelope"])

        with pytest.raises(DecodeError):
            client.get_system_info(connection)

    def test_payload_shape_mismatch(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=SHARE_URL, json={"data": {"shares": "homes"}, "success": True})

        with pytest.raises(DecodeError):
            client.get_share_info(connection)

    def test_numeric_string_rejected(self, client, connection, httpx_mock: HTTPXMock):
        payload = copy.deepcopy(MOCK_STORAGE)
        payload["data"]["disks"][0]["temp"] = "38"
        httpx_mock.add_response(url=STORAGE_URL, json=payload)

        with pytest.raises(DecodeError):
            client.get_storage_info(connection)

    @pytest.mark.parametrize(
        "field,value",
        [("is_usb_share", "false"), ("is_usb_share", 0), ("quota_value", "100"), ("name", 7)],
    )
    def test_wrong_json_type_rejected(self, field, value, client, connection, httpx_mock: HTTPXMock):
        """Values are never coerced across JSON types."""
        httpx_mock.add_response(
            url=SHARE_URL,
            json={"data": {"shares": [{"name": "homes", field: value}], "total": 1}, "success": True},
        )

        with pytest.raises(DecodeError):
            client.get_share_info(connection)

    def test_integer_accepted_for_float(self, client, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=SHARE_URL,
            json={"data": {"shares": [{"name": "homes", "quota_value": 100}], "total": 1}, "success": True},
        )

        shares = client.get_share_info(connection)

        assert shares.shares[0].quota_value == 100.0

    def test_connection_refused_during_query(self, connection, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        with pytest.raises(NetworkError):
            fetch_shares(connection)


def test_client_initialization():
    client = SynologyClient(timeout=15, verbose=True)

    assert client.timeout == 15
    assert client.verbose is True
