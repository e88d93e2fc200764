"""Tests for network probe tools."""

import asyncio
import socket
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from triage_core.tools.base import ToolArgumentError
from triage_core.tools.network import CheckDnsResolution, CheckHttpEndpoint, TestConnectivity


class TestTestConnectivity:
    """Tests for the TCP probe."""

    @pytest.mark.asyncio
    async def test_open_port_succeeds(self):
        server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            result = await TestConnectivity().execute(f"127.0.0.1 {port}")
        finally:
            server.close()
            await server.wait_closed()

        assert result.startswith(f"Connection to 127.0.0.1:{port} SUCCEEDED in ")

    @pytest.mark.asyncio
    async def test_closed_port_fails_as_text(self):
        """A refused connection is a verdict, not an exception."""
        with socket.socket() as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]

        result = await TestConnectivity().execute(f"127.0.0.1 {port}")

        assert result.startswith(f"Connection to 127.0.0.1:{port} FAILED")

    @pytest.mark.asyncio
    async def test_timeout_reported(self):
        async def never_connects(host, port):
            await asyncio.sleep(5)

        with patch("triage_core.tools.network.asyncio.open_connection", never_connects):
            result = await TestConnectivity(timeout=0.01).execute("db.internal 1433")

        assert "FAILED: no response within 0.01s" in result

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", ["", "db.internal", "db.internal 1433 extra"])
    async def test_wrong_argument_count(self, args):
        with pytest.raises(ToolArgumentError) as exc_info:
            await TestConnectivity().execute(args)

        assert "Usage: TestConnectivity <host> <port>" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("port", ["db-subnet", "0", "70000"])
    async def test_invalid_port(self, port):
        with pytest.raises(ToolArgumentError):
            await TestConnectivity().execute(f"db.internal {port}")


class TestCheckDnsResolution:
    """Tests for the DNS probe."""

    @pytest.mark.asyncio
    async def test_resolves_addresses(self):
        infos = [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.5", 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.4", 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.4", 0)),
        ]
        loop = asyncio.get_running_loop()
        with patch.object(loop, "getaddrinfo", AsyncMock(return_value=infos)):
            result = await CheckDnsResolution().execute("db.internal")

        assert result == "db.internal resolves to: 10.0.0.4, 10.0.0.5"

    @pytest.mark.asyncio
    async def test_resolution_failure_as_text(self):
        loop = asyncio.get_running_loop()
        error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        with patch.object(loop, "getaddrinfo", AsyncMock(side_effect=error)):
            result = await CheckDnsResolution().execute("missing.internal")

        assert result == "DNS resolution for missing.internal FAILED: Name or service not known"


class TestCheckHttpEndpoint:
    """Tests for the HTTP probe using httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_reports_status_and_headers(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                headers={"www-authenticate": 'Bearer error="invalid_token"', "x-ignored": "1"},
            )

        tool = CheckHttpEndpoint(transport=httpx.MockTransport(handler))
        result = await tool.execute("https://api.example.com/health 200")

        lines = result.split("\n")
        assert lines[0].startswith("GET https://api.example.com/health -> 401 Unauthorized in ")
        assert 'www-authenticate: Bearer error="invalid_token"' in lines
        assert "x-ignored" not in result
        assert lines[-1] == "Status does NOT match expected 200"

    @pytest.mark.asyncio
    async def test_matching_status(self):
        tool = CheckHttpEndpoint(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        result = await tool.execute("https://api.example.com/ 200")

        assert result.endswith("Status matches expected 200")

    @pytest.mark.asyncio
    async def test_connection_error_as_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        tool = CheckHttpEndpoint(transport=httpx.MockTransport(handler))
        result = await tool.execute("https://down.example.com/")

        assert result == "GET https://down.example.com/ FAILED: ConnectError: connection refused"

    @pytest.mark.asyncio
    async def test_timeout_as_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        tool = CheckHttpEndpoint(timeout=2.0, transport=httpx.MockTransport(handler))
        result = await tool.execute("https://slow.example.com/")

        assert result == "GET https://slow.example.com/ FAILED: timed out after 2.0s"

    @pytest.mark.asyncio
    async def test_invalid_expected_status(self):
        with pytest.raises(ToolArgumentError):
            await CheckHttpEndpoint().execute("https://api.example.com/ ok")
