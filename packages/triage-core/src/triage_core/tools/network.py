"""
Network probes for diagnosing connectivity problems.

These tools run from the machine hosting the agent:
- TestConnectivity: TCP connect to host:port
- CheckDnsResolution: Resolve a hostname
- CheckHttpEndpoint: Request a URL and report status, latency and auth headers

A probe that reaches a negative verdict (refused, unresolvable, 5xx) returns
that verdict as text. Only malformed arguments raise.
"""

import asyncio
import socket
import time

import httpx

from triage_core.tools.base import Tool, ToolArgumentError

DEFAULT_CONNECT_TIMEOUT = 5.0

# Response headers worth showing the model
REPORTED_HEADERS = ("server", "content-type", "www-authenticate", "retry-after", "location")


def _parse_port(tool: Tool, value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ToolArgumentError(tool.name, tool.usage, f"port must be an integer, got '{value}'") from None
    if not 0 < port < 65536:
        raise ToolArgumentError(tool.name, tool.usage, f"port out of range: {port}")
    return port


class TestConnectivity(Tool):
    """TCP reachability check."""

    __test__ = False  # not a pytest test class

    name = "TestConnectivity"
    description = "Open a TCP connection to a host and port to check whether traffic gets through."
    usage = "<host> <port>"

    def __init__(self, timeout: float = DEFAULT_CONNECT_TIMEOUT) -> None:
        self.timeout = timeout

    async def execute(self, args: str) -> str:
        host, port_text = self.split_args(args, 2)
        port = _parse_port(self, port_text)

        started = time.perf_counter()
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            return (
                f"Connection to {host}:{port} FAILED: no response within {self.timeout}s "
                "(traffic may be silently dropped by a firewall or security rule)"
            )
        except OSError as e:
            return f"Connection to {host}:{port} FAILED: {e.strerror or e}"

        elapsed_ms = (time.perf_counter() - started) * 1000
        writer.close()
        await writer.wait_closed()
        return f"Connection to {host}:{port} SUCCEEDED in {elapsed_ms:.1f} ms"


class CheckDnsResolution(Tool):
    """Hostname resolution check."""

    name = "CheckDnsResolution"
    description = "Resolve a hostname and list the addresses it maps to."
    usage = "<hostname>"

    async def execute(self, args: str) -> str:
        (hostname,) = self.split_args(args, 1)

        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
        except socket.gaierror as e:
            return f"DNS resolution for {hostname} FAILED: {e.strerror or e}"

        addresses = sorted({info[4][0] for info in infos})
        if not addresses:
            return f"DNS resolution for {hostname} returned no addresses"
        return f"{hostname} resolves to: {', '.join(addresses)}"


class CheckHttpEndpoint(Tool):
    """HTTP status, latency and header check."""

    name = "CheckHttpEndpoint"
    description = (
        "Send a GET request to a URL and report status code, latency and "
        "relevant headers (including authentication challenges)."
    )
    usage = "<url> [expected_status]"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def execute(self, args: str) -> str:
        fields = self.split_args(args, 1, 2)
        url = fields[0]
        expected = None
        if len(fields) == 2:
            try:
                expected = int(fields[1])
            except ValueError:
                raise ToolArgumentError(
                    self.name, self.usage, f"expected_status must be an integer, got '{fields[1]}'"
                ) from None

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport, follow_redirects=False
        ) as client:
            started = time.perf_counter()
            try:
                response = await client.get(url)
            except httpx.TimeoutException:
                return f"GET {url} FAILED: timed out after {self.timeout}s"
            except httpx.HTTPError as e:
                return f"GET {url} FAILED: {type(e).__name__}: {e}"
            elapsed_ms = (time.perf_counter() - started) * 1000

        lines = [f"GET {url} -> {response.status_code} {response.reason_phrase} in {elapsed_ms:.1f} ms"]
        for header in REPORTED_HEADERS:
            if header in response.headers:
                lines.append(f"{header}: {response.headers[header]}")
        if expected is not None:
            verdict = "matches" if response.status_code == expected else "does NOT match"
            lines.append(f"Status {verdict} expected {expected}")
        return "\n".join(lines)
