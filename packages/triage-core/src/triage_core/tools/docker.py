"""Container tools for availability diagnosis and mitigation.

Wraps python-on-whales for non-blocking Docker operations. Every blocking
call runs in the default executor so the event loop stays responsive while
the daemon answers. Results are rendered as JSON text for the model.

NoSuchContainer propagates; the ToolInvoker reports it to the model as a
tool failure.
"""

import asyncio
import json
from typing import Any

from python_on_whales import docker

from triage_core.tools.base import Tool, ToolArgumentError

# Maximum number of log lines to retrieve (prevent memory exhaustion)
MAX_TAIL = 10000
DEFAULT_TAIL = 100


def _to_text(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, default=str)


class InspectContainer(Tool):
    """Read-only container status."""

    name = "InspectContainer"
    description = (
        "Show a container's image, state (running, exit code, restart count, "
        "OOM kill) and attached networks."
    )
    usage = "<container>"

    async def execute(self, args: str) -> str:
        (container_id,) = self.split_args(args, 1)
        loop = asyncio.get_running_loop()

        def _blocking_inspect() -> dict[str, Any]:
            container = docker.container.inspect(container_id)

            started_at = None
            if container.state.started_at:
                started_at = container.state.started_at.isoformat()

            return {
                "id": container.id,
                "name": container.name,
                "image": container.config.image,
                "state": {
                    "status": container.state.status,
                    "running": container.state.running,
                    "restarting": container.state.restarting,
                    "oom_killed": container.state.oom_killed,
                    "exit_code": container.state.exit_code or 0,
                    "error": container.state.error or None,
                    "started_at": started_at,
                },
                "restart_count": container.restart_count,
                "networks": list(container.network_settings.networks.keys()),
            }

        return _to_text(await loop.run_in_executor(None, _blocking_inspect))


class GetContainerLogs(Tool):
    """Recent container log lines."""

    name = "GetContainerLogs"
    description = "Fetch the most recent log lines of a container (default 100, max 10000)."
    usage = "<container> [tail]"

    async def execute(self, args: str) -> str:
        fields = self.split_args(args, 1, 2)
        container_id = fields[0]
        tail = DEFAULT_TAIL
        if len(fields) == 2:
            try:
                tail = int(fields[1])
            except ValueError:
                raise ToolArgumentError(
                    self.name, self.usage, f"tail must be an integer, got '{fields[1]}'"
                ) from None
        effective_tail = min(max(tail, 1), MAX_TAIL)
        loop = asyncio.get_running_loop()

        def _blocking_get_logs() -> str:
            # Never follow: it would block indefinitely
            return docker.container.logs(
                container_id,
                tail=effective_tail,
                timestamps=True,
                follow=False,
            )

        logs = await loop.run_in_executor(None, _blocking_get_logs)
        line_count = len(logs.splitlines()) if logs else 0
        header = f"Last {line_count} log line(s) of {container_id} (tail={effective_tail}):"
        return f"{header}\n{logs}" if logs else f"{header}\n(no output)"


class RestartContainer(Tool):
    """Restart a container (mitigation)."""

    name = "RestartContainer"
    description = "Restart a container with a graceful stop timeout. Changes the running system."
    usage = "<container> [stop_timeout_seconds]"

    async def execute(self, args: str) -> str:
        fields = self.split_args(args, 1, 2)
        container_id = fields[0]
        timeout = 10
        if len(fields) == 2:
            try:
                timeout = int(fields[1])
            except ValueError:
                raise ToolArgumentError(
                    self.name, self.usage, f"stop_timeout_seconds must be an integer, got '{fields[1]}'"
                ) from None
        loop = asyncio.get_running_loop()

        def _blocking_restart() -> dict[str, Any]:
            docker.container.restart(container_id, time=timeout)
            container = docker.container.inspect(container_id)
            return {
                "container_id": container.id,
                "name": container.name,
                "state": container.state.status,
                "running": container.state.running,
            }

        return _to_text(await loop.run_in_executor(None, _blocking_restart))


class StartContainer(Tool):
    """Start a stopped container (mitigation)."""

    name = "StartContainer"
    description = "Start a stopped container. Starting a running container is a no-op."
    usage = "<container>"

    async def execute(self, args: str) -> str:
        (container_id,) = self.split_args(args, 1)
        loop = asyncio.get_running_loop()

        def _blocking_start() -> dict[str, Any]:
            container = docker.container.inspect(container_id)
            already_running = container.state.running
            if not already_running:
                docker.container.start(container_id)
                container = docker.container.inspect(container_id)

            return {
                "container_id": container.id,
                "name": container.name,
                "state": container.state.status,
                "running": container.state.running,
                "already_running": already_running,
            }

        return _to_text(await loop.run_in_executor(None, _blocking_start))
