"""
Specialization registry.

A Specialization bundles everything that differs between specialist agents:
- Domain wording, focus areas and examples used to build prompt templates
- A tool factory producing the tool set for the domain

Adding a domain means registering a Specialization; the engine never
branches on category names.

Example:
    ```python
    registry = create_default_registry()
    spec = registry.resolve("networking")
    template = spec.diagnostic_template()
    tools = spec.tool_factory()
    ```
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from triage_protocols import ToolProtocol

from triage_core.agent.prompts import build_diagnostic_template, build_mitigation_template
from triage_core.exceptions import UnknownSpecializationError
from triage_core.tools.docker import (
    GetContainerLogs,
    InspectContainer,
    RestartContainer,
    StartContainer,
)
from triage_core.tools.network import CheckDnsResolution, CheckHttpEndpoint, TestConnectivity

logger = logging.getLogger(__name__)

DEFAULT_SPECIALIZATION = "general"


def normalize_name(name: str) -> str:
    """Canonical form of a specialization name (trimmed, lowercase)."""
    return name.strip().lower()


def _no_tools() -> list[ToolProtocol]:
    return []


@dataclass(frozen=True)
class Specialization:
    """
    Per-domain configuration for specialist agents.

    Attributes:
        name: Registry key (lowercase)
        domain: Wording used in prompts ("networking"); empty for the default
        diagnostic_focus: Common issues listed in the diagnostic prompt
        mitigation_guidance: Fix strategies listed in the mitigation prompt
        diagnostic_tool_example: Example USE_TOOL line payload for diagnosis
        diagnosis_example: Example DIAGNOSIS line payload
        mitigation_tool_example: Example USE_TOOL line payload for mitigation
        mitigation_example: Example MITIGATION_COMPLETE line payload
        tool_factory: Builds the domain's tool set
    """

    name: str
    domain: str = ""
    diagnostic_focus: tuple[str, ...] = ()
    mitigation_guidance: tuple[str, ...] = ()
    diagnostic_tool_example: str = "<ToolName> <arguments>"
    diagnosis_example: str = "<one-line description of the root cause>"
    mitigation_tool_example: str = "<ToolName> <arguments>"
    mitigation_example: str = "<one-line summary of the fix and how it was verified>"
    tool_factory: Callable[[], list[ToolProtocol]] = _no_tools

    def diagnostic_template(self) -> str:
        return build_diagnostic_template(self)

    def mitigation_template(self) -> str:
        return build_mitigation_template(self)


class SpecializationRegistry:
    """
    Name to Specialization lookup with a default entry.

    Names are matched case-insensitively. resolve() never fails: unknown
    names map to the default specialization. get() is the strict variant.
    """

    def __init__(
        self,
        specializations: Iterable[Specialization] = (),
        default: str = DEFAULT_SPECIALIZATION,
    ) -> None:
        self._lock = threading.Lock()
        self._specializations: dict[str, Specialization] = {}
        self._default = normalize_name(default)
        for specialization in specializations:
            self.register(specialization)

    @property
    def default_name(self) -> str:
        return self._default

    def register(self, specialization: Specialization) -> None:
        """Add or replace a specialization."""
        with self._lock:
            self._specializations[normalize_name(specialization.name)] = specialization

    def get(self, name: str) -> Specialization:
        """
        Strict lookup.

        Raises:
            UnknownSpecializationError: If no specialization has this name
        """
        specialization = self._specializations.get(normalize_name(name))
        if specialization is None:
            raise UnknownSpecializationError(name, self.names())
        return specialization

    def resolve(self, name: str) -> Specialization:
        """
        Lookup with fallback to the default specialization.

        Raises:
            UnknownSpecializationError: If neither the name nor the default
                is registered
        """
        key = normalize_name(name)
        if key in self._specializations:
            return self._specializations[key]
        logger.info("Unknown specialization %r, using default %r", name, self._default)
        return self.get(self._default)

    def names(self) -> list[str]:
        """All registered names, sorted."""
        return sorted(self._specializations)

    def categories(self) -> list[str]:
        """Routable categories: every registered name except the default."""
        return [name for name in self.names() if name != self._default]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._specializations

    def __len__(self) -> int:
        return len(self._specializations)


def _network_probes() -> list[ToolProtocol]:
    return [TestConnectivity(), CheckDnsResolution(), CheckHttpEndpoint()]


def _database_tools() -> list[ToolProtocol]:
    return [TestConnectivity(), CheckDnsResolution()]


def _authentication_tools() -> list[ToolProtocol]:
    return [CheckHttpEndpoint()]


def _performance_tools() -> list[ToolProtocol]:
    return [CheckHttpEndpoint(), InspectContainer()]


def _availability_tools() -> list[ToolProtocol]:
    return [InspectContainer(), GetContainerLogs(), RestartContainer(), StartContainer()]


NETWORKING = Specialization(
    name="networking",
    domain="networking",
    diagnostic_focus=(
        "Firewall or security group rules blocking traffic",
        "DNS resolution issues",
        "Connectivity between services",
        "Load balancer configuration issues",
        "Virtual network configuration",
        "Public IP and private IP address issues",
    ),
    mitigation_guidance=(
        "If firewall rules are blocking traffic, propose specific rule changes",
        "If DNS resolution is failing, suggest DNS configuration changes",
        "If services can't connect, recommend connectivity solutions",
        "If load balancer is misconfigured, provide configuration fixes",
    ),
    diagnostic_tool_example="TestConnectivity sql.internal 1433",
    diagnosis_example="Security group rule blocking port 443 traffic to the web tier",
    mitigation_tool_example="TestConnectivity sql.internal 1433",
    mitigation_example="Opened port 1433 from the app subnet and verified connectivity",
    tool_factory=_network_probes,
)

DATABASE = Specialization(
    name="database",
    domain="database",
    diagnostic_focus=(
        "Connection string problems",
        "Firewall rules blocking connections",
        "Query timeouts and performance issues",
        "Database capacity and scaling",
        "High CPU or memory usage",
        "Authentication and permission issues",
    ),
    mitigation_guidance=(
        "If the server is unreachable, propose firewall or network changes",
        "If connection strings are wrong, show the corrected value",
        "If queries time out, recommend indexing or scaling changes",
        "If capacity is exhausted, suggest scaling or archiving data",
    ),
    diagnostic_tool_example="TestConnectivity db.internal 5432",
    diagnosis_example="Database CPU utilization at 100% causing query timeouts",
    mitigation_tool_example="TestConnectivity db.internal 5432",
    mitigation_example="Added client subnet to the database firewall and verified connectivity",
    tool_factory=_database_tools,
)

AUTHENTICATION = Specialization(
    name="authentication",
    domain="authentication",
    diagnostic_focus=(
        "Identity provider integration problems",
        "Token acquisition failures",
        "CORS configuration issues",
        "Service principal problems",
        "Managed identity configuration",
        "Role-based permission issues",
    ),
    mitigation_guidance=(
        "If tokens are rejected, identify the missing scope or audience",
        "If permissions are missing, list the exact role assignment to add",
        "If CORS blocks requests, provide the allowed origin configuration",
        "If certificates are invalid, describe how to renew or re-trust them",
    ),
    diagnostic_tool_example="CheckHttpEndpoint https://api.example.com/health 200",
    diagnosis_example="Service principal missing required permissions for Key Vault access",
    mitigation_tool_example="CheckHttpEndpoint https://api.example.com/health 200",
    mitigation_example="Granted the app identity read access to the secret store",
    tool_factory=_authentication_tools,
)

PERFORMANCE = Specialization(
    name="performance",
    domain="performance",
    diagnostic_focus=(
        "Hosting plan scaling and limitations",
        "High CPU or memory usage",
        "Slow database queries",
        "Network latency issues",
        "Cache configuration",
        "Resource contention",
    ),
    mitigation_guidance=(
        "If resources are saturated, recommend scaling up or out",
        "If a hot code path is identified, suggest caching or optimization",
        "If dependencies are slow, propose timeouts and connection limits",
    ),
    diagnostic_tool_example="CheckHttpEndpoint https://app.example.com/ 200",
    diagnosis_example="App hitting memory limits causing frequent application restarts",
    mitigation_tool_example="InspectContainer web-frontend",
    mitigation_example="Raised the memory limit and confirmed restarts stopped",
    tool_factory=_performance_tools,
)

AVAILABILITY = Specialization(
    name="availability",
    domain="availability",
    diagnostic_focus=(
        "High CPU or memory usage makes the app unresponsive",
        "High request count makes the app unresponsive",
        "Image pull failures in the logs prevent the latest revision from starting",
    ),
    mitigation_guidance=(
        "If the app is stopped or crashed, start or restart it",
        "If resource pressure is the cause, recommend scaling or limit changes",
        "If the image cannot be pulled, point out the credential or tag to fix",
    ),
    diagnostic_tool_example="GetContainerLogs web-frontend 200",
    diagnosis_example="Image pull failure due to incorrect credentials",
    mitigation_tool_example="RestartContainer web-frontend",
    mitigation_example="Restarted web-frontend and confirmed it is running",
    tool_factory=_availability_tools,
)

GENERAL = Specialization(
    name=DEFAULT_SPECIALIZATION,
    tool_factory=_network_probes,
)

BUILTIN_SPECIALIZATIONS = (NETWORKING, DATABASE, AUTHENTICATION, PERFORMANCE, AVAILABILITY, GENERAL)


def create_default_registry() -> SpecializationRegistry:
    """Build a registry holding the built-in specializations."""
    return SpecializationRegistry(BUILTIN_SPECIALIZATIONS, default=DEFAULT_SPECIALIZATION)
