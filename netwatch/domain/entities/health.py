"""
Health domain entities.

Netwatch has a single upstream, the Zabbix JSON-RPC API. Its reachability
decides the status reported by /health and /info.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"

    @property
    def weight(self) -> int:
        """Ordering used when folding several statuses into one."""
        return _STATUS_WEIGHT[self]


# DOWN dominates; a degraded dependency outranks one that was never checked.
_STATUS_WEIGHT = {
    ServiceStatus.UP: 0,
    ServiceStatus.UNKNOWN: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DOWN: 3,
}


@dataclass(slots=True)
class DependencyStatus:
    """Outcome of probing one upstream."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, dependencies: Iterable[DependencyStatus]) -> "SystemHealth":
        """Fold dependency checks into the overall status (UP when empty)."""

        checked = list(dependencies)
        status = max(
            (dependency.status for dependency in checked),
            key=lambda item: item.weight,
            default=ServiceStatus.UP,
        )
        return cls(status=status, dependencies=checked)

    def find(self, name: str) -> Optional[DependencyStatus]:
        return next((dep for dep in self.dependencies if dep.name == name), None)


@dataclass(slots=True)
class ZabbixEndpoint:
    """Where netwatch reads metrics from, as shown to operators."""

    url: str
    api_version: Optional[str] = None


@dataclass(slots=True)
class ApplicationInfo:
    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    zabbix: ZabbixEndpoint
    dependencies: List[DependencyStatus] = field(default_factory=list)
