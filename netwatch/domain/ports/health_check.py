"""Port through which the application layer asks for upstream health."""

from __future__ import annotations

from typing import Protocol

from netwatch.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self) -> SystemHealth:
        """Check Zabbix and fold the result into a ``SystemHealth``."""
        ...
