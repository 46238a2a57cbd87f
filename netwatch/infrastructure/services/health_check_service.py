"""Check the Zabbix API and report it as the /health dependency."""

from __future__ import annotations

from time import perf_counter
from typing import Optional

import structlog

from netwatch.domain.entities.errors import ZabbixApiError
from netwatch.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway
from netwatch.domain.ports.health_check import IHealthCheckService

logger = structlog.get_logger(__name__)

ZABBIX_DEPENDENCY = "zabbix"


class HealthCheckService(IHealthCheckService):
    def __init__(
        self,
        zabbix_gateway: Optional[IZabbixGateway],
        zabbix_url: str,
        zabbix_token: str,
    ) -> None:
        self._zabbix_gateway = zabbix_gateway
        self._zabbix_url = zabbix_url
        self._zabbix_token = zabbix_token

    async def evaluate(self) -> SystemHealth:
        try:
            zabbix = await self._check_zabbix()
        except Exception as exc:
            logger.warning(
                "health.check_failed", dependency=ZABBIX_DEPENDENCY, error=str(exc)
            )
            zabbix = DependencyStatus(
                name=ZABBIX_DEPENDENCY, status=ServiceStatus.DOWN, message=str(exc)
            )

        return SystemHealth.from_dependencies([zabbix])

    async def _check_zabbix(self) -> DependencyStatus:
        if not self._zabbix_url or self._zabbix_gateway is None:
            return DependencyStatus(
                name=ZABBIX_DEPENDENCY,
                status=ServiceStatus.UNKNOWN,
                message="Zabbix URL not configured.",
            )

        start = perf_counter()
        try:
            version = await self._zabbix_gateway.get_api_version()
        except ZabbixApiError as exc:
            return DependencyStatus(
                name=ZABBIX_DEPENDENCY,
                status=ServiceStatus.DOWN,
                message=f"Zabbix API unreachable: {exc.message}",
                latency_ms=(perf_counter() - start) * 1000,
                details={"url": self._zabbix_url},
            )

        latency_ms = (perf_counter() - start) * 1000
        details = {"url": self._zabbix_url, "api_version": version}

        # apiinfo.version is anonymous, so a missing token only shows up here.
        if not self._zabbix_token:
            status, message = (
                ServiceStatus.DEGRADED,
                "Zabbix reachable but API token not configured",
            )
        else:
            status, message = ServiceStatus.UP, f"Zabbix API {version}"

        logger.debug("health.zabbix.checked", status=status.value, latency_ms=latency_ms)
        return DependencyStatus(
            name=ZABBIX_DEPENDENCY,
            status=status,
            message=message,
            latency_ms=latency_ms,
            details=details,
        )
