"""Use cases behind /health and /info."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from netwatch.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from netwatch.application.models import SystemInfo
from netwatch.domain.entities.health import ApplicationInfo, ZabbixEndpoint
from netwatch.domain.ports.health_check import IHealthCheckService


def redact_url(url: str) -> str:
    """Drop ``user:password@`` from a URL so it can be shown to clients."""

    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url

    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit(parsed._replace(netloc=netloc))


class GetHealthStatusUseCase:
    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Build /info from static build metadata and a fresh Zabbix check."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        zabbix = system_health.find("zabbix")
        api_version = zabbix.details.get("api_version") if zabbix else None

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            status=system_health.status,
            zabbix=ZabbixEndpoint(
                url=redact_url(self._info.zabbix_url),
                api_version=api_version,
            ),
            dependencies=system_health.dependencies,
        )

        return ApplicationInfoDTO.from_domain(info)
