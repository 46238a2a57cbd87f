"""DTOs for the /health and /info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from netwatch.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
    ZabbixEndpoint,
)


class DependencyStatusDTO(BaseModel):
    name: str = Field(description="Dependency identifier")
    status: ServiceStatus
    message: Optional[str] = Field(default=None, description="Check outcome")
    checked_at: datetime = Field(description="When the check ran")
    latency_ms: Optional[float] = Field(
        default=None, description="Check round trip in milliseconds"
    )
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            details=status.details,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "zabbix",
                "status": "up",
                "message": "Zabbix API 7.0.3",
                "checked_at": "2024-09-17T12:00:00Z",
                "latency_ms": 35.2,
                "details": {"url": "http://zabbix.local/", "api_version": "7.0.3"},
            }
        }
    }


def _dependencies(items: List[DependencyStatus]) -> List[DependencyStatusDTO]:
    return [DependencyStatusDTO.from_domain(item) for item in items]


class SystemHealthDTO(BaseModel):
    """Body of GET /health."""

    status: ServiceStatus = Field(description="Worst status among dependencies")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(status=health.status, dependencies=_dependencies(health.dependencies))


class ZabbixEndpointDTO(BaseModel):
    url: str = Field(description="Zabbix frontend URL with credentials removed")
    api_version: Optional[str] = Field(
        default=None, description="Reported by apiinfo.version when reachable"
    )

    @classmethod
    def from_domain(cls, endpoint: ZabbixEndpoint) -> "ZabbixEndpointDTO":
        return cls(url=endpoint.url, api_version=endpoint.api_version)


class ApplicationInfoDTO(BaseModel):
    """Body of GET /info."""

    name: str
    description: str
    version: str
    environment: str = Field(description="Deployment environment")
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    zabbix: ZabbixEndpointDTO
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            zabbix=ZabbixEndpointDTO.from_domain(info.zabbix),
            dependencies=_dependencies(info.dependencies),
        )
