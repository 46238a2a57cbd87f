"""DTOs for Zabbix hosts and alerts."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from netwatch.domain.entities.zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    HostStatus,
    MetricType,
    ZabbixAlert,
    ZabbixHost,
)


class HostDTO(BaseModel):
    """Serializable representation of a monitored host."""

    id: str = Field(description="Zabbix host id")
    name: str = Field(description="Visible host name")
    host: str = Field(description="Technical host name")
    status: HostStatus
    available: HostAvailability
    ip: str = "N/A"
    dns: str = "N/A"
    groups: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, host: ZabbixHost) -> "HostDTO":
        return cls(
            id=host.id,
            name=host.name,
            host=host.host,
            status=host.status,
            available=host.available,
            ip=host.ip,
            dns=host.dns,
            groups=list(host.groups),
        )


class AlertDTO(BaseModel):
    """Serializable representation of an active alert."""

    id: str = Field(description="Zabbix trigger id")
    title: str
    host: str
    severity: AlertSeverity
    timestamp: datetime = Field(description="Last state change of the trigger")
    description: str
    acknowledged: bool = False

    @classmethod
    def from_domain(cls, alert: ZabbixAlert) -> "AlertDTO":
        return cls(
            id=alert.id,
            title=alert.title,
            host=alert.host,
            severity=alert.severity,
            timestamp=alert.timestamp,
            description=alert.description,
            acknowledged=alert.acknowledged,
        )


class HostMetricDTO(BaseModel):
    """Latest value of a Zabbix item, normalized for display."""

    host_id: str
    host_name: str
    item_id: str
    name: str = Field(description="Item name as configured in Zabbix")
    key: str = Field(description="Zabbix item key")
    value: float
    units: str
    type: MetricType
    last_update: Optional[datetime] = Field(
        default=None, description="Time of the last collected value"
    )

    @classmethod
    def from_domain(cls, metric: HostMetric) -> "HostMetricDTO":
        return cls(
            host_id=metric.host_id,
            host_name=metric.host_name,
            item_id=metric.item_id,
            name=metric.name,
            key=metric.key,
            value=metric.value,
            units=metric.units,
            type=metric.type,
            last_update=metric.last_update,
        )
