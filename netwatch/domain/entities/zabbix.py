"""Domain entities for Zabbix hosts and alerts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class HostStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class HostAvailability(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MetricType(str, Enum):
    CPU = "cpu"
    MEMORY = "memory"
    PING = "ping"
    NETWORK = "network"
    DISK = "disk"
    UPTIME = "uptime"
    LOAD = "load"
    PROCESSES = "processes"
    SWAP = "swap"
    OTHER = "other"


@dataclass(slots=True)
class ZabbixHost:
    """Represents a host monitored by Zabbix."""

    id: str
    name: str
    host: str
    status: HostStatus
    available: HostAvailability
    ip: str = "N/A"
    dns: str = "N/A"
    groups: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ZabbixAlert:
    """Represents an active (problem state) Zabbix trigger."""

    id: str
    title: str
    host: str
    severity: AlertSeverity
    timestamp: datetime
    description: str
    acknowledged: bool = False


@dataclass(slots=True)
class HostMetric:
    """Latest value of one monitored item, already normalized for display."""

    host_id: str
    host_name: str
    item_id: str
    name: str
    key: str
    value: float
    units: str
    type: MetricType
    last_update: Optional[datetime] = None
