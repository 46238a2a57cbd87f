"""Fleet-wide summary entities behind the overview endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class OverviewStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class HostSummary:
    online: int
    offline: int
    total: int
    online_percentage: int


@dataclass(frozen=True, slots=True)
class AlertSummary:
    critical: int
    high: int
    medium: int
    low: int
    total: int


@dataclass(frozen=True, slots=True)
class PerformanceSummary:
    """Averages over the latest item values; 0.0 when no item reports."""

    avg_response_time_ms: float
    avg_cpu_usage: float
    avg_memory_usage: float
    packet_loss: float
    active_hosts: int
    total_metrics: int


@dataclass(frozen=True, slots=True)
class Overview:
    status: OverviewStatus
    hosts: HostSummary
    alerts: AlertSummary
    performance: PerformanceSummary
    generated_at: datetime
