"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import DomainError, HostNotFoundError, ZabbixApiError
from .health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
    ZabbixEndpoint,
)
from .metrics import (
    CriticalMetrics,
    HostCriticalHistory,
    MetricSample,
    Signal,
    TimeRange,
    to_epoch_ms,
)
from .overview import (
    AlertSummary,
    HostSummary,
    Overview,
    OverviewStatus,
    PerformanceSummary,
)
from .prediction import PredictionResult, RiskLevel
from .zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    HostStatus,
    MetricType,
    ZabbixAlert,
    ZabbixHost,
)

__all__ = [
    "MetricSample",
    "CriticalMetrics",
    "HostCriticalHistory",
    "Signal",
    "TimeRange",
    "to_epoch_ms",
    "PredictionResult",
    "RiskLevel",
    "ZabbixHost",
    "ZabbixAlert",
    "HostStatus",
    "HostAvailability",
    "AlertSeverity",
    "HostMetric",
    "MetricType",
    "Overview",
    "OverviewStatus",
    "HostSummary",
    "AlertSummary",
    "PerformanceSummary",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "ZabbixEndpoint",
    "DomainError",
    "ZabbixApiError",
    "HostNotFoundError",
]
