"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
presentation layer.
"""

from .health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
    ZabbixEndpointDTO,
)
from .host_dto import AlertDTO, HostDTO, HostMetricDTO
from .overview_dto import (
    AlertSummaryDTO,
    HostSummaryDTO,
    OverviewDTO,
    PerformanceSummaryDTO,
)
from .prediction_dto import (
    CriticalMetricsDTO,
    HostPredictionResponseDTO,
    MetricSampleDTO,
    PredictionResultDTO,
)

__all__ = [
    "MetricSampleDTO",
    "CriticalMetricsDTO",
    "PredictionResultDTO",
    "HostPredictionResponseDTO",
    "HostDTO",
    "AlertDTO",
    "HostMetricDTO",
    "OverviewDTO",
    "HostSummaryDTO",
    "AlertSummaryDTO",
    "PerformanceSummaryDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
    "ZabbixEndpointDTO",
]
