"""
Use Cases Package - Application Layer

Use cases orchestrate gateways and domain services for the controllers.
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .host_use_cases import GetAlertsUseCase, GetHostsUseCase, GetLatestMetricsUseCase
from .overview_use_cases import GetOverviewUseCase
from .prediction_use_cases import (
    EvaluateMetricsUseCase,
    PredictHostInstabilityUseCase,
    PredictionDependencyError,
    PredictionError,
    PredictionNotFoundError,
)

__all__ = [
    "EvaluateMetricsUseCase",
    "PredictHostInstabilityUseCase",
    "PredictionError",
    "PredictionNotFoundError",
    "PredictionDependencyError",
    "GetHostsUseCase",
    "GetAlertsUseCase",
    "GetLatestMetricsUseCase",
    "GetOverviewUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
