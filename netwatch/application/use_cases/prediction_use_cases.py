"""
Application Use Cases - Instability Prediction

Two entry points share the same predictor:
  * scoring a metrics bundle supplied by the caller
  * fetching the bundle for a host from Zabbix and scoring it
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog

from netwatch.application.dtos.prediction_dto import (
    CriticalMetricsDTO,
    HostPredictionResponseDTO,
    PredictionResultDTO,
)
from netwatch.domain.entities.errors import HostNotFoundError, ZabbixApiError
from netwatch.domain.entities.metrics import TimeRange
from netwatch.domain.entities.prediction import PredictionResult
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway
from netwatch.domain.services.instability_predictor import InstabilityPredictor

logger = structlog.get_logger(__name__)


class PredictionError(Exception):
    """Base exception for prediction failures."""

    pass


class PredictionNotFoundError(PredictionError):
    """Raised when the host to predict for does not exist."""

    pass


class PredictionDependencyError(PredictionError):
    """Raised when Zabbix fails to deliver the host history."""

    pass


def _log_result(event: str, result: PredictionResult, **context) -> None:
    logger.info(
        event,
        risk_level=result.risk_level.value,
        risk_score=result.risk_score,
        eta_minutes=result.eta_minutes,
        factor_count=len(result.factors),
        **context,
    )


class EvaluateMetricsUseCase:
    """Score a metrics bundle posted by the caller."""

    def __init__(self, predictor: InstabilityPredictor) -> None:
        self._predictor = predictor

    def execute(
        self,
        metrics: Optional[CriticalMetricsDTO],
        now: Optional[datetime] = None,
    ) -> PredictionResultDTO:
        domain_metrics = metrics.to_domain() if metrics is not None else None
        result = self._predictor.predict(domain_metrics, now=now)
        _log_result("prediction.evaluate.completed", result)
        return PredictionResultDTO.from_domain(result)


class PredictHostInstabilityUseCase:
    """Fetch the critical history of a host and score it."""

    def __init__(
        self,
        zabbix_gateway: IZabbixGateway,
        predictor: InstabilityPredictor,
    ) -> None:
        self._zabbix_gateway = zabbix_gateway
        self._predictor = predictor

    async def execute(
        self,
        host_id: str,
        time_range: TimeRange = TimeRange.ONE_HOUR,
        now: Optional[datetime] = None,
    ) -> HostPredictionResponseDTO:
        """
        Predict instability for ``host_id`` from its recent Zabbix history.

        Raises:
            PredictionNotFoundError: When Zabbix does not know the host
            PredictionDependencyError: When Zabbix cannot be queried
        """
        logger.info(
            "prediction.host.start", host_id=host_id, time_range=time_range.value
        )

        try:
            history = await self._zabbix_gateway.get_critical_history(
                host_id, time_range, now=now
            )
        except HostNotFoundError as exc:
            logger.warning("prediction.host.not_found", host_id=host_id)
            raise PredictionNotFoundError(exc.message) from exc
        except ZabbixApiError as exc:
            logger.error(
                "prediction.host.zabbix_failure",
                host_id=host_id,
                error=exc.message,
                details=exc.details,
            )
            raise PredictionDependencyError(
                f"Unable to collect history for host {host_id}: {exc.message}"
            ) from exc

        result = self._predictor.predict(history.metrics, now=now)
        _log_result(
            "prediction.host.completed",
            result,
            host_id=host_id,
            sample_counts=history.metrics.sample_counts(),
        )
        return HostPredictionResponseDTO.from_domain(history, result)
