"""
Presentation Layer - Predictions Controller

Exposes the instability predictor, either over a metrics bundle supplied by
the caller or over the recent Zabbix history of a host.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from netwatch.application.dtos.prediction_dto import (
    CriticalMetricsDTO,
    HostPredictionResponseDTO,
    PredictionResultDTO,
)
from netwatch.application.use_cases.prediction_use_cases import (
    EvaluateMetricsUseCase,
    PredictHostInstabilityUseCase,
    PredictionDependencyError,
    PredictionError,
    PredictionNotFoundError,
)
from netwatch.domain.entities.metrics import TimeRange

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Predictions"])


@router.post(
    "/predictions/evaluate",
    response_model=PredictionResultDTO,
    summary="Score a metrics bundle",
    description="""
    Run the instability predictor over ping, latency, CPU and memory samples
    supplied in the request body. Samples are windowed relative to the time
    of the request; an empty or missing bundle yields the low-risk default.
    """,
)
@inject
async def evaluate_metrics(
    metrics: Optional[CriticalMetricsDTO] = Body(default=None),
    evaluate_use_case: EvaluateMetricsUseCase = Depends(
        Provide["evaluate_metrics_use_case"]
    ),
) -> PredictionResultDTO:
    try:
        return evaluate_use_case.execute(metrics)
    except Exception as exc:  # pragma: no cover
        logger.error("prediction.evaluate.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get(
    "/hosts/{host_id}/prediction",
    response_model=HostPredictionResponseDTO,
    summary="Predict instability for a Zabbix host",
)
@inject
async def predict_host(
    host_id: str = Path(..., description="Zabbix host ID"),
    time_range: TimeRange = Query(
        default=TimeRange.ONE_HOUR, description="History lookback fetched from Zabbix"
    ),
    prediction_use_case: PredictHostInstabilityUseCase = Depends(
        Provide["predict_host_instability_use_case"]
    ),
) -> HostPredictionResponseDTO:
    try:
        return await prediction_use_case.execute(host_id, time_range)
    except PredictionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except PredictionDependencyError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    except PredictionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except Exception as exc:  # pragma: no cover
        logger.error(
            "prediction.host.unexpected_error",
            host_id=host_id,
            time_range=time_range.value,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
