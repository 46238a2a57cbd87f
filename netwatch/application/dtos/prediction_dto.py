"""
Application DTOs - Prediction

Data Transfer Objects for the metrics bundle accepted by the predictor and
for the prediction results it produces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from netwatch.domain.entities.metrics import (
    CriticalMetrics,
    HostCriticalHistory,
    MetricSample,
    TimeRange,
)
from netwatch.domain.entities.prediction import PredictionResult, RiskLevel


class MetricSampleDTO(BaseModel):
    """A single time-series observation."""

    timestamp: int = Field(ge=0, description="Sample time in epoch milliseconds")
    value: float = Field(description="Observed value")

    def to_domain(self) -> MetricSample:
        return MetricSample(timestamp=self.timestamp, value=self.value)


class CriticalMetricsDTO(BaseModel):
    """Ping, latency, cpu and memory series for one host."""

    ping: List[MetricSampleDTO] = Field(
        default_factory=list, description="Ping results: 1 succeeded, 0 failed"
    )
    latency: List[MetricSampleDTO] = Field(
        default_factory=list, description="Round-trip latency in milliseconds"
    )
    cpu: List[MetricSampleDTO] = Field(
        default_factory=list, description="CPU utilization in percent"
    )
    memory: List[MetricSampleDTO] = Field(
        default_factory=list, description="Memory utilization in percent"
    )

    def to_domain(self) -> CriticalMetrics:
        return CriticalMetrics(
            ping=tuple(sample.to_domain() for sample in self.ping),
            latency=tuple(sample.to_domain() for sample in self.latency),
            cpu=tuple(sample.to_domain() for sample in self.cpu),
            memory=tuple(sample.to_domain() for sample in self.memory),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "ping": [
                    {"timestamp": 1726574400000, "value": 1},
                    {"timestamp": 1726574460000, "value": 0},
                ],
                "latency": [{"timestamp": 1726574400000, "value": 42.5}],
                "cpu": [{"timestamp": 1726574400000, "value": 71.2}],
                "memory": [{"timestamp": 1726574400000, "value": 64.0}],
            }
        }
    }


class PredictionResultDTO(BaseModel):
    """Serializable instability prediction."""

    risk_level: RiskLevel = Field(description="Risk classification")
    risk_score: int = Field(ge=0, le=100, description="Risk score from 0 to 100")
    eta_minutes: Optional[int] = Field(
        default=None,
        ge=0,
        description="Estimated minutes until an issue, when any rule proposes one",
    )
    factors: List[str] = Field(
        default_factory=list, description="Contributing factors in firing order"
    )
    recommendation: str = Field(description="Suggested operator action")
    last_update: datetime = Field(description="Instant the prediction refers to")

    @classmethod
    def from_domain(cls, result: PredictionResult) -> "PredictionResultDTO":
        return cls(
            risk_level=result.risk_level,
            risk_score=result.risk_score,
            eta_minutes=result.eta_minutes,
            factors=list(result.factors),
            recommendation=result.recommendation,
            last_update=result.last_update,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "risk_level": "critical",
                "risk_score": 90,
                "eta_minutes": 1,
                "factors": [
                    "high rate of ping failures",
                    "3+ consecutive ping failures",
                ],
                "recommendation": (
                    "IMMEDIATE ACTION: check host connectivity and resources"
                ),
                "last_update": "2024-09-17T12:00:00Z",
            }
        }
    }


class HostPredictionResponseDTO(BaseModel):
    """Prediction computed from the history Zabbix holds for a host."""

    host_id: str
    time_range: TimeRange
    sample_counts: Dict[str, int] = Field(
        default_factory=dict, description="Samples fetched per signal"
    )
    items: Dict[str, str] = Field(
        default_factory=dict, description="Zabbix item key used per signal"
    )
    prediction: PredictionResultDTO

    @classmethod
    def from_domain(
        cls, history: HostCriticalHistory, result: PredictionResult
    ) -> "HostPredictionResponseDTO":
        return cls(
            host_id=history.host_id,
            time_range=history.time_range,
            sample_counts=history.metrics.sample_counts(),
            items={signal.value: key for signal, key in history.items.items()},
            prediction=PredictionResultDTO.from_domain(result),
        )
