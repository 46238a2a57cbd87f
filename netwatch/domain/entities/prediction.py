"""Domain entities for instability predictions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


class RiskLevel(str, Enum):
    """Risk classification derived from the risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(slots=True)
class PredictionResult:
    """Outcome of one predictor invocation. A value, never persisted."""

    risk_level: RiskLevel
    risk_score: int
    recommendation: str
    eta_minutes: Optional[int] = None
    factors: List[str] = field(default_factory=list)
    last_update: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
