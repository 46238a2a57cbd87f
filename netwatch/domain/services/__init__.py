"""Domain services."""

from .instability_predictor import (
    DEFAULT_RULES,
    InstabilityPredictor,
    RuleLadder,
    ScoringRule,
    classify_risk,
)
from .metric_catalog import classify_item_key, metric_type, normalize_metric_value
from .overview import build_overview

__all__ = [
    "InstabilityPredictor",
    "RuleLadder",
    "ScoringRule",
    "DEFAULT_RULES",
    "classify_risk",
    "classify_item_key",
    "metric_type",
    "normalize_metric_value",
    "build_overview",
]
