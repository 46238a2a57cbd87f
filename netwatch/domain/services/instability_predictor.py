"""
Domain Service - Instability Predictor

Fuses ping availability, latency, CPU and memory samples of a single host
into a risk score (0-100), a risk level, an estimated time to failure and the
list of factors that contributed to the score.

The scoring rules are plain data (``RuleLadder``/``ScoringRule``) evaluated in
table order. The order matters twice: it fixes the order of the reported
factors (ping, latency, cpu, memory) and, through ``min``, which rule's ETA is
reported.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from statistics import mean
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from netwatch.domain.entities.metrics import CriticalMetrics, Signal, to_epoch_ms
from netwatch.domain.entities.prediction import PredictionResult, RiskLevel

SHORT_WINDOW = timedelta(minutes=5)
LONG_WINDOW = timedelta(minutes=15)

MAX_RISK_SCORE = 100
CONSECUTIVE_FAILURES = 3
TREND_MIN_SAMPLES = 5
TREND_GROWTH_FACTOR = 1.3

AWAITING_DATA_RECOMMENDATION = "Awaiting data..."

# (minimum score, level, recommendation), highest band first.
RISK_BANDS: Tuple[Tuple[int, RiskLevel, str], ...] = (
    (
        80,
        RiskLevel.CRITICAL,
        "IMMEDIATE ACTION: check host connectivity and resources",
    ),
    (50, RiskLevel.HIGH, "Monitor closely and consider preventive maintenance"),
    (25, RiskLevel.MEDIUM, "Track metric trends"),
)
DEFAULT_RECOMMENDATION = "System operating normally"

Measure = Callable[[Sequence[float]], float]


def format_one_decimal(value: float) -> str:
    """Render ``value`` with one decimal, ties rounded away from zero."""
    if not math.isfinite(value):
        return f"{value:.1f}"
    exact = Decimal(value)
    with localcontext() as ctx:
        # Every integer digit plus one decimal must fit in the context precision.
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        return str(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def failure_rate(values: Sequence[float]) -> float:
    """Share of failed pings (value 0) in a ping series."""
    return sum(1 for value in values if value == 0) / len(values)


def trailing_failures(values: Sequence[float]) -> float:
    """Failed pings among the most recent ``CONSECUTIVE_FAILURES`` samples."""
    return sum(1 for value in values[-CONSECUTIVE_FAILURES:] if value == 0)


def trend_excess(values: Sequence[float]) -> float:
    """
    Positive when the newer half of the series averages more than
    ``TREND_GROWTH_FACTOR`` times the older half.

    The older half holds ``len(values) // 2`` samples, the newer half the rest.
    """
    half = len(values) // 2
    return mean(values[half:]) - mean(values[:half]) * TREND_GROWTH_FACTOR


@dataclass(frozen=True, slots=True)
class ScoringRule:
    """One threshold step of a ladder."""

    threshold: float
    score: int
    factor: str
    eta_minutes: Optional[int] = None
    inclusive: bool = False

    def matches(self, value: float) -> bool:
        if self.inclusive:
            return value >= self.threshold
        return value > self.threshold

    def describe(self, value: float) -> str:
        return self.factor.format(value=format_one_decimal(value))


@dataclass(frozen=True, slots=True)
class RuleLadder:
    """
    Rules applied to one measure of one signal; the first matching rule fires.

    ``requires`` lists other signals whose series must be non-empty in the
    same window for the ladder to be evaluated at all.
    """

    name: str
    signal: Signal
    window: timedelta
    measure: Measure
    rules: Tuple[ScoringRule, ...]
    min_samples: int = 1
    requires: Tuple[Signal, ...] = ()

    def first_match(self, value: float) -> Optional[ScoringRule]:
        for rule in self.rules:
            if rule.matches(value):
                return rule
        return None


DEFAULT_RULES: Tuple[RuleLadder, ...] = (
    RuleLadder(
        name="ping_failure_rate",
        signal=Signal.PING,
        window=LONG_WINDOW,
        measure=failure_rate,
        rules=(
            ScoringRule(0.5, 60, "high rate of ping failures", 2, inclusive=True),
            ScoringRule(0.3, 40, "intermittent ping failures", 5, inclusive=True),
            ScoringRule(0.0, 20, "occasional ping failures"),
        ),
    ),
    RuleLadder(
        name="ping_consecutive_failures",
        signal=Signal.PING,
        window=SHORT_WINDOW,
        measure=trailing_failures,
        rules=(
            ScoringRule(
                CONSECUTIVE_FAILURES,
                30,
                "3+ consecutive ping failures",
                1,
                inclusive=True,
            ),
        ),
        min_samples=CONSECUTIVE_FAILURES,
    ),
    RuleLadder(
        name="latency_average",
        signal=Signal.LATENCY,
        window=LONG_WINDOW,
        measure=mean,
        rules=(
            ScoringRule(200, 25, "high average latency ({value}ms)", 10),
            ScoringRule(100, 15, "elevated latency ({value}ms)"),
        ),
    ),
    RuleLadder(
        name="latency_peak",
        signal=Signal.LATENCY,
        window=LONG_WINDOW,
        measure=max,
        rules=(ScoringRule(500, 20, "extreme latency spikes ({value}ms)"),),
    ),
    RuleLadder(
        name="latency_trend",
        signal=Signal.LATENCY,
        window=LONG_WINDOW,
        measure=trend_excess,
        rules=(ScoringRule(0, 15, "increasing latency trend", 15),),
        min_samples=TREND_MIN_SAMPLES,
    ),
    RuleLadder(
        name="cpu_average",
        signal=Signal.CPU,
        window=LONG_WINDOW,
        measure=mean,
        rules=(
            ScoringRule(90, 20, "critical CPU ({value}%)", 20),
            ScoringRule(80, 10, "high CPU ({value}%)"),
        ),
    ),
    RuleLadder(
        name="cpu_peak",
        signal=Signal.CPU,
        window=LONG_WINDOW,
        measure=max,
        rules=(ScoringRule(95, 15, "extreme CPU spikes ({value}%)"),),
    ),
    # Memory is only scored when the same window also holds CPU samples.
    # Hosts whose template lacks a CPU item never get memory factors.
    RuleLadder(
        name="memory_average",
        signal=Signal.MEMORY,
        window=LONG_WINDOW,
        measure=mean,
        rules=(
            ScoringRule(90, 15, "critical memory ({value}%)"),
            ScoringRule(85, 8, "high memory ({value}%)"),
        ),
        requires=(Signal.CPU,),
    ),
)


def classify_risk(score: int) -> Tuple[RiskLevel, str]:
    """Map a clamped score to its risk level and recommendation."""
    for minimum, level, recommendation in RISK_BANDS:
        if score >= minimum:
            return level, recommendation
    return RiskLevel.LOW, DEFAULT_RECOMMENDATION


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InstabilityPredictor:
    """
    Stateless instability scorer.

    The predictor never raises for well-typed input and never mutates it.
    Given the same metrics and the same ``now`` it returns equal results.
    """

    def __init__(
        self,
        rules: Sequence[RuleLadder] = DEFAULT_RULES,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._rules = tuple(rules)
        self._clock = clock or _utc_now

    @property
    def rules(self) -> Tuple[RuleLadder, ...]:
        return self._rules

    def predict(
        self,
        metrics: Optional[CriticalMetrics],
        now: Optional[datetime] = None,
    ) -> PredictionResult:
        """
        Score ``metrics`` relative to ``now``.

        Args:
            metrics: Series for one host, or None when nothing was fetched.
            now: Reference instant for the windows; defaults to the clock.

        Returns:
            PredictionResult: A fresh result; ``last_update`` is ``now``.
        """
        moment = now or self._clock()

        if metrics is None or not metrics.ping:
            return PredictionResult(
                risk_level=RiskLevel.LOW,
                risk_score=0,
                recommendation=AWAITING_DATA_RECOMMENDATION,
                last_update=moment,
            )

        now_ms = to_epoch_ms(moment)
        windowed: Dict[Tuple[Signal, timedelta], List[float]] = {}

        def values_for(signal: Signal, window: timedelta) -> List[float]:
            key = (signal, window)
            if key not in windowed:
                windowed[key] = self._window_values(metrics, signal, window, now_ms)
            return windowed[key]

        score = 0
        eta_minutes: Optional[int] = None
        factors: List[str] = []

        for ladder in self._rules:
            values = values_for(ladder.signal, ladder.window)
            if len(values) < ladder.min_samples:
                continue
            if not all(values_for(other, ladder.window) for other in ladder.requires):
                continue

            measured = ladder.measure(values)
            rule = ladder.first_match(measured)
            if rule is None:
                continue

            score += rule.score
            factors.append(rule.describe(measured))
            if rule.eta_minutes is not None:
                eta_minutes = (
                    rule.eta_minutes
                    if eta_minutes is None
                    else min(eta_minutes, rule.eta_minutes)
                )

        score = max(0, min(score, MAX_RISK_SCORE))
        risk_level, recommendation = classify_risk(score)

        return PredictionResult(
            risk_level=risk_level,
            risk_score=score,
            recommendation=recommendation,
            eta_minutes=eta_minutes,
            factors=factors,
            last_update=moment,
        )

    @staticmethod
    def _window_values(
        metrics: CriticalMetrics,
        signal: Signal,
        window: timedelta,
        now_ms: int,
    ) -> List[float]:
        cutoff = now_ms - window // timedelta(milliseconds=1)
        recent = [
            sample
            for sample in metrics.samples(signal)
            if sample.timestamp >= cutoff and math.isfinite(sample.value)
        ]
        recent.sort(key=lambda sample: sample.timestamp)
        return [sample.value for sample in recent]
