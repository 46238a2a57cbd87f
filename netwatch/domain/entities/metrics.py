"""Domain entities for host telemetry time series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, Tuple

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Signal(str, Enum):
    """Metric families monitored for instability."""

    PING = "ping"
    LATENCY = "latency"
    CPU = "cpu"
    MEMORY = "memory"


class TimeRange(str, Enum):
    """Lookback ranges a caller can request history for."""

    ONE_HOUR = "1h"
    SIX_HOURS = "6h"
    ONE_DAY = "24h"

    @property
    def seconds(self) -> int:
        return {"1h": 3600, "6h": 6 * 3600, "24h": 24 * 3600}[self.value]


@dataclass(frozen=True, slots=True)
class MetricSample:
    """One observation of a signal; timestamp is epoch milliseconds."""

    timestamp: int
    value: float


@dataclass(frozen=True, slots=True)
class CriticalMetrics:
    """
    Ping, latency, cpu and memory series for a single host.

    Series are independently sized and timestamped; they are not aligned
    index-for-index.
    """

    ping: Tuple[MetricSample, ...] = ()
    latency: Tuple[MetricSample, ...] = ()
    cpu: Tuple[MetricSample, ...] = ()
    memory: Tuple[MetricSample, ...] = ()

    def samples(self, signal: Signal) -> Tuple[MetricSample, ...]:
        return getattr(self, signal.value)

    def sample_counts(self) -> Dict[str, int]:
        return {signal.value: len(self.samples(signal)) for signal in Signal}


@dataclass(slots=True)
class HostCriticalHistory:
    """Critical metrics bundle collected for a host over a time range."""

    host_id: str
    time_range: TimeRange
    metrics: CriticalMetrics
    items: Dict[Signal, str] = field(default_factory=dict)
    collected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware (or UTC-naive) datetime to epoch milliseconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)
