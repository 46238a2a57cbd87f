"""
Domain Service - Metric Catalog

Knows which Zabbix item keys feed which signal or metric family, and how a
raw ``lastvalue`` is turned into a display value with a readable unit.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from netwatch.domain.entities.metrics import Signal
from netwatch.domain.entities.zabbix import MetricType

# Item keys feeding each signal. Entries ending in "[" match any parameters.
CRITICAL_ITEM_KEYS: Tuple[Tuple[Signal, Tuple[str, ...]], ...] = (
    (Signal.PING, ("icmpping", "icmpping[")),
    (Signal.LATENCY, ("icmppingsec", "icmppingsec[")),
    (Signal.CPU, ("system.cpu.util", "system.cpu.util[]")),
    (
        Signal.MEMORY,
        ("vm.memory.utilization", "vm.memory.utilization[]", "vm.memory.size[pused]"),
    ),
)

# Substrings of item keys shown in the latest-metrics view.
RELEVANT_KEY_PARTS = (
    "cpu",
    "memory",
    "ping",
    "uptime",
    "vfs.fs",
    "net.if",
    "load",
    "proc.num",
    "swap",
)

# First match wins: system.cpu.load is a CPU metric.
_TYPE_KEY_PARTS: Tuple[Tuple[MetricType, Tuple[str, ...]], ...] = (
    (MetricType.CPU, ("cpu",)),
    (MetricType.MEMORY, ("memory",)),
    (MetricType.PING, ("ping", "icmp")),
    (MetricType.NETWORK, ("net.if",)),
    (MetricType.DISK, ("vfs.fs", "disk")),
    (MetricType.UPTIME, ("uptime",)),
    (MetricType.LOAD, ("load",)),
    (MetricType.PROCESSES, ("proc.num",)),
    (MetricType.SWAP, ("swap",)),
)

MEGA = 1_000_000
GIGA = 1_000_000_000
MEBIBYTE = 1024 * 1024
GIBIBYTE = 1024 * 1024 * 1024


def classify_item_key(key: str) -> Optional[Signal]:
    """Return the signal an item key feeds, or None for unrelated items."""
    for signal, patterns in CRITICAL_ITEM_KEYS:
        for pattern in patterns:
            if pattern.endswith("["):
                if key.startswith(pattern):
                    return signal
            elif key == pattern:
                return signal
    return None


def is_relevant_key(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in RELEVANT_KEY_PARTS)


def metric_type(key: str) -> MetricType:
    lowered = key.lower()
    for kind, parts in _TYPE_KEY_PARTS:
        if any(part in lowered for part in parts):
            return kind
    return MetricType.OTHER


def round_half_up(value: float, digits: int = 2) -> float:
    """Round like ``Math.round(value * 10**digits) / 10**digits``."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _percent(value: float) -> Tuple[float, str]:
    return min(100.0, max(0.0, value)), "%"


def normalize_metric_value(value: float, key: str, units: str) -> Tuple[float, str]:
    """
    Convert a raw item value to a display value and unit.

    Percentages are clamped to 0-100, byte counters are scaled to MB/GB,
    network rates to Kbps/Mbps, uptime to whole hours or days and ICMP
    response times from seconds to milliseconds. Anything else keeps its
    unit and is rounded to two decimals.
    """
    if not math.isfinite(value):
        return value, units or ""

    lowered = key.lower()

    if "cpu" in lowered and "util" in lowered:
        return _percent(value)

    if "memory" in lowered:
        if units == "B" and value > MEGA:
            return round_half_up(value / MEBIBYTE), "MB"
        if "pused" in lowered or "util" in lowered:
            return _percent(value)

    if lowered.startswith("icmppingsec") and units == "s":
        return round_half_up(value * 1000), "ms"

    if "net.if" in lowered and units in ("bps", "B"):
        if value > MEGA:
            return round_half_up(value / MEGA), "Mbps"
        if value > 1000:
            return round_half_up(value / 1000), "Kbps"

    if "vfs.fs" in lowered:
        if units == "B" and value > GIGA:
            return round_half_up(value / GIBIBYTE), "GB"
        if "pused" in lowered:
            return _percent(value)

    if "uptime" in lowered and units == "s":
        hours = math.floor(value / 3600)
        if hours > 24:
            return float(hours // 24), "days"
        return float(hours), "hours"

    return round_half_up(value), units or ""
