"""
Domain Service - Fleet Overview

Folds the host list, active alerts and latest item values into the counts
and averages shown on the monitoring dashboard.
"""

from __future__ import annotations

import math
from datetime import datetime
from statistics import mean
from typing import Sequence

from netwatch.domain.entities.metrics import Signal
from netwatch.domain.entities.overview import (
    AlertSummary,
    HostSummary,
    Overview,
    OverviewStatus,
    PerformanceSummary,
)
from netwatch.domain.entities.zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    ZabbixAlert,
    ZabbixHost,
)
from netwatch.domain.services.metric_catalog import classify_item_key, round_half_up

HIGH_CPU_USAGE = 80.0
HIGH_MEMORY_USAGE = 90.0


def summarize_hosts(hosts: Sequence[ZabbixHost]) -> HostSummary:
    online = sum(1 for host in hosts if host.available is HostAvailability.ONLINE)
    total = len(hosts)
    return HostSummary(
        online=online,
        offline=total - online,
        total=total,
        online_percentage=math.floor(online / total * 100 + 0.5) if total else 0,
    )


def summarize_alerts(alerts: Sequence[ZabbixAlert]) -> AlertSummary:
    def count(severity: AlertSeverity) -> int:
        return sum(1 for alert in alerts if alert.severity is severity)

    return AlertSummary(
        critical=count(AlertSeverity.CRITICAL),
        high=count(AlertSeverity.HIGH),
        medium=count(AlertSeverity.MEDIUM),
        low=count(AlertSeverity.LOW),
        total=len(alerts),
    )


def _average(values: Sequence[float]) -> float:
    return round_half_up(mean(values)) if values else 0.0


def summarize_performance(metrics: Sequence[HostMetric]) -> PerformanceSummary:
    """
    Averages per critical signal over the latest values.

    Only the items that feed the predictor are used (``icmpping``,
    ``icmppingsec``, ``system.cpu.util``, memory utilization), so per-core or
    per-mode CPU items do not skew the CPU average.
    """
    by_signal = {signal: [] for signal in Signal}
    for metric in metrics:
        signal = classify_item_key(metric.key)
        if signal is not None:
            by_signal[signal].append(metric.value)

    pings = by_signal[Signal.PING]
    answered = sum(1 for value in pings if value == 1)
    packet_loss = (len(pings) - answered) / len(pings) * 100 if pings else 0.0

    return PerformanceSummary(
        avg_response_time_ms=_average(by_signal[Signal.LATENCY]),
        avg_cpu_usage=_average(by_signal[Signal.CPU]),
        avg_memory_usage=_average(by_signal[Signal.MEMORY]),
        packet_loss=round_half_up(packet_loss),
        active_hosts=answered,
        total_metrics=len(metrics),
    )


def overall_status(
    hosts: HostSummary,
    alerts: AlertSummary,
    performance: PerformanceSummary,
) -> OverviewStatus:
    if alerts.critical or hosts.offline:
        return OverviewStatus.CRITICAL
    if (
        alerts.high
        or alerts.medium
        or performance.avg_cpu_usage > HIGH_CPU_USAGE
        or performance.avg_memory_usage > HIGH_MEMORY_USAGE
    ):
        return OverviewStatus.WARNING
    return OverviewStatus.NORMAL


def build_overview(
    hosts: Sequence[ZabbixHost],
    alerts: Sequence[ZabbixAlert],
    metrics: Sequence[HostMetric],
    now: datetime,
) -> Overview:
    host_summary = summarize_hosts(hosts)
    alert_summary = summarize_alerts(alerts)
    performance = summarize_performance(metrics)
    return Overview(
        status=overall_status(host_summary, alert_summary, performance),
        hosts=host_summary,
        alerts=alert_summary,
        performance=performance,
        generated_at=now,
    )
