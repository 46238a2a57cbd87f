"""DTOs for the fleet overview."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from netwatch.domain.entities.overview import (
    AlertSummary,
    HostSummary,
    Overview,
    OverviewStatus,
    PerformanceSummary,
)


class HostSummaryDTO(BaseModel):
    online: int
    offline: int
    total: int
    online_percentage: int = Field(ge=0, le=100)

    @classmethod
    def from_domain(cls, summary: HostSummary) -> "HostSummaryDTO":
        return cls(
            online=summary.online,
            offline=summary.offline,
            total=summary.total,
            online_percentage=summary.online_percentage,
        )


class AlertSummaryDTO(BaseModel):
    critical: int
    high: int
    medium: int
    low: int
    total: int

    @classmethod
    def from_domain(cls, summary: AlertSummary) -> "AlertSummaryDTO":
        return cls(
            critical=summary.critical,
            high=summary.high,
            medium=summary.medium,
            low=summary.low,
            total=summary.total,
        )


class PerformanceSummaryDTO(BaseModel):
    avg_response_time_ms: float = Field(description="Mean ICMP response time")
    avg_cpu_usage: float = Field(description="Mean CPU utilization in percent")
    avg_memory_usage: float = Field(description="Mean memory utilization in percent")
    packet_loss: float = Field(description="Share of unanswered pings in percent")
    active_hosts: int = Field(description="Hosts whose last ping was answered")
    total_metrics: int

    @classmethod
    def from_domain(cls, summary: PerformanceSummary) -> "PerformanceSummaryDTO":
        return cls(
            avg_response_time_ms=summary.avg_response_time_ms,
            avg_cpu_usage=summary.avg_cpu_usage,
            avg_memory_usage=summary.avg_memory_usage,
            packet_loss=summary.packet_loss,
            active_hosts=summary.active_hosts,
            total_metrics=summary.total_metrics,
        )


class OverviewDTO(BaseModel):
    """Summary of the monitored fleet."""

    status: OverviewStatus
    hosts: HostSummaryDTO
    alerts: AlertSummaryDTO
    performance: PerformanceSummaryDTO
    generated_at: datetime

    @classmethod
    def from_domain(cls, overview: Overview) -> "OverviewDTO":
        return cls(
            status=overview.status,
            hosts=HostSummaryDTO.from_domain(overview.hosts),
            alerts=AlertSummaryDTO.from_domain(overview.alerts),
            performance=PerformanceSummaryDTO.from_domain(overview.performance),
            generated_at=overview.generated_at,
        )
