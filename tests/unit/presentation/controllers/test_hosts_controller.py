from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from netwatch.application.use_cases.host_use_cases import (
    GetAlertsUseCase,
    GetHostsUseCase,
    GetLatestMetricsUseCase,
)
from netwatch.domain.entities.errors import ZabbixApiError
from netwatch.domain.entities.zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    HostStatus,
    MetricType,
    ZabbixAlert,
    ZabbixHost,
)
from netwatch.presentation.controllers.hosts_controller import (
    get_alerts,
    get_hosts,
    get_latest_metrics,
)


@pytest.mark.asyncio
async def test_get_hosts_returns_hosts(fake_gateway) -> None:
    fake_gateway.hosts = [
        ZabbixHost(
            id="10084",
            name="Zabbix server",
            host="zabbix-server",
            status=HostStatus.ENABLED,
            available=HostAvailability.ONLINE,
        )
    ]

    hosts = await get_hosts(get_hosts_use_case=GetHostsUseCase(fake_gateway))

    assert hosts[0].name == "Zabbix server"


@pytest.mark.asyncio
async def test_get_hosts_zabbix_failure_is_502(fake_gateway) -> None:
    fake_gateway.error = ZabbixApiError("Not authorized")

    with pytest.raises(HTTPException) as exc:
        await get_hosts(get_hosts_use_case=GetHostsUseCase(fake_gateway))

    assert exc.value.status_code == 502
    assert "Not authorized" in exc.value.detail


@pytest.mark.asyncio
async def test_get_alerts_returns_alerts(fake_gateway) -> None:
    fake_gateway.alerts = [
        ZabbixAlert(
            id="23001",
            title="High CPU utilization",
            host="db-01",
            severity=AlertSeverity.MEDIUM,
            timestamp=datetime(2024, 9, 17, tzinfo=timezone.utc),
            description="High CPU utilization",
        )
    ]

    alerts = await get_alerts(get_alerts_use_case=GetAlertsUseCase(fake_gateway))

    assert alerts[0].severity is AlertSeverity.MEDIUM


@pytest.mark.asyncio
async def test_get_alerts_zabbix_failure_is_502(fake_gateway) -> None:
    fake_gateway.error = ZabbixApiError("timeout")

    with pytest.raises(HTTPException) as exc:
        await get_alerts(get_alerts_use_case=GetAlertsUseCase(fake_gateway))

    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_get_latest_metrics_returns_metrics(fake_gateway) -> None:
    fake_gateway.metrics = [
        HostMetric(
            host_id="10084",
            host_name="Zabbix server",
            item_id="42",
            name="Uptime",
            key="system.uptime",
            value=3.0,
            units="days",
            type=MetricType.UPTIME,
        )
    ]

    metrics = await get_latest_metrics(
        host_ids=None,
        get_latest_metrics_use_case=GetLatestMetricsUseCase(fake_gateway),
    )

    assert metrics[0].units == "days"
    assert metrics[0].type is MetricType.UPTIME


@pytest.mark.asyncio
async def test_get_latest_metrics_zabbix_failure_is_502(fake_gateway) -> None:
    fake_gateway.error = ZabbixApiError("timeout")

    with pytest.raises(HTTPException) as exc:
        await get_latest_metrics(
            host_ids=["10084"],
            get_latest_metrics_use_case=GetLatestMetricsUseCase(fake_gateway),
        )

    assert exc.value.status_code == 502
    assert exc.value.detail == "Failed to retrieve metrics from Zabbix: timeout"
