"""
Overview Use Cases - Application Layer

Summarizes the monitored fleet from one snapshot of hosts, active alerts and
latest item values.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from netwatch.application.dtos.overview_dto import OverviewDTO
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway
from netwatch.domain.services.overview import build_overview
from netwatch.shared import get_logger

logger = get_logger(__name__)


class GetOverviewUseCase:
    """Use case for the fleet summary shown on the dashboard."""

    def __init__(self, zabbix_gateway: IZabbixGateway, alerts_limit: int = 50) -> None:
        self._zabbix_gateway = zabbix_gateway
        self._alerts_limit = alerts_limit

    async def execute(self, now: Optional[datetime] = None) -> OverviewDTO:
        """
        Build the overview.

        Raises:
            ZabbixApiError: When any of the three Zabbix reads fails
        """
        hosts, alerts, metrics = await asyncio.gather(
            self._zabbix_gateway.get_hosts(),
            self._zabbix_gateway.get_alerts(limit=self._alerts_limit),
            self._zabbix_gateway.get_latest_metrics(),
        )
        overview = build_overview(
            hosts, alerts, metrics, now or datetime.now(timezone.utc)
        )
        logger.info(
            "overview.built",
            status=overview.status.value,
            hosts=overview.hosts.total,
            alerts=overview.alerts.total,
            metrics=overview.performance.total_metrics,
        )
        return OverviewDTO.from_domain(overview)
