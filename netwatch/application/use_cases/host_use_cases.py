"""
Host Use Cases - Application Layer

Read-only views over the hosts, active alerts and latest item values known
to Zabbix.
"""

from typing import List, Optional, Sequence

from netwatch.application.dtos.host_dto import AlertDTO, HostDTO, HostMetricDTO
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway
from netwatch.shared import get_logger

logger = get_logger(__name__)


class GetHostsUseCase:
    """Use case for listing monitored hosts."""

    def __init__(self, zabbix_gateway: IZabbixGateway) -> None:
        self._zabbix_gateway = zabbix_gateway

    async def execute(self) -> List[HostDTO]:
        hosts = await self._zabbix_gateway.get_hosts()
        logger.info("hosts.fetched", count=len(hosts))
        return [HostDTO.from_domain(host) for host in hosts]


class GetAlertsUseCase:
    """Use case for listing active alerts, most severe first."""

    def __init__(self, zabbix_gateway: IZabbixGateway, limit: int = 50) -> None:
        self._zabbix_gateway = zabbix_gateway
        self._limit = limit

    async def execute(self) -> List[AlertDTO]:
        alerts = await self._zabbix_gateway.get_alerts(limit=self._limit)
        logger.info("alerts.fetched", count=len(alerts), limit=self._limit)
        return [AlertDTO.from_domain(alert) for alert in alerts]


class GetLatestMetricsUseCase:
    """Use case for listing the latest normalized item values per host."""

    def __init__(self, zabbix_gateway: IZabbixGateway) -> None:
        self._zabbix_gateway = zabbix_gateway

    async def execute(
        self, host_ids: Optional[Sequence[str]] = None
    ) -> List[HostMetricDTO]:
        metrics = await self._zabbix_gateway.get_latest_metrics(host_ids)
        logger.info(
            "metrics.fetched",
            count=len(metrics),
            hosts=len({metric.host_id for metric in metrics}),
        )
        return [HostMetricDTO.from_domain(metric) for metric in metrics]
