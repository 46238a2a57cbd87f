"""
Hosts Router - Presentation Layer

This module defines the FastAPI router for Zabbix host, alert and latest
metric endpoints.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from netwatch.application.dtos.host_dto import AlertDTO, HostDTO, HostMetricDTO
from netwatch.application.use_cases.host_use_cases import (
    GetAlertsUseCase,
    GetHostsUseCase,
    GetLatestMetricsUseCase,
)
from netwatch.domain.entities.errors import ZabbixApiError
from netwatch.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/hosts", tags=["Hosts"])


@router.get("", response_model=List[HostDTO])
@inject
async def get_hosts(
    get_hosts_use_case: GetHostsUseCase = Depends(Provide["get_hosts_use_case"]),
) -> List[HostDTO]:
    """
    List the hosts monitored by Zabbix.

    Raises:
        HTTPException: 502 if Zabbix cannot be queried
    """
    try:
        return await get_hosts_use_case.execute()

    except ZabbixApiError as e:
        logger.error("hosts.retrieval_failed", error=e.message, details=e.details)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to retrieve hosts from Zabbix: {e.message}",
        )


@router.get("/alerts", response_model=List[AlertDTO])
@inject
async def get_alerts(
    get_alerts_use_case: GetAlertsUseCase = Depends(Provide["get_alerts_use_case"]),
) -> List[AlertDTO]:
    """List active problem triggers, most severe first."""
    try:
        return await get_alerts_use_case.execute()

    except ZabbixApiError as e:
        logger.error("alerts.retrieval_failed", error=e.message, details=e.details)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to retrieve alerts from Zabbix: {e.message}",
        )


@router.get("/metrics", response_model=List[HostMetricDTO])
@inject
async def get_latest_metrics(
    host_ids: Optional[List[str]] = Query(
        default=None, description="Restrict to these Zabbix host ids"
    ),
    get_latest_metrics_use_case: GetLatestMetricsUseCase = Depends(
        Provide["get_latest_metrics_use_case"]
    ),
) -> List[HostMetricDTO]:
    """Latest CPU, memory, ping, network, disk and uptime values per host."""
    try:
        return await get_latest_metrics_use_case.execute(host_ids)

    except ZabbixApiError as e:
        logger.error("metrics.retrieval_failed", error=e.message, details=e.details)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to retrieve metrics from Zabbix: {e.message}",
        )
