"""
Overview Router - Presentation Layer

Fleet summary endpoint backing the monitoring dashboard.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from netwatch.application.dtos.overview_dto import OverviewDTO
from netwatch.application.use_cases.overview_use_cases import GetOverviewUseCase
from netwatch.domain.entities.errors import ZabbixApiError
from netwatch.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Overview"])


@router.get(
    "/overview",
    response_model=OverviewDTO,
    responses={502: {"description": "Zabbix could not be queried"}},
)
@inject
async def get_overview(
    get_overview_use_case: GetOverviewUseCase = Depends(
        Provide["get_overview_use_case"]
    ),
) -> OverviewDTO:
    """Host availability, alert counts and average performance of the fleet."""
    try:
        return await get_overview_use_case.execute()

    except ZabbixApiError as e:
        logger.error("overview.retrieval_failed", error=e.message, details=e.details)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to build overview from Zabbix: {e.message}",
        )
