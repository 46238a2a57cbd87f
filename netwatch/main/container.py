"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from netwatch.application.models import SystemInfo
from netwatch.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from netwatch.application.use_cases.host_use_cases import (
    GetAlertsUseCase,
    GetHostsUseCase,
    GetLatestMetricsUseCase,
)
from netwatch.application.use_cases.overview_use_cases import GetOverviewUseCase
from netwatch.application.use_cases.prediction_use_cases import (
    EvaluateMetricsUseCase,
    PredictHostInstabilityUseCase,
)
from netwatch.domain.services.instability_predictor import InstabilityPredictor
from netwatch.infrastructure.gateways.zabbix_gateway import ZabbixGateway
from netwatch.infrastructure.services.health_check_service import HealthCheckService
from netwatch.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Gateways
    zabbix_gateway = providers.Singleton(
        ZabbixGateway,
        base_url=config.zabbix.url,
        token=config.zabbix.token,
        timeout=config.zabbix.timeout,
        history_limit=config.zabbix.history_limit,
        metrics_host_limit=config.zabbix.metrics_host_limit,
    )

    # Domain services
    predictor = providers.Singleton(InstabilityPredictor)

    # Use cases
    evaluate_metrics_use_case = providers.Factory(
        EvaluateMetricsUseCase,
        predictor=predictor,
    )

    predict_host_instability_use_case = providers.Factory(
        PredictHostInstabilityUseCase,
        zabbix_gateway=zabbix_gateway,
        predictor=predictor,
    )

    get_hosts_use_case = providers.Factory(
        GetHostsUseCase,
        zabbix_gateway=zabbix_gateway,
    )

    get_alerts_use_case = providers.Factory(
        GetAlertsUseCase,
        zabbix_gateway=zabbix_gateway,
        limit=config.zabbix.alerts_limit,
    )

    get_latest_metrics_use_case = providers.Factory(
        GetLatestMetricsUseCase,
        zabbix_gateway=zabbix_gateway,
    )

    get_overview_use_case = providers.Factory(
        GetOverviewUseCase,
        zabbix_gateway=zabbix_gateway,
        alerts_limit=config.zabbix.alerts_limit,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        zabbix_gateway=zabbix_gateway,
        zabbix_url=config.zabbix.url,
        zabbix_token=config.zabbix.token,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        environment=config.environment,
        git_commit=config.api.git_commit,
        build_time=config.api.build_time,
        zabbix_url=config.zabbix.url,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    The Zabbix gateway opens one HTTP client per call, so there is no pool to
    open or drain; the gateway is still resolved here so that configuration
    errors surface at startup instead of on the first request.
    """
    container = get_container()

    try:
        container.zabbix_gateway()
        logger.info("container.zabbix.configured", url=container.config.zabbix.url())
        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.resources.shutdown")
