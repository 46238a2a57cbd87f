"""
Controllers Package - Presentation Layer

FastAPI routers for predictions, Zabbix hosts, alerts and metrics, the fleet
overview and system health/info.
"""

from .hosts_controller import router as hosts_router
from .overview_controller import router as overview_router
from .predictions_controller import router as predictions_router
from .system_controller import router as system_router

__all__ = ["predictions_router", "hosts_router", "overview_router", "system_router"]
