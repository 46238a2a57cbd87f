"""
Domain Gateways Package

Interfaces for external data sources consumed by the domain.
"""

from .zabbix_gateway import IZabbixGateway

__all__ = ["IZabbixGateway"]
