"""
Infrastructure Gateways Package

Concrete implementations of the domain gateway interfaces.
"""

from .zabbix_gateway import ZabbixGateway

__all__ = ["ZabbixGateway"]
