"""
Infrastructure Layer Package

Implementations of the domain interfaces that talk to the outside world,
currently the Zabbix JSON-RPC API.
"""

from netwatch.infrastructure import gateways, services

__all__ = ["gateways", "services"]
