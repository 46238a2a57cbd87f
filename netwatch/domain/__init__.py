"""
Domain Layer Package

Metric and prediction entities, the instability predictor and the gateway
interfaces, free of framework and infrastructure dependencies.
"""

from netwatch.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]
