"""Domain ports (service abstractions implemented by infrastructure)."""

from .health_check import IHealthCheckService

__all__ = ["IHealthCheckService"]
