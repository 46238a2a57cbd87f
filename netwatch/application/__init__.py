"""
Application Layer Package

Use cases and DTOs that orchestrate the domain predictor and the Zabbix
gateway on behalf of the presentation layer.
"""

from netwatch.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
