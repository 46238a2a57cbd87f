"""
Presentation Layer Package

FastAPI routers translating HTTP requests into use case calls and
application errors into HTTP status codes.
"""

from netwatch.presentation import controllers

__all__ = ["controllers"]
