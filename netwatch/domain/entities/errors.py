"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ZabbixApiError(DomainError):
    """Raised when the Zabbix API cannot be reached or answers with an error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if code is not None:
            details["code"] = code
        self.code = code
        super().__init__(message, details)


class HostNotFoundError(DomainError):
    """Raised when a Zabbix host cannot be found."""

    def __init__(self, host_id: str, details: Optional[Dict[str, Any]] = None):
        self.host_id = host_id
        message = f"Host with ID {host_id} not found"
        super().__init__(message, details)
