"""
Domain Gateway - Zabbix

Interface for reading hosts, active alerts and critical metric history from
a Zabbix server. All operations are read-only.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from netwatch.domain.entities.metrics import HostCriticalHistory, TimeRange
from netwatch.domain.entities.zabbix import HostMetric, ZabbixAlert, ZabbixHost


class IZabbixGateway(ABC):
    """Interface for the Zabbix gateway."""

    @abstractmethod
    async def get_hosts(self) -> List[ZabbixHost]:
        """
        List monitored hosts sorted by name.

        Raises:
            ZabbixApiError: When the Zabbix API call fails
        """
        pass

    @abstractmethod
    async def get_alerts(self, limit: int = 50) -> List[ZabbixAlert]:
        """
        List active, enabled triggers, most severe first.

        Raises:
            ZabbixApiError: When the Zabbix API call fails
        """
        pass

    @abstractmethod
    async def get_critical_history(
        self,
        host_id: str,
        time_range: TimeRange,
        now: Optional[datetime] = None,
    ) -> HostCriticalHistory:
        """
        Collect ping, latency, cpu and memory history for a host.

        Args:
            host_id: Zabbix host id
            time_range: Lookback range ending at ``now``
            now: End of the range; defaults to the current time

        Returns:
            The metrics bundle; signals without a matching item are empty.

        Raises:
            HostNotFoundError: When the host does not exist
            ZabbixApiError: When a Zabbix API call fails
        """
        pass

    @abstractmethod
    async def get_latest_metrics(
        self, host_ids: Optional[Sequence[str]] = None
    ) -> List[HostMetric]:
        """
        Latest values of the CPU, memory, ping, disk, network, load, process,
        swap and uptime items of the given hosts (a first page of hosts when
        none are given), normalized for display.

        Raises:
            ZabbixApiError: When a Zabbix API call fails
        """
        pass

    @abstractmethod
    async def get_api_version(self) -> str:
        """Return the Zabbix API version (unauthenticated call)."""
        pass
