from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from netwatch.domain.entities.errors import HostNotFoundError
from netwatch.domain.entities.metrics import (
    HostCriticalHistory,
    MetricSample,
    TimeRange,
    to_epoch_ms,
)
from netwatch.domain.entities.zabbix import HostMetric, ZabbixAlert, ZabbixHost
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXED_NOW = datetime(2024, 9, 17, 12, 0, tzinfo=timezone.utc)


def series(
    values: Sequence[float],
    now: datetime = FIXED_NOW,
    step: timedelta = timedelta(minutes=1),
) -> Tuple[MetricSample, ...]:
    """Samples spaced ``step`` apart, the last one taken at ``now``."""
    now_ms = to_epoch_ms(now)
    step_ms = step // timedelta(milliseconds=1)
    count = len(values)
    return tuple(
        MetricSample(timestamp=now_ms - (count - 1 - index) * step_ms, value=value)
        for index, value in enumerate(values)
    )


class FakeZabbixGateway(IZabbixGateway):
    def __init__(self) -> None:
        self.hosts: List[ZabbixHost] = []
        self.alerts: List[ZabbixAlert] = []
        self.histories: Dict[str, HostCriticalHistory] = {}
        self.metrics: List[HostMetric] = []
        self.version = "7.0.3"
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error

    async def get_hosts(self) -> List[ZabbixHost]:
        self.calls.append(("get_hosts",))
        self._maybe_fail()
        return list(self.hosts)

    async def get_alerts(self, limit: int = 50) -> List[ZabbixAlert]:
        self.calls.append(("get_alerts", limit))
        self._maybe_fail()
        return self.alerts[:limit]

    async def get_critical_history(
        self,
        host_id: str,
        time_range: TimeRange,
        now: Optional[datetime] = None,
    ) -> HostCriticalHistory:
        self.calls.append(("get_critical_history", host_id, time_range, now))
        self._maybe_fail()
        if host_id not in self.histories:
            raise HostNotFoundError(host_id)
        return self.histories[host_id]

    async def get_latest_metrics(
        self, host_ids: Optional[Sequence[str]] = None
    ) -> List[HostMetric]:
        self.calls.append(("get_latest_metrics", host_ids))
        self._maybe_fail()
        if not host_ids:
            return list(self.metrics)
        return [metric for metric in self.metrics if metric.host_id in host_ids]

    async def get_api_version(self) -> str:
        self.calls.append(("get_api_version",))
        self._maybe_fail()
        return self.version


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def fake_gateway() -> FakeZabbixGateway:
    return FakeZabbixGateway()
