"""
Infrastructure Gateway - Zabbix JSON-RPC Implementation

Read-only client for the Zabbix API (``api_jsonrpc.php``). Authenticates with
an API token sent as a bearer header and maps Zabbix payloads onto domain
entities.
"""

from __future__ import annotations

import asyncio
import itertools
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
import structlog

from netwatch.domain.entities.errors import HostNotFoundError, ZabbixApiError
from netwatch.domain.entities.metrics import (
    CriticalMetrics,
    HostCriticalHistory,
    MetricSample,
    Signal,
    TimeRange,
)
from netwatch.domain.entities.zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    HostStatus,
    ZabbixAlert,
    ZabbixHost,
)
from netwatch.domain.gateways.zabbix_gateway import IZabbixGateway
from netwatch.domain.services.metric_catalog import (
    classify_item_key,
    is_relevant_key,
    metric_type,
    normalize_metric_value,
)

logger = structlog.get_logger(__name__)

# Zabbix numeric value types: 0 float, 3 unsigned integer.
NUMERIC_VALUE_TYPES = (0, 3)

# Items read per host by get_latest_metrics.
LATEST_ITEMS_PER_HOST = 100

_PRIORITY_SEVERITY: Dict[str, AlertSeverity] = {
    "5": AlertSeverity.CRITICAL,
    "4": AlertSeverity.HIGH,
    "3": AlertSeverity.MEDIUM,
    "2": AlertSeverity.MEDIUM,
    "1": AlertSeverity.LOW,
}


def map_priority(priority: Any) -> AlertSeverity:
    return _PRIORITY_SEVERITY.get(str(priority), AlertSeverity.LOW)


def _parse_float(raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class ZabbixGateway(IZabbixGateway):
    """HTTP client for the Zabbix JSON-RPC API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        history_limit: int = 1000,
        metrics_host_limit: int = 10,
    ):
        """
        Initialize Zabbix gateway.

        Args:
            base_url: Zabbix frontend URL (e.g., "http://zabbix.local/")
            token: Zabbix API token
            timeout: Request timeout in seconds
            history_limit: Maximum history rows fetched per item
            metrics_host_limit: Hosts read by get_latest_metrics when no ids are given
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.api_url = f"{self.base_url}api_jsonrpc.php"
        self.token = token
        self.timeout = timeout
        self.history_limit = history_limit
        self.metrics_host_limit = metrics_host_limit
        self._request_ids = itertools.count(1)

    async def get_hosts(self) -> List[ZabbixHost]:
        rows = await self._call(
            "host.get",
            {
                "output": ["hostid", "host", "name", "status", "available"],
                "selectInterfaces": ["ip", "dns", "port"],
                "selectGroups": ["name"],
                "sortfield": "name",
            },
        )
        return [self._to_host(row) for row in rows or []]

    async def get_alerts(self, limit: int = 50) -> List[ZabbixAlert]:
        rows = await self._call(
            "trigger.get",
            {
                "output": [
                    "triggerid",
                    "description",
                    "priority",
                    "lastchange",
                    "value",
                ],
                "selectHosts": ["name"],
                "filter": {"value": 1, "status": 0},
                "sortfield": "priority",
                "sortorder": "DESC",
                "limit": limit,
            },
        )
        return [self._to_alert(row) for row in rows or []]

    async def get_critical_history(
        self,
        host_id: str,
        time_range: TimeRange,
        now: Optional[datetime] = None,
    ) -> HostCriticalHistory:
        hosts = await self._call("host.get", {"output": ["hostid"], "hostids": [host_id]})
        if not hosts:
            raise HostNotFoundError(host_id)

        items = await self._call(
            "item.get",
            {
                "output": ["itemid", "key_", "units", "value_type"],
                "hostids": [host_id],
                "monitored": True,
                "filter": {"value_type": list(NUMERIC_VALUE_TYPES)},
            },
        )
        selected = self._select_critical_items(items or [])

        end = now or datetime.now(timezone.utc)
        start = end - timedelta(seconds=time_range.seconds)

        logger.info(
            "zabbix.history.request",
            host_id=host_id,
            time_range=time_range.value,
            items={signal.value: item["key_"] for signal, item in selected.items()},
        )

        series = await asyncio.gather(
            *(
                self._get_history(signal, item, start, end)
                for signal, item in selected.items()
            )
        )
        by_signal = dict(zip(selected.keys(), series))

        metrics = CriticalMetrics(
            ping=by_signal.get(Signal.PING, ()),
            latency=by_signal.get(Signal.LATENCY, ()),
            cpu=by_signal.get(Signal.CPU, ()),
            memory=by_signal.get(Signal.MEMORY, ()),
        )
        return HostCriticalHistory(
            host_id=host_id,
            time_range=time_range,
            metrics=metrics,
            items={signal: item["key_"] for signal, item in selected.items()},
            collected_at=end,
        )

    async def get_latest_metrics(
        self, host_ids: Optional[Sequence[str]] = None
    ) -> List[HostMetric]:
        host_params: Dict[str, Any] = {"output": ["hostid", "name"]}
        if host_ids:
            host_params["hostids"] = list(host_ids)
        else:
            host_params["limit"] = self.metrics_host_limit
        hosts = await self._call("host.get", host_params) or []

        per_host = await asyncio.gather(
            *(self._get_host_metrics(host) for host in hosts)
        )
        metrics = [metric for host_metrics in per_host for metric in host_metrics]
        logger.info("zabbix.metrics.fetched", hosts=len(hosts), metrics=len(metrics))
        return metrics

    async def get_api_version(self) -> str:
        return str(await self._call("apiinfo.version", [], authenticated=False))

    async def _get_history(
        self,
        signal: Signal,
        item: Dict[str, Any],
        start: datetime,
        end: datetime,
    ) -> Tuple[MetricSample, ...]:
        rows = await self._call(
            "history.get",
            {
                "output": "extend",
                "history": int(item.get("value_type", 0)),
                "itemids": [item["itemid"]],
                "time_from": int(start.timestamp()),
                "time_till": int(end.timestamp()),
                "sortfield": "clock",
                "sortorder": "DESC",
                "limit": self.history_limit,
            },
        )
        # The limit keeps the newest rows; samples are returned oldest first.
        rows = list(reversed(rows or []))

        # icmppingsec reports seconds; the predictor works in milliseconds.
        scale = 1000.0 if signal is Signal.LATENCY and item.get("units") == "s" else 1.0
        return tuple(
            MetricSample(
                timestamp=int(row["clock"]) * 1000,
                value=_parse_float(row.get("value")) * scale,
            )
            for row in rows
        )

    async def _get_host_metrics(self, host: Dict[str, Any]) -> List[HostMetric]:
        host_id = str(host.get("hostid", ""))
        items = await self._call(
            "item.get",
            {
                "output": [
                    "itemid",
                    "name",
                    "key_",
                    "lastvalue",
                    "units",
                    "lastclock",
                    "value_type",
                ],
                "hostids": [host_id],
                "monitored": True,
                "filter": {"value_type": list(NUMERIC_VALUE_TYPES)},
                "limit": LATEST_ITEMS_PER_HOST,
            },
        )
        return [
            self._to_metric(host, item)
            for item in items or []
            if is_relevant_key(item.get("key_", ""))
        ]

    @staticmethod
    def _select_critical_items(
        items: List[Dict[str, Any]],
    ) -> Dict[Signal, Dict[str, Any]]:
        selected: Dict[Signal, Dict[str, Any]] = {}
        for item in items:
            signal = classify_item_key(item.get("key_", ""))
            if signal is not None and signal not in selected:
                selected[signal] = item
        return selected

    async def _call(
        self,
        method: str,
        params: Any = None,
        *,
        authenticated: bool = True,
    ) -> Any:
        request_id = next(self._request_ids)
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params if params is not None else {},
            "id": request_id,
        }
        headers = {"Content-Type": "application/json-rpc"}
        if authenticated and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("zabbix.request", method=method, request_id=request_id)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "zabbix.http_error",
                method=method,
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=self.api_url,
            )
            raise ZabbixApiError(
                f"Zabbix returned HTTP {e.response.status_code}",
                details={"method": method, "status_code": e.response.status_code},
            ) from e

        except httpx.RequestError as e:
            logger.error(
                "zabbix.request_error", method=method, error=str(e), url=self.api_url
            )
            raise ZabbixApiError(
                f"Failed to communicate with Zabbix: {str(e)}",
                details={"method": method},
            ) from e

        except ValueError as e:
            logger.error("zabbix.invalid_payload", method=method, error=str(e))
            raise ZabbixApiError(
                "Zabbix returned an invalid JSON payload", details={"method": method}
            ) from e

        if not isinstance(data, dict):
            raise ZabbixApiError(
                "Zabbix returned an unexpected payload", details={"method": method}
            )

        error = data.get("error")
        if error:
            logger.error("zabbix.api_error", method=method, error=error)
            raise ZabbixApiError(
                f"Zabbix API error: {error.get('message', 'unknown error')}",
                code=error.get("code"),
                details={"method": method, "data": error.get("data")},
            )

        return data.get("result")

    def _to_host(self, row: Dict[str, Any]) -> ZabbixHost:
        interfaces = row.get("interfaces") or [{}]
        primary = interfaces[0]
        return ZabbixHost(
            id=str(row.get("hostid", "")),
            name=row.get("name") or row.get("host", ""),
            host=row.get("host", ""),
            status=HostStatus.ENABLED
            if str(row.get("status")) == "0"
            else HostStatus.DISABLED,
            available=HostAvailability.ONLINE
            if str(row.get("available")) == "0"
            else HostAvailability.OFFLINE,
            ip=primary.get("ip") or "N/A",
            dns=primary.get("dns") or "N/A",
            groups=[group.get("name", "") for group in row.get("groups") or []],
        )

    def _to_alert(self, row: Dict[str, Any]) -> ZabbixAlert:
        hosts = row.get("hosts") or [{}]
        description = row.get("description", "")
        return ZabbixAlert(
            id=str(row.get("triggerid", "")),
            title=description,
            host=hosts[0].get("name") or "Unknown",
            severity=map_priority(row.get("priority")),
            timestamp=datetime.fromtimestamp(
                int(row.get("lastchange") or 0), tz=timezone.utc
            ),
            description=description,
        )

    def _to_metric(self, host: Dict[str, Any], item: Dict[str, Any]) -> HostMetric:
        key = item.get("key_", "")
        value, units = normalize_metric_value(
            _parse_float(item.get("lastvalue")), key, item.get("units") or ""
        )
        last_clock = int(item.get("lastclock") or 0)
        return HostMetric(
            host_id=str(host.get("hostid", "")),
            host_name=host.get("name") or "",
            item_id=str(item.get("itemid", "")),
            name=item.get("name") or key,
            key=key,
            value=value,
            units=units,
            type=metric_type(key),
            last_update=datetime.fromtimestamp(last_clock, tz=timezone.utc)
            if last_clock
            else None,
        )
