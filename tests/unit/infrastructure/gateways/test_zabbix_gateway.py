from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

import httpx
import pytest

from netwatch.domain.entities.errors import HostNotFoundError, ZabbixApiError
from netwatch.domain.entities.metrics import MetricSample, Signal, TimeRange
from netwatch.domain.entities.prediction import RiskLevel
from netwatch.domain.entities.zabbix import (
    AlertSeverity,
    HostAvailability,
    HostMetric,
    HostStatus,
    MetricType,
)
from netwatch.domain.services.instability_predictor import InstabilityPredictor
from netwatch.infrastructure.gateways.zabbix_gateway import (
    LATEST_ITEMS_PER_HOST,
    ZabbixGateway,
    map_priority,
)

NOW = datetime(2024, 9, 17, 12, 0, tzinfo=timezone.utc)
NOW_S = 1726574400


class _StubResponse:
    def __init__(self, status_code: int, json_data: Any):
        self.status_code = status_code
        self._json = json_data

    def json(self) -> Any:
        if isinstance(self._json, Exception):
            raise self._json
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "http://zabbix/api_jsonrpc.php")
            response = httpx.Response(self.status_code, request=request, text="error")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    """Answers JSON-RPC calls from a method -> handler table."""

    def __init__(self, handlers: Dict[str, Callable[[Any], Any]]):
        self._handlers = handlers
        self.requests: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def post(self, url: str, json: Dict[str, Any], headers: Dict[str, str]):
        self.requests.append({"url": url, "payload": json, "headers": headers})
        result = self._handlers[json["method"]](json["params"])
        return _StubResponse(200, {"jsonrpc": "2.0", "result": result, "id": json["id"]})


def _install(monkeypatch, client) -> None:
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)


def _methods(client: _StubAsyncClient) -> List[str]:
    return [request["payload"]["method"] for request in client.requests]


@pytest.mark.asyncio
async def test_get_hosts_maps_zabbix_rows(monkeypatch) -> None:
    client = _StubAsyncClient(
        {
            "host.get": lambda params: [
                {
                    "hostid": "10084",
                    "host": "zabbix-server",
                    "name": "Zabbix server",
                    "status": "0",
                    "available": "0",
                    "interfaces": [{"ip": "127.0.0.1", "dns": "", "port": "10050"}],
                    "groups": [{"name": "Zabbix servers"}],
                },
                {
                    "hostid": "10085",
                    "host": "edge-router",
                    "name": "",
                    "status": "1",
                    "available": "2",
                    "interfaces": [],
                    "groups": [],
                },
            ]
        }
    )
    _install(monkeypatch, client)

    gateway = ZabbixGateway("http://zabbix", token="secret")
    hosts = await gateway.get_hosts()

    assert hosts[0].id == "10084"
    assert hosts[0].status is HostStatus.ENABLED
    assert hosts[0].available is HostAvailability.ONLINE
    assert hosts[0].ip == "127.0.0.1"
    assert hosts[0].dns == "N/A"
    assert hosts[0].groups == ["Zabbix servers"]

    assert hosts[1].name == "edge-router"
    assert hosts[1].status is HostStatus.DISABLED
    assert hosts[1].available is HostAvailability.OFFLINE
    assert hosts[1].ip == "N/A"

    request = client.requests[0]
    assert request["url"] == "http://zabbix/api_jsonrpc.php"
    assert request["headers"]["Authorization"] == "Bearer secret"
    assert request["payload"]["jsonrpc"] == "2.0"


@pytest.mark.asyncio
async def test_get_alerts_queries_active_triggers(monkeypatch) -> None:
    captured: Dict[str, Any] = {}

    def _triggers(params):
        captured.update(params)
        return [
            {
                "triggerid": "23001",
                "description": "Unavailable by ICMP ping",
                "priority": "4",
                "lastchange": str(NOW_S),
                "value": "1",
                "hosts": [{"name": "edge-router"}],
            },
            {
                "triggerid": "23002",
                "description": "Disk space low",
                "priority": "0",
                "lastchange": "0",
                "value": "1",
                "hosts": [],
            },
        ]

    client = _StubAsyncClient({"trigger.get": _triggers})
    _install(monkeypatch, client)

    alerts = await ZabbixGateway("http://zabbix/", token="t").get_alerts(limit=10)

    assert captured["filter"] == {"value": 1, "status": 0}
    assert captured["sortfield"] == "priority"
    assert captured["sortorder"] == "DESC"
    assert captured["limit"] == 10

    assert alerts[0].severity is AlertSeverity.HIGH
    assert alerts[0].host == "edge-router"
    assert alerts[0].timestamp == NOW
    assert alerts[0].title == "Unavailable by ICMP ping"
    assert alerts[1].severity is AlertSeverity.LOW
    assert alerts[1].host == "Unknown"


@pytest.mark.asyncio
async def test_get_critical_history_collects_series(monkeypatch) -> None:
    history_params: Dict[str, Dict[str, Any]] = {}
    rows = {
        "1": [
            {"clock": str(NOW_S), "value": "0"},
            {"clock": str(NOW_S - 60), "value": "1"},
        ],
        "2": [{"clock": str(NOW_S), "value": "0.25"}],
        "3": [{"clock": str(NOW_S), "value": "not-a-number"}],
        "4": [{"clock": str(NOW_S), "value": "71.5"}],
    }

    def _history(params):
        item_id = params["itemids"][0]
        history_params[item_id] = params
        return rows[item_id]

    client = _StubAsyncClient(
        {
            "host.get": lambda params: [{"hostid": "10084"}],
            "item.get": lambda params: [
                {"itemid": "9", "key_": "system.cpu.util[,idle]", "units": "%", "value_type": "0"},
                {"itemid": "1", "key_": "icmpping", "units": "", "value_type": "3"},
                {"itemid": "2", "key_": "icmppingsec", "units": "s", "value_type": "0"},
                {"itemid": "3", "key_": "system.cpu.util", "units": "%", "value_type": "0"},
                {"itemid": "4", "key_": "vm.memory.size[pused]", "units": "%", "value_type": "0"},
                {"itemid": "5", "key_": "vm.memory.utilization", "units": "%", "value_type": "0"},
            ],
            "history.get": _history,
        }
    )
    _install(monkeypatch, client)

    gateway = ZabbixGateway("http://zabbix", token="t", history_limit=500)
    history = await gateway.get_critical_history("10084", TimeRange.ONE_HOUR, now=NOW)

    assert history.host_id == "10084"
    assert history.time_range is TimeRange.ONE_HOUR
    assert history.collected_at == NOW
    assert history.items == {
        Signal.PING: "icmpping",
        Signal.LATENCY: "icmppingsec",
        Signal.CPU: "system.cpu.util",
        Signal.MEMORY: "vm.memory.size[pused]",
    }
    assert history.metrics.ping == (
        MetricSample((NOW_S - 60) * 1000, 1.0),
        MetricSample(NOW_S * 1000, 0.0),
    )
    assert history.metrics.latency == (MetricSample(NOW_S * 1000, 250.0),)
    assert history.metrics.cpu == (MetricSample(NOW_S * 1000, 0.0),)
    assert history.metrics.memory == (MetricSample(NOW_S * 1000, 71.5),)

    assert set(history_params) == {"1", "2", "3", "4"}
    assert history_params["1"]["history"] == 3
    assert history_params["2"]["history"] == 0
    assert history_params["1"]["time_from"] == NOW_S - 3600
    assert history_params["1"]["time_till"] == NOW_S
    assert history_params["1"]["sortfield"] == "clock"
    assert history_params["1"]["sortorder"] == "DESC"
    assert history_params["1"]["limit"] == 500


@pytest.mark.asyncio
async def test_get_critical_history_keeps_newest_rows_when_limited(monkeypatch) -> None:
    # A day of one-minute ping rows; the host stopped answering 15 minutes ago.
    stored = [
        {"clock": str(NOW_S - age * 60), "value": "0" if age < 15 else "1"}
        for age in range(1439, -1, -1)
    ]

    def _history(params):
        rows = [
            row
            for row in stored
            if params["time_from"] <= int(row["clock"]) <= params["time_till"]
        ]
        rows.sort(key=lambda row: int(row["clock"]), reverse=params["sortorder"] == "DESC")
        return rows[: params["limit"]]

    client = _StubAsyncClient(
        {
            "host.get": lambda params: [{"hostid": "10084"}],
            "item.get": lambda params: [
                {"itemid": "1", "key_": "icmpping", "units": "", "value_type": "3"},
            ],
            "history.get": _history,
        }
    )
    _install(monkeypatch, client)

    gateway = ZabbixGateway("http://zabbix", token="t", history_limit=1000)
    history = await gateway.get_critical_history("10084", TimeRange.ONE_DAY, now=NOW)

    ping = history.metrics.ping
    assert len(ping) == 1000
    assert ping[-1] == MetricSample(NOW_S * 1000, 0.0)
    assert [sample.timestamp for sample in ping] == sorted(
        sample.timestamp for sample in ping
    )

    result = InstabilityPredictor().predict(history.metrics, now=NOW)
    assert result.risk_score == 90
    assert result.risk_level is RiskLevel.CRITICAL


@pytest.mark.asyncio
async def test_get_critical_history_without_items_returns_empty_bundle(monkeypatch) -> None:
    client = _StubAsyncClient(
        {
            "host.get": lambda params: [{"hostid": "10084"}],
            "item.get": lambda params: [],
        }
    )
    _install(monkeypatch, client)

    history = await ZabbixGateway("http://zabbix", token="t").get_critical_history(
        "10084", TimeRange.SIX_HOURS, now=NOW
    )

    assert history.metrics.sample_counts() == {
        "ping": 0,
        "latency": 0,
        "cpu": 0,
        "memory": 0,
    }
    assert "history.get" not in _methods(client)


@pytest.mark.asyncio
async def test_get_critical_history_unknown_host(monkeypatch) -> None:
    client = _StubAsyncClient({"host.get": lambda params: []})
    _install(monkeypatch, client)

    with pytest.raises(HostNotFoundError):
        await ZabbixGateway("http://zabbix", token="t").get_critical_history(
            "404", TimeRange.ONE_HOUR, now=NOW
        )

    assert _methods(client) == ["host.get"]


def _latest_items(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    host_id = params["hostids"][0]
    return [
        {
            "itemid": f"{host_id}1",
            "name": "CPU utilization",
            "key_": "system.cpu.util",
            "lastvalue": "101.7",
            "units": "%",
            "lastclock": str(NOW_S),
            "value_type": "0",
        },
        {
            "itemid": f"{host_id}2",
            "name": "ICMP response time",
            "key_": "icmppingsec",
            "lastvalue": "0.0042",
            "units": "s",
            "lastclock": "0",
            "value_type": "0",
        },
        {
            "itemid": f"{host_id}3",
            "name": "Zabbix agent version",
            "key_": "agent.version",
            "lastvalue": "7.0.3",
            "units": "",
            "lastclock": str(NOW_S),
            "value_type": "3",
        },
    ]


@pytest.mark.asyncio
async def test_get_latest_metrics_normalizes_relevant_items(monkeypatch) -> None:
    client = _StubAsyncClient(
        {
            "host.get": lambda params: [
                {"hostid": "10084", "name": "Zabbix server"},
                {"hostid": "10085", "name": "edge-router"},
            ],
            "item.get": _latest_items,
        }
    )
    _install(monkeypatch, client)

    gateway = ZabbixGateway("http://zabbix", token="t", metrics_host_limit=2)
    metrics = await gateway.get_latest_metrics()

    assert _methods(client) == ["host.get", "item.get", "item.get"]
    assert client.requests[0]["payload"]["params"]["limit"] == 2
    item_params = client.requests[1]["payload"]["params"]
    assert item_params["limit"] == LATEST_ITEMS_PER_HOST
    assert item_params["filter"] == {"value_type": [0, 3]}
    assert "lastvalue" in item_params["output"]

    assert [metric.key for metric in metrics] == [
        "system.cpu.util",
        "icmppingsec",
        "system.cpu.util",
        "icmppingsec",
    ]
    assert metrics[0] == HostMetric(
        host_id="10084",
        host_name="Zabbix server",
        item_id="100841",
        name="CPU utilization",
        key="system.cpu.util",
        value=100.0,
        units="%",
        type=MetricType.CPU,
        last_update=NOW,
    )
    assert metrics[1].value == 4.2
    assert metrics[1].units == "ms"
    assert metrics[1].type is MetricType.PING
    assert metrics[1].last_update is None
    assert metrics[2].host_name == "edge-router"


@pytest.mark.asyncio
async def test_get_latest_metrics_for_selected_hosts(monkeypatch) -> None:
    client = _StubAsyncClient(
        {
            "host.get": lambda params: [{"hostid": "10085", "name": "edge-router"}],
            "item.get": lambda params: [
                {
                    "itemid": "1",
                    "name": "Memory utilization",
                    "key_": "vm.memory.utilization",
                    "lastvalue": "not-a-number",
                    "units": "%",
                    "lastclock": str(NOW_S),
                    "value_type": "0",
                }
            ],
        }
    )
    _install(monkeypatch, client)

    metrics = await ZabbixGateway("http://zabbix", token="t").get_latest_metrics(
        ["10085"]
    )

    host_params = client.requests[0]["payload"]["params"]
    assert host_params["hostids"] == ["10085"]
    assert "limit" not in host_params
    assert [(m.host_id, m.value, m.type) for m in metrics] == [
        ("10085", 0.0, MetricType.MEMORY)
    ]


@pytest.mark.asyncio
async def test_get_latest_metrics_without_hosts(monkeypatch) -> None:
    client = _StubAsyncClient({"host.get": lambda params: []})
    _install(monkeypatch, client)

    assert await ZabbixGateway("http://zabbix", token="t").get_latest_metrics() == []
    assert _methods(client) == ["host.get"]


@pytest.mark.asyncio
async def test_get_api_version_is_unauthenticated(monkeypatch) -> None:
    client = _StubAsyncClient({"apiinfo.version": lambda params: "7.0.3"})
    _install(monkeypatch, client)

    version = await ZabbixGateway("http://zabbix", token="secret").get_api_version()

    assert version == "7.0.3"
    assert "Authorization" not in client.requests[0]["headers"]
    assert client.requests[0]["payload"]["params"] == []


@pytest.mark.asyncio
async def test_request_ids_increase(monkeypatch) -> None:
    client = _StubAsyncClient({"apiinfo.version": lambda params: "7.0.3"})
    _install(monkeypatch, client)
    gateway = ZabbixGateway("http://zabbix", token="t")

    await gateway.get_api_version()
    await gateway.get_api_version()

    assert [r["payload"]["id"] for r in client.requests] == [1, 2]


@pytest.mark.asyncio
async def test_json_rpc_error_raises_zabbix_api_error(monkeypatch) -> None:
    class _ErrorClient(_StubAsyncClient):
        async def post(self, url, json, headers):
            return _StubResponse(
                200,
                {
                    "jsonrpc": "2.0",
                    "error": {
                        "code": -32602,
                        "message": "Invalid params.",
                        "data": "Not authorized.",
                    },
                    "id": json["id"],
                },
            )

    _install(monkeypatch, _ErrorClient({}))

    with pytest.raises(ZabbixApiError) as exc:
        await ZabbixGateway("http://zabbix", token="bad").get_hosts()

    assert exc.value.code == -32602
    assert "Invalid params." in str(exc.value)
    assert exc.value.details["data"] == "Not authorized."


@pytest.mark.asyncio
async def test_http_error_raises_zabbix_api_error(monkeypatch) -> None:
    class _FailingStatusClient(_StubAsyncClient):
        async def post(self, url, json, headers):
            return _StubResponse(500, {})

    _install(monkeypatch, _FailingStatusClient({}))

    with pytest.raises(ZabbixApiError) as exc:
        await ZabbixGateway("http://zabbix", token="t").get_hosts()

    assert "HTTP 500" in str(exc.value)


@pytest.mark.asyncio
async def test_request_error_raises_zabbix_api_error(monkeypatch) -> None:
    class _FailingClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return None

        async def post(self, url, json, headers):
            raise httpx.RequestError("boom")

    _install(monkeypatch, _FailingClient())

    with pytest.raises(ZabbixApiError) as exc:
        await ZabbixGateway("http://zabbix", token="t").get_alerts()

    assert "Failed to communicate" in str(exc.value)


@pytest.mark.asyncio
async def test_invalid_json_raises_zabbix_api_error(monkeypatch) -> None:
    class _HtmlClient(_StubAsyncClient):
        async def post(self, url, json, headers):
            return _StubResponse(200, ValueError("Expecting value"))

    _install(monkeypatch, _HtmlClient({}))

    with pytest.raises(ZabbixApiError) as exc:
        await ZabbixGateway("http://zabbix", token="t").get_hosts()

    assert "invalid JSON" in str(exc.value)


@pytest.mark.parametrize(
    ("priority", "severity"),
    [
        ("5", AlertSeverity.CRITICAL),
        ("4", AlertSeverity.HIGH),
        (3, AlertSeverity.MEDIUM),
        ("2", AlertSeverity.MEDIUM),
        ("1", AlertSeverity.LOW),
        ("0", AlertSeverity.LOW),
        (None, AlertSeverity.LOW),
    ],
)
def test_map_priority(priority, severity) -> None:
    assert map_priority(priority) is severity
