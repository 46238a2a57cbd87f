"""
Netwatch - host instability prediction over Zabbix telemetry.

Layer Structure:
- Domain: Metric entities, the instability predictor and gateway interfaces
- Application: Use cases and DTOs
- Infrastructure: Zabbix JSON-RPC gateway and health checks
- Presentation: FastAPI controllers
- Shared: Cross-cutting concerns (logging, enums, environment helpers)
- Main: Composition root, configuration and entry point
"""
