"""
Shared utilities for the Roaming Access Gateway.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings and the JSON file
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Gateway error types and the platform response envelope
- base_service: FastAPI app scaffolding, health and metrics routes

Do not import from service packages into shared/.
"""
