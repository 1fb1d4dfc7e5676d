"""
Shared metrics configuration for the Roaming Access Gateway.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, Info
from typing import Dict, Any, Optional


class MetricsCollector:
    """Centralized metrics collector for a service instance."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Error metrics
        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type", "service"],
            registry=self.registry
        )

        self._setup_roaming_metrics()

    def _setup_roaming_metrics(self):
        """Set up playurl pipeline metrics."""
        self._metrics["identity_cache_hits_total"] = Counter(
            "identity_cache_hits_total",
            "Identity lookups answered from cache",
            registry=self.registry
        )

        self._metrics["identity_cache_misses_total"] = Counter(
            "identity_cache_misses_total",
            "Identity lookups that required an upstream call",
            registry=self.registry
        )

        self._metrics["identity_cache_size"] = Gauge(
            "identity_cache_size",
            "Number of cached identities",
            registry=self.registry
        )

        self._metrics["upstream_requests_total"] = Counter(
            "upstream_requests_total",
            "Upstream API calls",
            ["endpoint", "outcome"],
            registry=self.registry
        )

        self._metrics["blocked_requests_total"] = Counter(
            "blocked_requests_total",
            "Requests rejected by the allow-list",
            registry=self.registry
        )

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_error(self, error_type: str, service: Optional[str] = None):
        """Record error metrics."""
        service_name = service or self.service_name
        self._metrics["errors_total"].labels(error_type=error_type, service=service_name).inc()

    def record_cache_lookup(self, hit: bool):
        name = "identity_cache_hits_total" if hit else "identity_cache_misses_total"
        self._metrics[name].inc()

    def record_upstream_request(self, endpoint: str, outcome: str):
        self._metrics["upstream_requests_total"].labels(endpoint=endpoint, outcome=outcome).inc()

    def record_blocked_request(self):
        self._metrics["blocked_requests_total"].inc()

    def set_cache_size(self, size: int):
        self._metrics["identity_cache_size"].set(size)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
