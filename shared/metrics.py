"""
Shared metrics configuration for the document submission client.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional
import time
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for the client."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up client metrics."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # Remote API metrics
        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "Remote API request duration in seconds",
            ["step"],
            registry=self.registry
        )

        self._metrics["document_submissions_total"] = Counter(
            "document_submissions_total",
            "Total document submissions by classified outcome",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["credential_refresh_total"] = Counter(
            "credential_refresh_total",
            "Total credential refreshes",
            ["status"],
            registry=self.registry
        )

        # Rate gate metrics
        self._metrics["rate_gate_wait_seconds"] = Histogram(
            "rate_gate_wait_seconds",
            "Time spent waiting for a rate gate slot",
            registry=self.registry
        )

        self._metrics["rate_gate_window_resets_total"] = Counter(
            "rate_gate_window_resets_total",
            "Total quota window resets",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_submission(self, outcome: str):
        """Record a classified submission."""
        self._metrics["document_submissions_total"].labels(outcome=outcome).inc()

    def record_credential_refresh(self, status: str):
        """Record a credential refresh attempt."""
        self._metrics["credential_refresh_total"].labels(status=status).inc()

    def record_gate_wait(self, duration: float):
        """Record time a caller waited for admission."""
        self._metrics["rate_gate_wait_seconds"].observe(duration)

    def record_window_reset(self):
        """Record a quota window reset."""
        self._metrics["rate_gate_window_resets_total"].inc()

    @contextmanager
    def time_request(self, step: str):
        """Context manager to time a remote API call."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            self._metrics["http_request_duration_seconds"].labels(step=step).observe(duration)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
