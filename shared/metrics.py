"""
Shared metrics configuration for the SUDS access layer.
"""

from typing import Dict, Any, Optional
import threading

from prometheus_client import Counter, Histogram, CollectorRegistry


class MetricsCollector:
    """Prometheus metrics for cache decisions and SUDS round trips."""

    def __init__(self, service_name: str = "suds", registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up the access layer metrics."""
        self._metrics["suds_cache_lookups_total"] = Counter(
            "suds_cache_lookups_total",
            "Cache lookups for init and auth payloads",
            ["kind", "result"],
            registry=self.registry
        )

        self._metrics["suds_cache_writes_total"] = Counter(
            "suds_cache_writes_total",
            "Cache writes and invalidations",
            ["kind", "action"],
            registry=self.registry
        )

        self._metrics["suds_remote_calls_total"] = Counter(
            "suds_remote_calls_total",
            "Remote calls made to SUDS",
            ["endpoint", "outcome"],
            registry=self.registry
        )

        self._metrics["suds_remote_call_duration_seconds"] = Histogram(
            "suds_remote_call_duration_seconds",
            "Remote call duration in seconds",
            ["endpoint"],
            registry=self.registry
        )

        self._metrics["suds_batches_total"] = Counter(
            "suds_batches_total",
            "Batches issued for bulk comment counts",
            [],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_cache_lookup(self, kind: str, hit: bool):
        self.increment_counter("suds_cache_lookups_total", kind=kind, result="hit" if hit else "miss")

    def record_cache_write(self, kind: str, action: str):
        self.increment_counter("suds_cache_writes_total", kind=kind, action=action)

    def record_remote_call(self, endpoint: str, outcome: str, duration: float):
        """Record one SUDS round trip."""
        self.increment_counter("suds_remote_calls_total", endpoint=endpoint, outcome=outcome)
        self.observe_histogram("suds_remote_call_duration_seconds", duration, endpoint=endpoint)

    def record_batches(self, count: int):
        with self._lock:
            self._metrics["suds_batches_total"].inc(count)

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            with self._lock:
                self._metrics[metric_name].labels(**labels).inc()

    def observe_histogram(self, metric_name: str, value: float, **labels):
        """Observe a histogram metric."""
        if metric_name in self._metrics:
            with self._lock:
                self._metrics[metric_name].labels(**labels).observe(value)

    def sample(self, metric_name: str, **labels) -> float:
        """Current value of a sample, 0.0 when it has not been recorded yet."""
        value = self.registry.get_sample_value(metric_name, labels or None)
        return value if value is not None else 0.0
