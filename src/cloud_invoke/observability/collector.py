# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unified metrics collector supporting both dict-based and Prometheus metrics.

Features:
    1. Thread-safe counter/gauge/histogram operations
    2. Prometheus registration of the predefined invocation metrics
    3. Dict snapshot for JSON export and tests
    4. Label cardinality protection (max 1000 unique combinations per metric)
    5. Optional HTTP server for Prometheus scraping

Usage:
    >>> from cloud_invoke.observability import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.inc_counter('cloud_invoke_invocations_total',
    ...                       labels={'service': 's3', 'operation': 'ListBuckets',
    ...                               'outcome': 'success'})
    >>> metrics = collector.get_metrics()
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server as _start_http_server,
)

from .constants import (
    ANOMALIES_TOTAL,
    INFLIGHT_INVOCATIONS,
    INVOCATION_DURATION_SECONDS,
    INVOCATIONS_TOTAL,
    LATENCY_BUCKETS,
    SETUP_FAULTS_TOTAL,
)

logger = logging.getLogger(__name__)


@dataclass
class MetricDefinition:
    """
    Definition for a metric that can be instantiated.

    This dataclass defines the schema for metrics, including their type,
    description, labels, and histogram buckets.
    """

    name: str
    metric_type: str  # 'counter', 'gauge', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: list[float] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    INVOCATIONS_TOTAL: MetricDefinition(
        INVOCATIONS_TOTAL,
        "counter",
        "Total invocations that delivered a result",
        ("service", "operation", "outcome"),
    ),
    ANOMALIES_TOTAL: MetricDefinition(
        ANOMALIES_TOTAL,
        "counter",
        "Total anomaly results",
        ("service", "operation", "category"),
    ),
    SETUP_FAULTS_TOTAL: MetricDefinition(
        SETUP_FAULTS_TOTAL,
        "counter",
        "Total invocations failed before transport submission",
        ("service", "stage"),
    ),
    INFLIGHT_INVOCATIONS: MetricDefinition(
        INFLIGHT_INVOCATIONS,
        "gauge",
        "Invocations submitted and awaiting a result",
        ("service",),
    ),
    INVOCATION_DURATION_SECONDS: MetricDefinition(
        INVOCATION_DURATION_SECONDS,
        "histogram",
        "Time from send to result delivery",
        ("service", "operation"),
        buckets=LATENCY_BUCKETS,
    ),
}

_PROM_TYPES: dict[str, Any] = {
    "counter": Counter,
    "gauge": Gauge,
    "histogram": Histogram,
}


class UnifiedMetricsCollector:
    """
    Metrics collector backing both a dict snapshot and Prometheus.

    Thread Safety:
        All dict operations use an RLock. Prometheus client objects are
        thread-safe on their own.

    Cardinality Protection:
        At most MAX_LABEL_COMBINATIONS unique label combinations are tracked
        per metric; further combinations are dropped with a warning.

    Example:
        >>> collector = UnifiedMetricsCollector(registry=CollectorRegistry())
        >>> collector.inc_counter(INVOCATIONS_TOTAL, labels={...})
        >>> collector.get_metrics()["counters"]
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to publish to a Prometheus registry
            registry: Optional Prometheus CollectorRegistry (tests pass a fresh one)
        """
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY

        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._gauges: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )

        self._lock = threading.RLock()
        self._prom_metrics: dict[str, Any] = {}
        self._label_combinations: dict[str, set[str]] = defaultdict(set)
        self._server_running = False

        logger.debug(
            f"UnifiedMetricsCollector initialized "
            f"(prometheus={'enabled' if self._enable_prometheus else 'disabled'})"
        )

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        """Convert labels dict to a stable string key."""
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        if label_key in self._label_combinations[name]:
            return True
        if len(self._label_combinations[name]) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Cardinality limit ({self.MAX_LABEL_COMBINATIONS}) reached "
                f"for metric {name}. Dropping label combination: {label_key}"
            )
            return False
        self._label_combinations[name].add(label_key)
        return True

    def _get_or_create_prom(self, name: str, metric_type: str) -> Any | None:
        """Get or create the Prometheus object for a predefined metric."""
        if not self._enable_prometheus:
            return None

        defn = METRIC_DEFINITIONS.get(name)
        if defn is None or defn.metric_type != metric_type:
            # Only predefined metrics are published to Prometheus
            return None

        with self._lock:
            if name not in self._prom_metrics:
                kwargs: dict[str, Any] = {"registry": self._registry}
                if metric_type == "histogram":
                    kwargs["buckets"] = defn.buckets or LATENCY_BUCKETS
                try:
                    self._prom_metrics[name] = _PROM_TYPES[metric_type](
                        name, defn.description, list(defn.label_names), **kwargs
                    )
                except ValueError as e:
                    # Duplicate registration in a shared registry
                    logger.warning(f"Failed to create Prometheus {metric_type} {name}: {e}")
                    self._prom_metrics[name] = None
            return self._prom_metrics[name]

    @staticmethod
    def _apply(prom_metric: Any, labels: dict[str, str] | None) -> Any:
        return prom_metric.labels(**labels) if labels else prom_metric

    # === Counter Operations ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Increment a counter metric.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value

        prom_counter = self._get_or_create_prom(name, "counter")
        if prom_counter is not None:
            try:
                self._apply(prom_counter, labels).inc(value)
            except ValueError as e:
                logger.debug(f"Prometheus counter update failed for {name}: {e}")

    # === Gauge Operations ===

    def inc_gauge(
        self,
        name: str,
        value: float = 1.0,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Increment a gauge metric (pass a negative value to decrement)."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] += value

        prom_gauge = self._get_or_create_prom(name, "gauge")
        if prom_gauge is not None:
            try:
                self._apply(prom_gauge, labels).inc(value)
            except ValueError as e:
                logger.debug(f"Prometheus gauge inc failed for {name}: {e}")

    def dec_gauge(
        self,
        name: str,
        value: float = 1.0,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Decrement a gauge metric."""
        self.inc_gauge(name, -value, labels)

    # === Histogram Operations ===

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Record an observation in a histogram."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            # Keep only recent observations to bound memory
            if len(observations) > 10000:
                self._histograms[name][label_key] = observations[-5000:]

        prom_histogram = self._get_or_create_prom(name, "histogram")
        if prom_histogram is not None:
            try:
                self._apply(prom_histogram, labels).observe(value)
            except ValueError as e:
                logger.debug(f"Prometheus histogram observe failed for {name}: {e}")

    # === Snapshot Operations ===

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics.

        Returns a dict suitable for JSON serialization with structure:
        {
            "counters": {"metric_name": {"label_key": value, ...}, ...},
            "gauges": {"metric_name": {"label_key": value, ...}, ...},
            "histograms": {"metric_name": {"label_key": {...}, ...}, ...}
        }
        """
        with self._lock:
            counters = {
                name: dict(label_values)
                for name, label_values in self._counters.items()
            }
            gauges = {
                name: dict(label_values) for name, label_values in self._gauges.items()
            }
            histograms: dict[str, dict[str, dict[str, Any]]] = {}
            for name, label_values in self._histograms.items():
                histograms[name] = {}
                for label_key, observations in label_values.items():
                    if observations:
                        histograms[name][label_key] = {
                            "count": len(observations),
                            "sum": sum(observations),
                            "avg": sum(observations) / len(observations),
                            "min": min(observations),
                            "max": max(observations),
                        }

        return {
            "counters": counters,
            "gauges": gauges,
            "histograms": histograms,
        }

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Return the current dict-side value of a counter."""
        with self._lock:
            return self._counters.get(name, {}).get(self._labels_to_key(labels), 0)

    # === Lifecycle ===

    def reset(self) -> None:
        """Reset all dict-side metrics to zero."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._label_combinations.clear()

        logger.debug("Metrics collector reset")

    def start_http_server(self, host: str = "127.0.0.1", port: int = 9090) -> bool:
        """
        Start the Prometheus HTTP server for metrics scraping.

        Binds to localhost by default. Returns True if the server is running.
        """
        if not self._enable_prometheus:
            logger.warning("Prometheus disabled; not starting metrics server")
            return False
        if self._server_running:
            return True
        try:
            _start_http_server(port, addr=host, registry=self._registry)
        except OSError as e:
            logger.error(f"Failed to start Prometheus server: {e}")
            return False
        self._server_running = True
        logger.info(f"Prometheus metrics server listening on {host}:{port}")
        return True

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus

    @property
    def server_running(self) -> bool:
        return self._server_running


# =============================================================================
# Singleton Pattern
# =============================================================================

_global_collector: UnifiedMetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(
    enable_prometheus: bool = True,
) -> UnifiedMetricsCollector:
    """
    Get or create the global metrics collector singleton.

    Args:
        enable_prometheus: Whether to enable Prometheus metrics
            (only used on first call)
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = UnifiedMetricsCollector(
                    enable_prometheus=enable_prometheus
                )

    return _global_collector


def reset_metrics_collector() -> None:
    """
    Reset the global metrics collector singleton (mainly for testing).

    Prometheus objects already registered in the default registry stay
    registered; a new collector logs and skips the duplicates.
    """
    global _global_collector
    with _collector_lock:
        if _global_collector:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
