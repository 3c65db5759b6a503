# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for cloud-invoke.

Classes:
    UnifiedMetricsCollector: Metrics collector backing both a dict snapshot
        and the Prometheus registry.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    ANOMALIES_TOTAL,
    INFLIGHT_INVOCATIONS,
    INVOCATION_DURATION_SECONDS,
    INVOCATIONS_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    SETUP_FAULTS_TOTAL,
)

__all__ = [
    "ANOMALIES_TOTAL",
    "INFLIGHT_INVOCATIONS",
    "INVOCATIONS_TOTAL",
    "INVOCATION_DURATION_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "SETUP_FAULTS_TOTAL",
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
