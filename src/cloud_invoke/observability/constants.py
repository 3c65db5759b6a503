# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``cloud_invoke_`` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Use only categorical labels:
    - `service` - Service name (s3, dynamodb, ...)
    - `operation` - Operation name (ListBuckets, GetItem, ...)
    - `outcome` - "success" or "anomaly"
    - `category` - Anomaly category (not-found, fault, ...)
    - `stage` - Pipeline stage that failed (resolve, build, sign, submit)

    NEVER use request ids, hostnames derived from user input, or timestamps.
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "cloud_invoke"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Invocation Metrics (pipeline/send.py)
# =============================================================================

INVOCATIONS_TOTAL = f"{METRIC_PREFIX}_invocations_total"
"""Total invocations that delivered a result, by outcome."""

ANOMALIES_TOTAL = f"{METRIC_PREFIX}_anomalies_total"
"""Total anomaly results, by category."""

SETUP_FAULTS_TOTAL = f"{METRIC_PREFIX}_setup_faults_total"
"""Total invocations that failed before reaching the transport, by stage."""

INVOCATION_DURATION_SECONDS = f"{METRIC_PREFIX}_invocation_duration_seconds"
"""Time from send to result delivery (histogram)."""


# =============================================================================
# Active State Gauges
# =============================================================================

INFLIGHT_INVOCATIONS = f"{METRIC_PREFIX}_inflight_invocations"
"""Number of invocations submitted and awaiting a result."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
]
"""Latency buckets in seconds, sized for network round trips."""


__all__ = [
    "ANOMALIES_TOTAL",
    "INFLIGHT_INVOCATIONS",
    "INVOCATIONS_TOTAL",
    "INVOCATION_DURATION_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "SETUP_FAULTS_TOTAL",
]
