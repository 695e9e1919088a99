# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the AniDB UDP client.

This package provides:
- ClientMetrics: in-process request counters
- PrometheusClientMetrics: optional Prometheus export (requires prometheus-client)
- Metric name constants with the ``anidb_udp_`` prefix

Install the Prometheus extra with:
    pip install anidb-udp[prometheus]
"""

from .constants import (
    ENCODING_ERRORS_TOTAL,
    METRIC_PREFIX,
    PROTOCOL_ERRORS_TOTAL,
    REQUESTS_SENT_TOTAL,
    RESPONSES_RECEIVED_TOTAL,
    THROTTLE_WAIT_SECONDS,
    TRANSPORT_ERRORS_TOTAL,
)
from .metrics import (
    PROMETHEUS_AVAILABLE,
    ClientMetrics,
    PrometheusClientMetrics,
    get_prometheus_client_metrics,
    reset_prometheus_client_metrics,
)

__all__ = [
    "ENCODING_ERRORS_TOTAL",
    "METRIC_PREFIX",
    "PROMETHEUS_AVAILABLE",
    "PROTOCOL_ERRORS_TOTAL",
    "REQUESTS_SENT_TOTAL",
    "RESPONSES_RECEIVED_TOTAL",
    "THROTTLE_WAIT_SECONDS",
    "TRANSPORT_ERRORS_TOTAL",
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
]
