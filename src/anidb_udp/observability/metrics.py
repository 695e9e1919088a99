# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request metrics for the AniDB UDP client.

This module provides:
1. ClientMetrics - Dataclass counting requests, replies, failures and throttle waits
2. PrometheusClientMetrics - Optional Prometheus-style metrics for observability

Usage:
    metrics = ClientMetrics()

    metrics.record_request("ANIME", wait_seconds=1.2)
    metrics.record_response()
    metrics.record_protocol_error("ANIME", code=330)

    stats = metrics.get_stats()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .constants import (
    ENCODING_ERRORS_TOTAL,
    PROTOCOL_ERRORS_TOTAL,
    REQUESTS_SENT_TOTAL,
    RESPONSES_RECEIVED_TOTAL,
    THROTTLE_WAIT_SECONDS,
    TRANSPORT_ERRORS_TOTAL,
)

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Histogram as HistogramType
else:
    CounterType = object
    HistogramType = object

# Try to import prometheus_client for optional Prometheus metrics
try:
    from prometheus_client import Counter as _Counter, Histogram as _Histogram

    Counter: type[CounterType] | None = _Counter
    Histogram: type[HistogramType] | None = _Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Histogram = None
    PROMETHEUS_AVAILABLE = False


@dataclass
class ClientMetrics:
    """
    In-process counters for one client.

    Example:
        >>> metrics = ClientMetrics()
        >>> metrics.record_request("EPISODE", wait_seconds=0.5)
        >>> metrics.requests_sent
        1
        >>> metrics.total_throttle_wait_seconds
        0.5
    """

    requests_sent: int = 0
    responses_received: int = 0
    protocol_errors: int = 0
    transport_errors: int = 0
    encoding_errors: int = 0

    # Requests that had to wait for their send slot
    throttle_waits: int = 0
    total_throttle_wait_seconds: float = 0.0

    def record_request(self, command: str, wait_seconds: float = 0.0) -> None:
        """Record a command leaving the client after ``wait_seconds`` of throttling."""
        self.requests_sent += 1
        if wait_seconds > 0:
            self.throttle_waits += 1
            self.total_throttle_wait_seconds += wait_seconds

        prom = get_prometheus_client_metrics()
        if prom:
            prom.observe_request(command, wait_seconds)

    def record_response(self) -> None:
        self.responses_received += 1

        prom = get_prometheus_client_metrics()
        if prom:
            prom.observe_response()

    def record_protocol_error(self, command: str, code: int | None = None) -> None:
        self.protocol_errors += 1

        prom = get_prometheus_client_metrics()
        if prom:
            prom.observe_protocol_error(command, code)

    def record_transport_error(self, command: str) -> None:
        self.transport_errors += 1

        prom = get_prometheus_client_metrics()
        if prom:
            prom.observe_transport_error(command)

    def record_encoding_error(self, command: str) -> None:
        self.encoding_errors += 1

        prom = get_prometheus_client_metrics()
        if prom:
            prom.observe_encoding_error(command)

    def get_average_throttle_wait(self) -> float:
        """Average wait over all sent requests, 0.0 before the first one."""
        if self.requests_sent == 0:
            return 0.0
        return self.total_throttle_wait_seconds / self.requests_sent

    def get_stats(self) -> dict[str, Any]:
        """Return metrics as a dictionary for JSON serialization."""
        return {
            "requests_sent": self.requests_sent,
            "responses_received": self.responses_received,
            "protocol_errors": self.protocol_errors,
            "transport_errors": self.transport_errors,
            "encoding_errors": self.encoding_errors,
            "throttle_waits": self.throttle_waits,
            "total_throttle_wait_seconds": self.total_throttle_wait_seconds,
            "average_throttle_wait_seconds": self.get_average_throttle_wait(),
        }

    def reset(self) -> None:
        """Reset all metrics to zero."""
        self.requests_sent = 0
        self.responses_received = 0
        self.protocol_errors = 0
        self.transport_errors = 0
        self.encoding_errors = 0
        self.throttle_waits = 0
        self.total_throttle_wait_seconds = 0.0


class PrometheusClientMetrics:
    """
    Optional Prometheus metrics for the client.

    Only instantiated if prometheus_client is available.

    Metrics:
        - anidb_udp_requests_sent_total: Counter of commands sent
        - anidb_udp_protocol_errors_total: Counter of error replies
        - anidb_udp_transport_errors_total: Counter of socket failures
        - anidb_udp_encoding_errors_total: Counter of non-UTF-8 replies
        - anidb_udp_throttle_wait_seconds: Histogram of send slot waits
    """

    def __init__(self, registry: Any | None = None) -> None:
        """
        Initialize Prometheus client metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.

        Raises:
            ImportError: If prometheus_client is not available.
        """
        if not PROMETHEUS_AVAILABLE or Counter is None or Histogram is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install prometheus-client"
            )

        self.requests_sent = Counter(
            REQUESTS_SENT_TOTAL,
            "Total commands sent to the AniDB UDP API",
            ["command"],
            registry=registry,
        )

        # Replies are not labelled; the command label lives on requests_sent
        self.responses_received = Counter(
            RESPONSES_RECEIVED_TOTAL,
            "Total reply datagrams received",
            registry=registry,
        )

        self.protocol_errors = Counter(
            PROTOCOL_ERRORS_TOTAL,
            "Replies that matched no expected record",
            ["command", "code"],
            registry=registry,
        )

        self.transport_errors = Counter(
            TRANSPORT_ERRORS_TOTAL,
            "Socket failures",
            ["command"],
            registry=registry,
        )

        self.encoding_errors = Counter(
            ENCODING_ERRORS_TOTAL,
            "Replies that were not valid UTF-8",
            ["command"],
            registry=registry,
        )

        self.throttle_wait_seconds = Histogram(
            THROTTLE_WAIT_SECONDS,
            "Time spent waiting for a send slot",
            buckets=[0, 0.1, 0.5, 1, 2, 4, 8, 16],
            registry=registry,
        )

        logger.info("Prometheus client metrics initialized")

    def observe_request(self, command: str, wait_seconds: float) -> None:
        self.requests_sent.labels(command=command).inc()
        self.throttle_wait_seconds.observe(wait_seconds)

    def observe_response(self) -> None:
        self.responses_received.inc()

    def observe_protocol_error(self, command: str, code: int | None) -> None:
        label = str(code) if code is not None else "unknown"
        self.protocol_errors.labels(command=command, code=label).inc()

    def observe_transport_error(self, command: str) -> None:
        self.transport_errors.labels(command=command).inc()

    def observe_encoding_error(self, command: str) -> None:
        self.encoding_errors.labels(command=command).inc()


# Module-level singleton for Prometheus metrics (optional)
_prometheus_client_metrics: PrometheusClientMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_client_metrics() -> PrometheusClientMetrics | None:
    """
    Get or create the Prometheus client metrics singleton.

    Returns:
        PrometheusClientMetrics instance if prometheus_client is available,
        None otherwise.
    """
    global _prometheus_client_metrics

    if not PROMETHEUS_AVAILABLE:
        return None

    # Double-checked locking pattern for thread-safe singleton initialization
    if _prometheus_client_metrics is None:
        with _prometheus_lock:
            if _prometheus_client_metrics is None:
                try:
                    _prometheus_client_metrics = PrometheusClientMetrics()
                except Exception as e:
                    logger.warning(f"Failed to initialize Prometheus client metrics: {e}")
                    return None

    return _prometheus_client_metrics


def reset_prometheus_client_metrics() -> None:
    """Reset the Prometheus client metrics singleton (mainly for testing)."""
    global _prometheus_client_metrics
    _prometheus_client_metrics = None


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
]
