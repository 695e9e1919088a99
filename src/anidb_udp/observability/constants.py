# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``anidb_udp_`` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`

Label Best Practices:
    Use only categorical labels:
    - `command` - Command name (AUTH, LOGOUT, ANIME, EPISODE, FILE, GROUP)
    - `code` - Status code as text, or `unknown`

    NEVER use session keys, usernames or lookup ids as labels.
"""

METRIC_PREFIX = "anidb_udp"
"""Prefix for all Prometheus metrics in this library."""

REQUESTS_SENT_TOTAL = f"{METRIC_PREFIX}_requests_sent_total"
"""Total commands sent."""

RESPONSES_RECEIVED_TOTAL = f"{METRIC_PREFIX}_responses_received_total"
"""Total reply datagrams received and decoded as text."""

PROTOCOL_ERRORS_TOTAL = f"{METRIC_PREFIX}_protocol_errors_total"
"""Total replies that matched no expected record."""

TRANSPORT_ERRORS_TOTAL = f"{METRIC_PREFIX}_transport_errors_total"
"""Total socket failures."""

ENCODING_ERRORS_TOTAL = f"{METRIC_PREFIX}_encoding_errors_total"
"""Total replies that were not valid UTF-8."""

THROTTLE_WAIT_SECONDS = f"{METRIC_PREFIX}_throttle_wait_seconds"
"""Time spent waiting for a send slot."""


__all__ = [
    "ENCODING_ERRORS_TOTAL",
    "METRIC_PREFIX",
    "PROTOCOL_ERRORS_TOTAL",
    "REQUESTS_SENT_TOTAL",
    "RESPONSES_RECEIVED_TOTAL",
    "THROTTLE_WAIT_SECONDS",
    "TRANSPORT_ERRORS_TOTAL",
]
