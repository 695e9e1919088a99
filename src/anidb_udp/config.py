# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the AniDB UDP client

This module provides the configuration dataclass for the client: where
the API lives, how the local socket is bound, how requests are spaced,
and which field masks the data lookups request.
"""

from dataclasses import dataclass

DEFAULT_HOST = "api.anidb.net"
DEFAULT_PORT = 9000

# AniDB's default and maximum MTU
MAX_DATAGRAM_SIZE = 1400

# The API bans clients that send more than one packet every two seconds
MIN_REQUEST_INTERVAL = 2.0

PROTOCOL_VERSION = 3


@dataclass
class ClientConfig:
    """
    Configuration for an AniDbClient.

    The field masks select which columns the server returns; the record
    schemas in ``anidb_udp.responses.records`` match these defaults, so
    changing a mask requires a matching schema.
    """

    # === Endpoint ===

    host: str = DEFAULT_HOST
    """Hostname of the UDP API."""

    port: int = DEFAULT_PORT
    """Port of the UDP API."""

    local_host: str = "0.0.0.0"  # noqa: S104  # nosec B104
    """Local address to bind."""

    local_port: int = 0
    """Local port to bind. 0 picks an ephemeral port."""

    # === Throttling ===

    min_request_interval: float = MIN_REQUEST_INTERVAL
    """Seconds between consecutive outgoing requests. May be raised, never lowered."""

    max_datagram_size: int = MAX_DATAGRAM_SIZE
    """Largest reply accepted, in bytes. Longer datagrams are truncated."""

    # === Protocol ===

    protocol_version: int = PROTOCOL_VERSION
    """Value sent as ``protover`` on AUTH."""

    encoding: str = "UTF8"
    """Value sent as ``enc`` on AUTH."""

    anime_mask: str = "fce8ba010080f8"
    """``amask`` sent with ANIME lookups."""

    file_mask: str = "71c2fef800"
    """``fmask`` sent with FILE lookups."""

    file_anime_mask: str = "00000000"
    """``amask`` sent with FILE lookups."""

    # === Metrics ===

    metrics_enabled: bool = True
    """Enable in-process request metrics."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.host:
            raise ValueError("host must not be empty")
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535")
        if not 0 <= self.local_port < 65536:
            raise ValueError("local_port must be between 0 and 65535")
        if self.min_request_interval < MIN_REQUEST_INTERVAL:
            raise ValueError(
                f"min_request_interval must be at least {MIN_REQUEST_INTERVAL} seconds"
            )
        if self.max_datagram_size < 1:
            raise ValueError("max_datagram_size must be at least 1")
        for name in ("anime_mask", "file_mask", "file_anime_mask"):
            mask = getattr(self, name)
            if not mask or any(c not in "0123456789abcdefABCDEF" for c in mask):
                raise ValueError(f"{name} must be a hex string")

    @property
    def remote_address(self) -> tuple[str, int]:
        return (self.host, self.port)

    @property
    def local_address(self) -> tuple[str, int]:
        return (self.local_host, self.local_port)


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MAX_DATAGRAM_SIZE",
    "MIN_REQUEST_INTERVAL",
    "PROTOCOL_VERSION",
    "ClientConfig",
]
