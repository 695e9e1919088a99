# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
UDP transport for the AniDB client.

The transport owns one connected datagram endpoint, created lazily on the
first exchange and kept for the lifetime of the client. Each exchange sends
one datagram and waits for exactly one reply. There is no reply timeout
and no reconnect path: socket errors surface as TransportError and the
association stays as it is. Callers that need a deadline wrap the call in
``asyncio.wait_for``.
"""

import asyncio
import logging
from enum import Enum

from .config import MAX_DATAGRAM_SIZE
from .exceptions import TransportError

logger = logging.getLogger(__name__)


class TransportState(Enum):
    """Lifecycle of the UDP association."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


class _ReplyProtocol(asyncio.DatagramProtocol):
    """Queues every inbound datagram, or the socket error that replaced it."""

    def __init__(self) -> None:
        self.replies: asyncio.Queue[bytes | Exception] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr: object) -> None:
        self.replies.put_nowait(data)

    def error_received(self, exc: Exception) -> None:
        self.replies.put_nowait(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        self.replies.put_nowait(exc or ConnectionAbortedError("UDP endpoint closed"))


class UdpTransport:
    """
    Lazily connected request/reply datagram channel.

    Args:
        remote_address: ``(host, port)`` of the API.
        local_address: ``(host, port)`` to bind; port 0 is ephemeral.
        max_datagram_size: Replies longer than this are truncated.
    """

    def __init__(
        self,
        remote_address: tuple[str, int],
        local_address: tuple[str, int] = ("0.0.0.0", 0),  # noqa: S104  # nosec B104
        max_datagram_size: int = MAX_DATAGRAM_SIZE,
    ):
        self.remote_address = remote_address
        self.local_address = local_address
        self.max_datagram_size = max_datagram_size

        self._state = TransportState.DISCONNECTED
        self._transport: asyncio.DatagramTransport | None = None
        self._protocol: _ReplyProtocol | None = None

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is TransportState.CONNECTED

    @property
    def sockname(self) -> tuple[str, int] | None:
        """Locally bound address, once connected."""
        if self._transport is None:
            return None
        return self._transport.get_extra_info("sockname")

    async def connect(self) -> None:
        """
        Bind the local endpoint and associate it with the remote one.

        Does nothing when already connected.

        Raises:
            TransportError: If the transport was closed, or binding or
                resolving the remote address fails.
        """
        if self._state is TransportState.CLOSED:
            raise TransportError("Transport is closed")
        if self._state is TransportState.CONNECTED:
            return

        loop = asyncio.get_running_loop()
        host, port = self.remote_address
        try:
            transport, protocol = await loop.create_datagram_endpoint(
                _ReplyProtocol,
                local_addr=self.local_address,
                remote_addr=self.remote_address,
            )
        except OSError as e:
            raise TransportError(f"Failed to connect to {host}:{port}: {e}") from e

        self._transport = transport
        self._protocol = protocol
        self._state = TransportState.CONNECTED
        logger.debug(f"UDP endpoint {self.sockname} associated with {host}:{port}")

    async def exchange(self, payload: bytes) -> bytes:
        """
        Send one datagram and wait for the next one to arrive.

        Replies left over from abandoned exchanges are discarded first so
        that the reply returned belongs to this request. A socket error or
        endpoint loss queued in the meantime is raised instead of sending.

        Raises:
            TransportError: If sending or receiving fails.
        """
        await self.connect()
        assert self._transport is not None and self._protocol is not None

        self._discard_stale_replies()

        try:
            self._transport.sendto(payload)
        except OSError as e:
            raise TransportError(f"Failed to send datagram: {e}") from e

        reply = await self._protocol.replies.get()
        if isinstance(reply, Exception):
            raise TransportError(f"Failed to receive datagram: {reply}") from reply

        if len(reply) > self.max_datagram_size:
            logger.warning(
                f"Reply of {len(reply)} bytes truncated to {self.max_datagram_size}"
            )
            reply = reply[: self.max_datagram_size]
        return reply

    async def close(self) -> None:
        """Release the socket. The transport cannot be reused afterwards."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
            self._protocol = None
        self._state = TransportState.CLOSED

    def _discard_stale_replies(self) -> None:
        assert self._protocol is not None
        while not self._protocol.replies.empty():
            stale = self._protocol.replies.get_nowait()
            if isinstance(stale, Exception):
                raise TransportError(f"Endpoint failed before send: {stale}") from stale
            logger.debug(f"Discarding stale reply: {stale!r}")


__all__ = ["TransportState", "UdpTransport"]
