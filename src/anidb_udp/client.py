# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
AniDB UDP client facade.

The client ties together command encoding, request spacing, the UDP
transport and response matching:

1. A command is built fresh for every call
2. The throttle waits for the next send slot and books the following one
3. The transport sends the command and waits for one reply
4. The reply is decoded as UTF-8 and matched against the expected records

Usage contract: one call at a time. The client holds the socket, the
throttle state and the session key without locks, so overlapping calls on
the same instance are not supported.

Example:
    >>> async with AniDbClient("myclient", 1) as anidb:
    ...     await anidb.auth(username, password)
    ...     episode = await anidb.episode_by_id(1)
"""

import logging
from typing import Any

from .command import Command, CommandBuilder
from .config import ClientConfig
from .exceptions import (
    NoSessionError,
    ProtocolError,
    ResponseEncodingError,
    TransportError,
)
from .observability.metrics import ClientMetrics
from .responses.matcher import Expect, match_response
from .responses.records import (
    ANIME,
    EPISODE,
    FILE,
    GROUP,
    LOGGED_OUT,
    LOGIN_ACCEPTED,
    LOGIN_ACCEPTED_NEW_VERSION,
    Anime,
    Episode,
    File,
    Group,
    LoginAccepted,
    LoginAcceptedNewVersion,
)
from .responses.schema import Schema
from .session import SessionSnapshot
from .throttle import Throttle
from .transport import UdpTransport

logger = logging.getLogger(__name__)


class AniDbClient:
    """
    Session-holding client for the AniDB UDP API.

    Args:
        client: Registered client name, sent on AUTH.
        client_version: Registered client version, sent on AUTH.
        session_key: Existing session key to resume, if any.
        config: Endpoint, throttling and mask settings.
        metrics: Metrics sink. Defaults to a fresh ClientMetrics when
            ``config.metrics_enabled`` is set.
        transport: Pre-built transport, mainly for testing.
        throttle: Pre-built throttle, mainly for testing.
    """

    def __init__(
        self,
        client: str,
        client_version: int,
        *,
        session_key: str | None = None,
        config: ClientConfig | None = None,
        metrics: ClientMetrics | None = None,
        transport: UdpTransport | None = None,
        throttle: Throttle | None = None,
    ):
        self._config = config or ClientConfig()
        self._client = client
        self._client_version = client_version
        self._session_key = session_key

        self._transport = transport or UdpTransport(
            self._config.remote_address,
            local_address=self._config.local_address,
            max_datagram_size=self._config.max_datagram_size,
        )
        self._throttle = throttle or Throttle(self._config.min_request_interval)

        if metrics is None and self._config.metrics_enabled:
            metrics = ClientMetrics()
        self._metrics = metrics

    @classmethod
    def resume_session(
        cls,
        client: str,
        client_version: int,
        session_key: str,
        **kwargs: Any,
    ) -> "AniDbClient":
        """Create a client that reuses a session key from an earlier AUTH."""
        return cls(client, client_version, session_key=session_key, **kwargs)

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot, **kwargs: Any) -> "AniDbClient":
        """Create a client from a stored :class:`SessionSnapshot`."""
        return cls.resume_session(
            snapshot.client, snapshot.client_version, snapshot.session_key, **kwargs
        )

    # === Properties ===

    @property
    def client(self) -> str:
        return self._client

    @property
    def client_version(self) -> int:
        return self._client_version

    @property
    def session_key(self) -> str | None:
        return self._session_key

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def metrics(self) -> ClientMetrics | None:
        return self._metrics

    @property
    def transport(self) -> UdpTransport:
        return self._transport

    @property
    def throttle(self) -> Throttle:
        return self._throttle

    def require_session(self) -> str:
        """
        Return the session key, or fail before anything is sent.

        Raises:
            NoSessionError: If the client has not authenticated.
        """
        if self._session_key is None:
            raise NoSessionError()
        return self._session_key

    def snapshot(self) -> SessionSnapshot:
        """
        Capture the current session for later resumption.

        Raises:
            NoSessionError: If the client has not authenticated.
        """
        return SessionSnapshot(
            client=self._client,
            client_version=self._client_version,
            session_key=self.require_session(),
        )

    # === Request cycle ===

    async def request(self, command: Command) -> str:
        """
        Send one command and return the raw reply text.

        Raises:
            TransportError: If the socket fails.
            ResponseEncodingError: If the reply is not valid UTF-8.
        """
        wait_time = await self._throttle.acquire()

        for line in command.redacted().splitlines():
            logger.debug(f"-> {line}")
        if self._metrics:
            self._metrics.record_request(command.name, wait_time)

        try:
            payload = await self._transport.exchange(command.encode())
        except TransportError:
            if self._metrics:
                self._metrics.record_transport_error(command.name)
            raise

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            if self._metrics:
                self._metrics.record_encoding_error(command.name)
            raise ResponseEncodingError(
                f"{command.name} reply is not valid UTF-8: {e}", payload=payload
            ) from e

        if self._metrics:
            self._metrics.record_response()
        for line in text.splitlines():
            logger.debug(f"<- {line}")

        return text

    async def _call(self, command: Command, *expected: Expect | Schema[Any]) -> Any:
        text = await self.request(command)
        try:
            return match_response(text, *expected)
        except ProtocolError as e:
            if self._metrics:
                self._metrics.record_protocol_error(command.name, e.code)
            raise

    # === Authing commands ===

    async def auth(self, username: str, password: str) -> None:
        """
        Authenticate and store the session key.

        WARNING: the password travels unencrypted; the protocol offers no
        alternative for this command.

        Raises:
            LoginFailedError: If the credentials were rejected.
            ClientVersionOutdatedError: If the client version is no longer accepted.
        """
        command = (
            CommandBuilder("AUTH")
            .arg("user", username)
            .arg("pass", password)
            .arg("client", self._client)
            .arg("clientver", self._client_version)
            .arg("protover", self._config.protocol_version)
            .arg("enc", self._config.encoding)
            .build()
        )

        await self._call(
            command,
            Expect(LOGIN_ACCEPTED, self._on_login_accepted),
            Expect(LOGIN_ACCEPTED_NEW_VERSION, self._on_login_accepted),
        )

    async def logout(self) -> None:
        """
        End the session on the server.

        The stored session key is not cleared, so ``session_key`` still
        reports it afterwards even though the server no longer accepts it.
        """
        command = CommandBuilder("LOGOUT").arg("s", self.require_session()).build()
        await self._call(command, LOGGED_OUT)
        logger.info("Logged out")

    def _on_login_accepted(
        self, record: LoginAccepted | LoginAcceptedNewVersion
    ) -> None:
        if isinstance(record, LoginAcceptedNewVersion):
            logger.warning(
                f"A newer version of client {self._client!r} is available"
            )
        self._session_key = record.session_key
        logger.info("Session established")

    # === Data commands ===

    async def anime_by_id(self, aid: int) -> Anime:
        command = (
            CommandBuilder("ANIME")
            .arg("s", self.require_session())
            .arg("aid", aid)
            .arg("amask", self._config.anime_mask)
            .build()
        )
        return await self._call(command, ANIME)

    async def episode_by_id(self, eid: int) -> Episode:
        command = (
            CommandBuilder("EPISODE")
            .arg("s", self.require_session())
            .arg("eid", eid)
            .build()
        )
        return await self._call(command, EPISODE)

    async def file_by_ed2k(self, size: int, ed2k: str) -> File:
        """Look up a file by its size in bytes and its ed2k hash."""
        command = (
            CommandBuilder("FILE")
            .arg("s", self.require_session())
            .arg("size", size)
            .arg("ed2k", ed2k)
            .arg("fmask", self._config.file_mask)
            .arg("amask", self._config.file_anime_mask)
            .build()
        )
        return await self._call(command, FILE)

    async def group_by_id(self, gid: int) -> Group:
        command = (
            CommandBuilder("GROUP")
            .arg("s", self.require_session())
            .arg("gid", gid)
            .build()
        )
        return await self._call(command, GROUP)

    # === Lifecycle ===

    async def close(self) -> None:
        """Release the socket. The session key is left untouched."""
        await self._transport.close()

    async def __aenter__(self) -> "AniDbClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


__all__ = ["AniDbClient"]
