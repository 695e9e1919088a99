# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the AniDB UDP client.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from AniDbError, making it easy to catch every
client-related failure with a single except clause.

The four failure kinds a public client operation can raise are:

- TransportError: the socket could not be bound, connected, written or read
- ResponseEncodingError: the reply datagram was not valid UTF-8
- ProtocolError (and subclasses): the server answered with an error status,
  or with something the client could not recognize at all
- NoSessionError: a session-scoped command was issued before authenticating
"""


class AniDbError(Exception):
    """Base exception for all AniDB client errors.

    Example:
        try:
            anime = await client.anime_by_id(1)
        except AniDbError as e:
            logger.error(f"AniDB lookup failed: {e}")
    """

    pass


class TransportError(AniDbError):
    """Raised when the UDP socket fails.

    Covers bind, connect, send and receive failures. The underlying
    OSError is chained as ``__cause__``. The transport never reconnects on
    its own; the same client keeps the same (possibly broken) association.
    """

    pass


class ResponseEncodingError(AniDbError):
    """Raised when a reply datagram is not valid UTF-8.

    Attributes:
        payload: The raw bytes that failed to decode.
    """

    def __init__(self, message: str, payload: bytes = b""):
        super().__init__(message)
        self.payload = payload


class NoSessionError(AniDbError):
    """Raised when a session-scoped command is issued without a session key.

    This is raised before any network activity takes place.

    Example:
        try:
            await client.episode_by_id(1)
        except NoSessionError:
            await client.auth(username, password)
    """

    def __init__(self, message: str = "No session key; authenticate first"):
        super().__init__(message)


class DecodeError(AniDbError):
    """Raised when a response does not match a record schema.

    The response matcher treats this as "try the next candidate", so it is
    never raised out of a client operation. It is public so that callers
    can use ``Schema.parse`` directly.

    Attributes:
        position: Offset into the response text where decoding stopped.
            May be None if no position applies.
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class ProtocolError(AniDbError):
    """Raised when the server reports an error, or replies unrecognizably.

    Attributes:
        code: The three-digit status code, or None when the reply did not
            even carry a status line.
        raw: The complete response text.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        raw: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.raw = raw


class LoginFailedError(ProtocolError):
    """Raised on status 500: the username or password was rejected."""

    def __init__(self, message: str = "LOGIN FAILED", raw: str | None = None):
        super().__init__(message, code=500, raw=raw)


class ClientVersionOutdatedError(ProtocolError):
    """Raised on status 503: the client name/version pair is no longer accepted."""

    def __init__(
        self, message: str = "CLIENT VERSION OUTDATED", raw: str | None = None
    ):
        super().__init__(message, code=503, raw=raw)


class OtherStatusError(ProtocolError):
    """Raised for any status code without a dedicated exception class.

    Attributes:
        code: The status code as sent by the server.
        message: The text following the status code on the status line.

    Example:
        try:
            await client.anime_by_id(999999)
        except OtherStatusError as e:
            if e.code == 330:
                return None  # NO SUCH ANIME
            raise
    """

    def __init__(self, code: int, message: str, raw: str | None = None):
        super().__init__(f"{code} {message}", code=code, raw=raw)
        self.message = message


class UnrecognizedResponseError(ProtocolError):
    """Raised when a reply matches neither an expected record nor a status line."""

    def __init__(self, raw: str):
        super().__init__(f"Unrecognized response: {raw!r}", code=None, raw=raw)
