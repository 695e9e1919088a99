# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""AniDB UDP - A throttled asyncio client for the AniDB UDP API.

This library speaks the line-oriented AniDB UDP protocol: it encodes
commands, spaces requests so the API's flood protection never triggers,
and decodes pipe-delimited replies into typed records.

Key Features:
    - Escaping-aware command builder
    - Declarative response schemas decoded into frozen dataclasses
    - Ordered first-match reply dispatch with a typed error taxonomy
    - Strict minimum spacing between outgoing requests
    - Session snapshots for resuming across restarts
    - Optional Prometheus metrics

Quick Start:
    >>> from anidb_udp import AniDbClient
    >>>
    >>> async with AniDbClient("myclient", 1) as anidb:
    ...     await anidb.auth("user", "password")
    ...     anime = await anidb.anime_by_id(1)
    ...     print(anime.romaji_name)

Main Exports:
    - AniDbClient: The client facade
    - ClientConfig: Configuration options
    - CommandBuilder, build_command: Command encoding
    - Schema, Field, FieldType, match_response: Response decoding
    - AniDbError and subclasses: Error taxonomy

Note: Prometheus metrics require the 'prometheus' extra. Install with:
    pip install anidb-udp[prometheus]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import AniDbClient
from .command import ArgType, Command, CommandBuilder, build_command, encode_value
from .config import ClientConfig
from .exceptions import (
    AniDbError,
    ClientVersionOutdatedError,
    DecodeError,
    LoginFailedError,
    NoSessionError,
    OtherStatusError,
    ProtocolError,
    ResponseEncodingError,
    TransportError,
    UnrecognizedResponseError,
)
from .observability import ClientMetrics
from .responses import (
    Anime,
    Episode,
    Expect,
    Field,
    FieldType,
    File,
    Group,
    LoggedOut,
    LoginAccepted,
    LoginAcceptedNewVersion,
    Schema,
    decode_error,
    match_response,
)
from .session import SessionSnapshot
from .throttle import Throttle
from .transport import TransportState, UdpTransport

__all__ = [
    # Client
    "AniDbClient",
    # Records
    "Anime",
    # Exceptions
    "AniDbError",
    # Commands
    "ArgType",
    "ClientConfig",
    "ClientMetrics",
    "ClientVersionOutdatedError",
    "Command",
    "CommandBuilder",
    "DecodeError",
    "Episode",
    "Expect",
    # Schemas
    "Field",
    "FieldType",
    "File",
    "Group",
    "LoggedOut",
    "LoginAccepted",
    "LoginAcceptedNewVersion",
    "LoginFailedError",
    "NoSessionError",
    "OtherStatusError",
    "ProtocolError",
    "ResponseEncodingError",
    "Schema",
    "SessionSnapshot",
    # Transport
    "Throttle",
    "TransportError",
    "TransportState",
    "UdpTransport",
    "UnrecognizedResponseError",
    "build_command",
    "decode_error",
    "encode_value",
    "match_response",
]
