# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response decoding for the AniDB UDP client.

This package provides:
- Schema, Field, Literal, FieldType: the declarative record layout engine
- Typed records (Anime, Episode, File, Group, ...) and their schemas
- decode_error / parse_status_line: generic status-line fallback
- Expect / match_response: ordered first-match dispatch
"""

from .matcher import Expect, match_response
from .records import (
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
    LoggedOut,
    LoginAccepted,
    LoginAcceptedNewVersion,
)
from .schema import Field, FieldType, Literal, Schema
from .status import decode_error, parse_status_line

__all__ = [
    "ANIME",
    "EPISODE",
    "FILE",
    "GROUP",
    "LOGGED_OUT",
    "LOGIN_ACCEPTED",
    "LOGIN_ACCEPTED_NEW_VERSION",
    "Anime",
    "Episode",
    "Expect",
    "Field",
    "FieldType",
    "File",
    "Group",
    "Literal",
    "LoggedOut",
    "LoginAccepted",
    "LoginAcceptedNewVersion",
    "Schema",
    "decode_error",
    "match_response",
    "parse_status_line",
]
