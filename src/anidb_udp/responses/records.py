# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Typed records returned by the AniDB UDP API, and their response schemas.

Every record is a frozen dataclass paired with a module-level ``Schema``
constant describing its exact wire layout. The data lookups request fixed
field masks (see ``ClientConfig``), so each layout below is the one the
server produces for those masks.
"""

from dataclasses import dataclass

from .schema import Field, FieldType, Schema

STR = FieldType.STR
I16 = FieldType.I16
I32 = FieldType.I32
I64 = FieldType.I64
U32 = FieldType.U32
BOOL = FieldType.BOOL


# =============================================================================
# Session records
# =============================================================================


@dataclass(frozen=True)
class LoginAccepted:
    session_key: str


@dataclass(frozen=True)
class LoginAcceptedNewVersion:
    session_key: str


@dataclass(frozen=True)
class LoggedOut:
    pass


LOGIN_ACCEPTED = Schema(
    LoginAccepted,
    "200 ", Field("session_key", STR), " LOGIN ACCEPTED\n",
)

LOGIN_ACCEPTED_NEW_VERSION = Schema(
    LoginAcceptedNewVersion,
    "201 ", Field("session_key", STR), " LOGIN ACCEPTED - NEW VERSION AVAILABLE\n",
)

LOGGED_OUT = Schema(LoggedOut, "203 LOGGED OUT\n")


# =============================================================================
# Data records
# =============================================================================


@dataclass(frozen=True)
class Anime:
    """An anime entry, as returned for the default anime mask."""

    aid: int
    dateflags: int
    year: str
    type: str
    related_aid_list: str
    related_aid_type: str
    romaji_name: str
    kanji_name: str
    english_name: str
    short_name_list: str
    episodes: int
    special_ep_count: int
    air_date: int
    end_date: int
    picname: str
    nsfw: bool
    characterid_list: str
    specials_count: int
    credits_count: int
    other_count: int
    trailer_count: int
    parody_count: int


ANIME = Schema(
    Anime,
    "230 ANIME\n",
    Field("aid", U32), "|",
    Field("dateflags", I32), "|",
    Field("year", STR), "|",
    Field("type", STR), "|",
    Field("related_aid_list", STR), "|",
    Field("related_aid_type", STR), "|",
    Field("romaji_name", STR), "|",
    Field("kanji_name", STR), "|",
    Field("english_name", STR), "|",
    Field("short_name_list", STR), "|",
    Field("episodes", I32), "|",
    Field("special_ep_count", I32), "|",
    Field("air_date", I32), "|",
    Field("end_date", I32), "|",
    Field("picname", STR), "|",
    Field("nsfw", BOOL), "|",
    Field("characterid_list", STR), "|",
    Field("specials_count", I32), "|",
    Field("credits_count", I32), "|",
    Field("other_count", I32), "|",
    Field("trailer_count", I32), "|",
    Field("parody_count", I32), "\n",
)


@dataclass(frozen=True)
class Episode:
    eid: int
    aid: int
    length: int
    rating: int
    votes: int
    epno: str
    eng: str
    romaji: str
    kanji: str
    aired: int
    type: int


EPISODE = Schema(
    Episode,
    "240 EPISODE\n",
    Field("eid", U32), "|",
    Field("aid", U32), "|",
    Field("length", I32), "|",
    Field("rating", I32), "|",
    Field("votes", I32), "|",
    Field("epno", STR), "|",
    Field("eng", STR), "|",
    Field("romaji", STR), "|",
    Field("kanji", STR), "|",
    Field("aired", I32), "|",
    Field("type", I32), "\n",
)


@dataclass(frozen=True)
class File:
    """A file entry, as returned for the default file mask and an empty anime mask."""

    fid: int
    aid: int
    eid: int
    gid: int
    state: int
    size: int
    ed2k: str
    colour_depth: str
    quality: str
    source: str
    audio_codec_list: str
    audio_bitrate_list: int
    video_codec: str
    video_bitrate: int
    video_resolution: str
    dub_language: str
    sub_language: str
    length_in_seconds: int
    description: str
    aired_date: int


FILE = Schema(
    File,
    "220 FILE\n",
    Field("fid", U32), "|",
    Field("aid", U32), "|",
    Field("eid", U32), "|",
    Field("gid", U32), "|",
    Field("state", I16), "|",
    Field("size", I64), "|",
    Field("ed2k", STR), "|",
    Field("colour_depth", STR), "|",
    Field("quality", STR), "|",
    Field("source", STR), "|",
    Field("audio_codec_list", STR), "|",
    Field("audio_bitrate_list", I32), "|",
    Field("video_codec", STR), "|",
    Field("video_bitrate", I32), "|",
    Field("video_resolution", STR), "|",
    Field("dub_language", STR), "|",
    Field("sub_language", STR), "|",
    Field("length_in_seconds", I32), "|",
    Field("description", STR), "|",
    Field("aired_date", I32), "\n",
)


@dataclass(frozen=True)
class Group:
    gid: int
    rating: int
    votes: int
    acount: int
    fcount: int
    name: str
    short: str
    irc_channel: str
    irc_server: str
    url: str
    picname: str
    foundeddate: int
    disbandeddate: int
    dateflags: int
    lastreleasedate: int
    lastactivitydate: int
    grouprelations: str


GROUP = Schema(
    Group,
    "250 GROUP\n",
    Field("gid", U32), "|",
    Field("rating", I32), "|",
    Field("votes", I32), "|",
    Field("acount", I32), "|",
    Field("fcount", I32), "|",
    Field("name", STR), "|",
    Field("short", STR), "|",
    Field("irc_channel", STR), "|",
    Field("irc_server", STR), "|",
    Field("url", STR), "|",
    Field("picname", STR), "|",
    Field("foundeddate", I32), "|",
    Field("disbandeddate", I32), "|",
    Field("dateflags", I16), "|",
    Field("lastreleasedate", I32), "|",
    Field("lastactivitydate", I32), "|",
    Field("grouprelations", STR), "\n",
)


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
    "File",
    "Group",
    "LoggedOut",
    "LoginAccepted",
    "LoginAcceptedNewVersion",
]
