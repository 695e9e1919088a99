# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Generic status-line decoding.

Every reply starts with ``CODE MESSAGE`` where CODE is exactly three ASCII
digits. When no expected record matches a reply, the status line is the
only thing left to interpret, so this decoder always produces an error
value and never raises.
"""

import logging

from ..exceptions import (
    ClientVersionOutdatedError,
    LoginFailedError,
    OtherStatusError,
    ProtocolError,
    UnrecognizedResponseError,
)

logger = logging.getLogger(__name__)

LOGIN_FAILED = 500
CLIENT_VERSION_OUTDATED = 503


def parse_status_line(text: str) -> tuple[int, str] | None:
    """
    Split the first line of ``text`` into status code and message.

    The grammar is three ASCII digits, one space, then at least one
    character before the first newline (or end of text).

    Returns:
        ``(code, message)``, or None if the grammar does not match.

    Example:
        >>> parse_status_line("505 ILLEGAL INPUT OR ACCESS DENIED\\n")
        (505, 'ILLEGAL INPUT OR ACCESS DENIED')
        >>> parse_status_line("hello") is None
        True
    """
    digits = text[:3]
    if len(digits) != 3 or not all(c in "0123456789" for c in digits):
        return None
    if text[3:4] != " ":
        return None
    message = text[4:].split("\n", 1)[0]
    if not message:
        return None
    return int(digits), message


def decode_error(text: str) -> ProtocolError:
    """
    Map a reply to the matching :class:`ProtocolError` subclass.

    Returns:
        - LoginFailedError for status 500
        - ClientVersionOutdatedError for status 503
        - OtherStatusError for any other status code
        - UnrecognizedResponseError when there is no status line at all
    """
    status = parse_status_line(text)
    if status is None:
        logger.debug(f"Reply has no status line: {text!r}")
        return UnrecognizedResponseError(text)

    code, message = status
    if code == LOGIN_FAILED:
        return LoginFailedError(message, raw=text)
    if code == CLIENT_VERSION_OUTDATED:
        return ClientVersionOutdatedError(message, raw=text)
    return OtherStatusError(code, message, raw=text)


__all__ = [
    "CLIENT_VERSION_OUTDATED",
    "LOGIN_FAILED",
    "decode_error",
    "parse_status_line",
]
