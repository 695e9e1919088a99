# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Ordered first-match dispatch of a reply over candidate schemas.

Each candidate is tried against the full reply text, in the order given.
The first one that decodes cleanly wins; its handler runs (if any) and its
record is returned. When nothing matches, the reply is interpreted as a
status line and the resulting ProtocolError is raised.

Candidate order is priority: list the expected success shapes first.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..exceptions import DecodeError
from .schema import Schema
from .status import decode_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Expect:
    """
    One candidate reply shape.

    Attributes:
        schema: The schema to try.
        handler: Called with the decoded record when this candidate wins.
            Use it for side effects such as storing a session key; leave it
            unset when the record itself is the result.
    """

    schema: Schema[Any]
    handler: Callable[[Any], None] | None = None


def match_response(text: str, *expected: Expect | Schema[Any]) -> Any:
    """
    Decode ``text`` with the first matching candidate.

    Bare schemas are accepted as candidates without a handler.

    Returns:
        The decoded record of the first matching candidate.

    Raises:
        ProtocolError: If no candidate matches.
    """
    for candidate in expected:
        if isinstance(candidate, Schema):
            candidate = Expect(candidate)
        try:
            record = candidate.schema.parse(text)
        except DecodeError as e:
            logger.debug(f"{candidate.schema!r} rejected reply: {e}")
            continue

        if candidate.handler is not None:
            candidate.handler(record)
        return record

    raise decode_error(text)


__all__ = ["Expect", "match_response"]
