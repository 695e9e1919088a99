# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Declarative response schemas.

A schema describes how one typed record is laid out in a response: a
fixed prefix, then a sequence of typed fields separated by literals, and
nothing after the last step. Schemas are plain data evaluated by a single
generic decoder.

Field rules:

    * **STR**: everything up to (not including) the next literal step. No
      unescaping is applied.
    * **I32**: the literal ``none`` decodes to 0; otherwise one or more
      characters from ``0-9`` and ``-``, parsed as a signed 32-bit integer.
    * **I16**, **I64**, **U32**: as I32 without the ``none`` sentinel.
    * **BOOL**: exactly one character, ``0`` or ``1``.

Example:
    >>> @dataclass(frozen=True)
    ... class Pong:
    ...     port: int
    >>> PONG = Schema(Pong, "300 PONG\\n", Field("port", FieldType.U32), "\\n")
    >>> PONG.parse("300 PONG\\n4455\\n")
    Pong(port=4455)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from ..exceptions import DecodeError

R = TypeVar("R")

NONE_SENTINEL = "none"

_NUMERIC_CHARS = frozenset("0123456789-")


class FieldType(Enum):
    """Wire type of a record field."""

    STR = "str"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U32 = "u32"
    BOOL = "bool"


# Inclusive bounds for each integer width
INT_BOUNDS: dict[FieldType, tuple[int, int]] = {
    FieldType.I16: (-(2**15), 2**15 - 1),
    FieldType.I32: (-(2**31), 2**31 - 1),
    FieldType.I64: (-(2**63), 2**63 - 1),
    FieldType.U32: (0, 2**32 - 1),
}


@dataclass(frozen=True)
class Literal:
    """A fixed piece of text that must appear verbatim."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Literal text must not be empty")


@dataclass(frozen=True)
class Field:
    """A named, typed value extracted from the response."""

    name: str
    type: FieldType


Step = Literal | Field


class Schema(Generic[R]):
    """
    Ordered literal/field layout of one record type.

    Plain strings among ``steps`` are treated as :class:`Literal` steps.
    The layout is checked against ``record_type`` when the schema is
    created, so a malformed schema fails at import time rather than on the
    first response.

    Args:
        record_type: Dataclass whose fields are filled, in order, by the
            schema's :class:`Field` steps.
        *steps: The layout, left to right.

    Raises:
        ValueError: If the steps do not describe ``record_type``.
    """

    def __init__(self, record_type: type[R], *steps: Step | str):
        if not dataclasses.is_dataclass(record_type):
            raise ValueError(f"{record_type!r} is not a dataclass")
        if not steps:
            raise ValueError("A schema needs at least one step")

        self._record_type = record_type
        self._steps: tuple[Step, ...] = tuple(
            Literal(step) if isinstance(step, str) else step for step in steps
        )

        declared = [f.name for f in dataclasses.fields(record_type)]
        described = [step.name for step in self._steps if isinstance(step, Field)]
        if declared != described:
            raise ValueError(
                f"Schema fields {described} do not match "
                f"{record_type.__name__} fields {declared}"
            )

        for index, step in enumerate(self._steps):
            if isinstance(step, Field) and step.type is FieldType.STR:
                following = self._steps[index + 1] if index + 1 < len(self._steps) else None
                if not isinstance(following, Literal):
                    raise ValueError(
                        f"String field {step.name!r} must be followed by a literal"
                    )

    @property
    def record_type(self) -> type[R]:
        return self._record_type

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def prefix(self) -> str:
        """The leading literal text, e.g. ``"230 ANIME\\n"``."""
        first = self._steps[0]
        return first.text if isinstance(first, Literal) else ""

    def parse(self, text: str) -> R:
        """
        Decode ``text`` into a record.

        The whole input must be consumed; trailing characters fail the parse.

        Raises:
            DecodeError: If any step does not match.
        """
        pos = 0
        values: dict[str, Any] = {}

        for index, step in enumerate(self._steps):
            if isinstance(step, Literal):
                if not text.startswith(step.text, pos):
                    raise DecodeError(f"Expected {step.text!r}", position=pos)
                pos += len(step.text)
            elif step.type is FieldType.STR:
                # Validated in __init__: a literal always follows a STR field
                terminator = self._steps[index + 1]
                assert isinstance(terminator, Literal)
                end = text.find(terminator.text, pos)
                if end < 0:
                    raise DecodeError(
                        f"Unterminated field {step.name!r}, expected {terminator.text!r}",
                        position=pos,
                    )
                values[step.name] = text[pos:end]
                pos = end
            elif step.type is FieldType.BOOL:
                values[step.name], pos = _read_bool(step, text, pos)
            else:
                values[step.name], pos = _read_int(step, text, pos)

        if pos != len(text):
            raise DecodeError(
                f"{len(text) - pos} trailing characters after "
                f"{self._record_type.__name__}",
                position=pos,
            )

        return self._record_type(**values)

    def matches(self, text: str) -> bool:
        """Whether ``text`` decodes cleanly with this schema."""
        try:
            self.parse(text)
        except DecodeError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Schema({self._record_type.__name__}, {len(self._steps)} steps)"


def _read_bool(step: Field, text: str, pos: int) -> tuple[bool, int]:
    char = text[pos : pos + 1]
    if char == "1":
        return True, pos + 1
    if char == "0":
        return False, pos + 1
    raise DecodeError(f"Field {step.name!r} expects 0 or 1, got {char!r}", position=pos)


def _read_int(step: Field, text: str, pos: int) -> tuple[int, int]:
    if step.type is FieldType.I32 and text.startswith(NONE_SENTINEL, pos):
        return 0, pos + len(NONE_SENTINEL)

    end = pos
    while end < len(text) and text[end] in _NUMERIC_CHARS:
        end += 1
    if end == pos:
        raise DecodeError(f"Field {step.name!r} expects digits", position=pos)

    token = text[pos:end]
    try:
        value = int(token)
    except ValueError:
        raise DecodeError(
            f"Field {step.name!r} has malformed integer {token!r}", position=pos
        ) from None

    low, high = INT_BOUNDS[step.type]
    if not low <= value <= high:
        raise DecodeError(
            f"Field {step.name!r} value {value} out of range for {step.type.value}",
            position=pos,
        )
    return value, end


__all__ = [
    "INT_BOUNDS",
    "NONE_SENTINEL",
    "Field",
    "FieldType",
    "Literal",
    "Schema",
    "Step",
]
