# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Command encoding for the AniDB UDP protocol.

A command is a single line of the form::

    NAME key1=val1&key2=val2&...\\n

Argument values are escaped according to their type so that no value can
be mistaken for an argument separator or for the end of the line:

    * **INT**: canonical decimal text
    * **BOOL**: ``1`` or ``0``
    * **BYTES**: lowercase hex, two digits per byte
    * **STR**: ``&`` becomes ``&amp;``, newline becomes ``<br />``

Arguments keep the order in which they were added.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

REDACTED = "********"

# Keys whose values must never reach a log line
_SENSITIVE_KEYS = frozenset({"pass"})


class ArgType(Enum):
    """Semantic type of a command argument, selecting its escaping rule."""

    INT = "int"
    BOOL = "bool"
    BYTES = "bytes"
    STR = "str"


def infer_arg_type(value: Any) -> ArgType:
    """Infer the argument type from a Python value.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass.

    Raises:
        TypeError: If the value has no wire encoding.
    """
    if isinstance(value, bool):
        return ArgType.BOOL
    if isinstance(value, int):
        return ArgType.INT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ArgType.BYTES
    if isinstance(value, str):
        return ArgType.STR
    raise TypeError(f"Cannot encode command argument of type {type(value).__name__}")


def escape_str(value: str) -> str:
    """Escape a free-text value: ``&`` first, then newlines."""
    return value.replace("&", "&amp;").replace("\n", "<br />")


def encode_value(value: Any, arg_type: ArgType | None = None) -> str:
    """
    Encode a single argument value for the wire.

    Args:
        value: The value to encode.
        arg_type: The semantic type. Inferred from ``value`` when omitted.

    Returns:
        The escaped value text.

    Raises:
        TypeError: If the value cannot be encoded as the requested type.

    Example:
        >>> encode_value("w&rd")
        'w&amp;rd'
        >>> encode_value(b"\\xd0\\x0d")
        'd00d'
    """
    if arg_type is None:
        arg_type = infer_arg_type(value)

    if arg_type is ArgType.BOOL:
        if not isinstance(value, bool):
            raise TypeError(f"BOOL argument must be a bool, got {type(value).__name__}")
        return "1" if value else "0"
    if arg_type is ArgType.INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"INT argument must be an int, got {type(value).__name__}")
        return str(value)
    if arg_type is ArgType.BYTES:
        if isinstance(value, (int, str)):
            raise TypeError(f"BYTES argument must be bytes-like, got {type(value).__name__}")
        return bytes(value).hex()
    if not isinstance(value, str):
        raise TypeError(f"STR argument must be a str, got {type(value).__name__}")
    return escape_str(value)


@dataclass(frozen=True)
class Command:
    """
    A finalized protocol command.

    Attributes:
        name: Command name, e.g. ``AUTH`` or ``ANIME``.
        args: Ordered ``(key, escaped_value)`` pairs.
    """

    name: str
    args: tuple[tuple[str, str], ...] = ()

    @property
    def line(self) -> str:
        """The wire text, terminated by exactly one newline."""
        joined = "&".join(f"{key}={value}" for key, value in self.args)
        return f"{self.name} {joined}\n"

    def encode(self) -> bytes:
        """The wire text as UTF-8 bytes, ready to be sent as one datagram."""
        return self.line.encode("utf-8")

    def redacted(self) -> str:
        """The wire text with sensitive values masked, for logging."""
        safe = tuple(
            (key, REDACTED if key in _SENSITIVE_KEYS else value)
            for key, value in self.args
        )
        return Command(self.name, safe).line

    def __str__(self) -> str:
        return self.line


class CommandBuilder:
    """
    Fluent builder for a :class:`Command`.

    Each call to :meth:`arg` returns a new builder, so a partially built
    command can be shared without being mutated.

    Example:
        >>> cmd = (
        ...     CommandBuilder("EPISODE")
        ...     .arg("s", "abc12")
        ...     .arg("eid", 1)
        ...     .build()
        ... )
        >>> cmd.line
        'EPISODE s=abc12&eid=1\\n'
    """

    def __init__(self, name: str, args: Iterable[tuple[str, str]] = ()):
        if not name or any(c.isspace() for c in name):
            raise ValueError(f"Invalid command name: {name!r}")
        self._name = name
        self._args = tuple(args)

    def arg(
        self, key: str, value: Any, arg_type: ArgType | None = None
    ) -> CommandBuilder:
        """Append an argument, escaping ``value`` according to its type."""
        encoded = encode_value(value, arg_type)
        return CommandBuilder(self._name, (*self._args, (key, encoded)))

    def build(self) -> Command:
        return Command(self._name, self._args)


def build_command(name: str, args: Sequence[tuple[Any, ...]]) -> str:
    """
    Build a command line from a name and ordered arguments.

    Args:
        name: Command name.
        args: ``(key, value)`` or ``(key, value, ArgType)`` tuples, in wire order.

    Returns:
        The serialized command line.

    Example:
        >>> build_command("FOO", [("user", "name", ArgType.STR), ("weeb", True)])
        'FOO user=name&weeb=1\\n'
    """
    builder = CommandBuilder(name)
    for item in args:
        if len(item) == 2:
            key, value = item
            builder = builder.arg(key, value)
        elif len(item) == 3:
            key, value, arg_type = item
            builder = builder.arg(key, value, arg_type)
        else:
            raise ValueError(f"Argument must be (key, value[, type]), got {item!r}")
    return builder.build().line


__all__ = [
    "REDACTED",
    "ArgType",
    "Command",
    "CommandBuilder",
    "build_command",
    "encode_value",
    "escape_str",
    "infer_arg_type",
]
