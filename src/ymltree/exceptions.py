"""Exception hierarchy for ymltree.

Every error raised by the package derives from ``YmlError``.  Access errors
also subclass the matching builtin (``KeyError``, ``IndexError``,
``TypeError``) so callers can catch them the way they would for a ``dict`` or
a ``list``.
"""

from __future__ import annotations

__all__ = [
    "InvalidNodeTypeError",
    "MalformedLineError",
    "NodeIndexError",
    "NodeNotFoundError",
    "ParseError",
    "SourceUnavailableError",
    "UnknownNodeTypeError",
    "YmlError",
]


class YmlError(Exception):
    """Base class for every ymltree error."""


class SourceUnavailableError(YmlError):
    """Raw text could not be obtained from the named source."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"{identifier}: Could not open file.")


class ParseError(YmlError):
    """Structural error found while parsing; aborts the whole load."""


class MalformedLineError(ParseError):
    """A line could not be turned into a node.

    Attributes:
        line_number: 1-based physical line number in the raw text.
        line:        The offending line, without its trailing newline.
        reason:      Short human-readable cause.
    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class InvalidNodeTypeError(YmlError, TypeError):
    """A typed accessor was used on a node whose kind is incompatible."""

    def __init__(self, name: str, type_label: str) -> None:
        self.name = name
        self.type_label = type_label
        super().__init__(f"{name} - {type_label}: Invalid node type.")


class UnknownNodeTypeError(YmlError, TypeError):
    """A typed accessor was asked for a type it cannot coerce to."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"{type_name}: Unknown node type.")


class NodeNotFoundError(YmlError, KeyError):
    """Direct by-name access found no node with that name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No such node: {name}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class NodeIndexError(YmlError, IndexError):
    """Direct by-index access was out of range."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Index {index} out of range in tree of size {size}")
