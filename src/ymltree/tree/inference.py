"""Lexical classification of raw scalar text.

A scalar's kind depends only on its spelling:
- "true" / "false"                      -> BOOLEAN
- contains "." and is a float literal   -> DOUBLE ("3.x" stays STRING)
- integer literal                       -> INTEGER
- anything else, including ""           -> STRING

Numeric literals are matched with strict patterns instead of ``int()`` /
``float()`` because those accept spellings the format does not recognise
("1_000", " 42", "inf", "nan").
"""

from __future__ import annotations

import re

from ymltree.tree.kinds import NodeKind

__all__ = ["infer_scalar_kind"]

# Compiled regex patterns (module-level, compiled once)

# Optional sign followed by one or more digits, e.g. "42", "-7", "+0"
_INTEGER = re.compile(r"[+-]?[0-9]+")

# Decimal with a mandatory dot and optional exponent, e.g. "3.14", "-.5", "2.e3"
# NOTE: the dot is what routes a value to DOUBLE at all, so "1e5" (no dot)
# is tested against _INTEGER only and ends up STRING.
_DOUBLE = re.compile(r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_BOOLEANS = frozenset({"true", "false"})


def infer_scalar_kind(value: str) -> NodeKind:
    """Classify ``value`` into one of the scalar NodeKinds.

    Args:
        value: Raw scalar text as it appeared after the first colon (trimmed).

    Returns:
        NodeKind.STRING, BOOLEAN, DOUBLE or INTEGER.  Never OBJECT or LIST;
        structural kinds depend on children, not on text.
    """
    if not value:
        return NodeKind.STRING

    if value in _BOOLEANS:
        return NodeKind.BOOLEAN

    if "." in value:
        return NodeKind.DOUBLE if _DOUBLE.fullmatch(value) else NodeKind.STRING

    if _INTEGER.fullmatch(value):
        return NodeKind.INTEGER

    return NodeKind.STRING
