"""NodeKind StrEnum: the inferred type of a parsed node."""

from __future__ import annotations

from enum import StrEnum, auto

__all__ = ["NodeKind"]


class NodeKind(StrEnum):
    """Enumeration of the seven node kinds.

    StrEnum values are the lowercased member names (Python 3.11+):
    - STRING  -> "string"  : raw text, also the kind of an empty valueless leaf
    - INTEGER -> "integer" : optional sign followed by digits
    - DOUBLE  -> "double"  : numeric literal containing a dot
    - BOOLEAN -> "boolean" : exactly "true" or "false"
    - OBJECT  -> "object"  : keyed node with children
    - LIST    -> "list"    : list-item node ("- name:") with children
    - UNKNOWN -> "unknown" : fallback, never produced by inference
    """

    STRING = auto()
    INTEGER = auto()
    DOUBLE = auto()
    BOOLEAN = auto()
    OBJECT = auto()
    LIST = auto()
    UNKNOWN = auto()

    @property
    def is_structural(self) -> bool:
        """True for kinds that only exist by virtue of having children."""
        return self in (NodeKind.OBJECT, NodeKind.LIST)

    @property
    def is_numeric(self) -> bool:
        return self in (NodeKind.INTEGER, NodeKind.DOUBLE)
