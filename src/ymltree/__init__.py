"""ymltree - indentation-based key/value configuration parsed into a typed tree."""

from __future__ import annotations

from ymltree.api import get_value, load, loads
from ymltree.config import ParserConfig
from ymltree.document import Document
from ymltree.dump import dumps
from ymltree.exceptions import (
    InvalidNodeTypeError,
    MalformedLineError,
    NodeIndexError,
    NodeNotFoundError,
    ParseError,
    SourceUnavailableError,
    UnknownNodeTypeError,
    YmlError,
)
from ymltree.tree import Node, NodeKind, Tree

__version__: str = "0.1.0"
__all__: list[str] = [
    "Document",
    "InvalidNodeTypeError",
    "MalformedLineError",
    "Node",
    "NodeIndexError",
    "NodeKind",
    "NodeNotFoundError",
    "ParseError",
    "ParserConfig",
    "SourceUnavailableError",
    "Tree",
    "UnknownNodeTypeError",
    "YmlError",
    "dumps",
    "get_value",
    "load",
    "loads",
]
