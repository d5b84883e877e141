"""Public API functions for ymltree.

This module provides the three user-facing shortcuts: loads, load and
get_value.  Each call creates a fresh Document to guarantee zero shared state
between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ymltree.config import ParserConfig
from ymltree.document import Document
from ymltree.exceptions import NodeNotFoundError

if TYPE_CHECKING:
    from ymltree.protocols import TextSource

__all__ = ["get_value", "load", "loads"]


def loads(text: str, config: ParserConfig | None = None) -> Document:
    """Parse ``text`` into a new Document.

    Args:
        text:   Raw document content.
        config: Parser settings.  Defaults to ``ParserConfig()`` when None.

    Returns:
        The parsed ``Document``.

    Raises:
        ParseError: The text is malformed.
    """
    return Document(text, config=config)


def load(
    identifier: str,
    config: ParserConfig | None = None,
    source: TextSource | None = None,
) -> Document:
    """Read ``identifier`` through a source and parse it into a new Document.

    Args:
        identifier: Local path, http(s) URL, or any key ``source`` understands.
        config:     Parser settings.  Defaults to ``ParserConfig()`` when None.
        source:     A ``TextSource``.  Defaults to a ``FileSource`` for paths
                    and an ``HttpSource`` for http(s) URLs.

    Raises:
        SourceUnavailableError: The text could not be obtained.
        ParseError: The text is malformed.
    """
    return Document(config=config).load_from_source(identifier, source=source)


def get_value(
    text: str,
    path: str,
    target: type[Any] = str,
    config: ParserConfig | None = None,
) -> Any:
    """Parse ``text`` and return the value at ``path`` converted to ``target``.

    Unlike ``Document.get()``, a missing path is an error here because there
    is no node to hand back.

    Raises:
        NodeNotFoundError: ``path`` does not exist.
        InvalidNodeTypeError: The node's kind does not fit ``target``.
        UnknownNodeTypeError: ``target`` is not supported.
    """
    node = loads(text, config=config).get(path)
    if node is None:
        raise NodeNotFoundError(path)
    return node.as_type(target)
