"""Document: owner of a parsed tree and its load lifecycle.

This is the central wiring layer between sources, the parser and callers.

Architecture:
- ``load_from_text()`` parses the new text into a fresh Tree off to the side
  and swaps it in with a single assignment.  Readers see either the old tree
  or the new one, never an empty or half-built tree.  A failed parse leaves
  the document empty, never holding the previous content.
- ``load_from_source()`` asks a ``TextSource`` for the text (a local file by
  default, an HTTP source for http(s) URLs) and forwards to the same path.
  Source errors propagate unchanged.
- ``get()`` is the tolerant dotted-path lookup; results are memoised in a
  per-document ``PathCache`` that checks every hit against the current tree,
  so changes made through ``doc.root`` or a node's children are seen.
- ``doc[name]`` / ``doc[index]`` fail loudly on the root tree.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TextIO

from ymltree.cache import PathCache
from ymltree.config import ParserConfig
from ymltree.dump import dumps, write_dump
from ymltree.exceptions import NodeNotFoundError
from ymltree.parser import Parser
from ymltree.sources import resolve_source
from ymltree.tree.collection import PATH_SEPARATOR, Tree
from ymltree.tree.nodes import Node

if TYPE_CHECKING:
    from ymltree.protocols import TextSource

__all__ = ["Document"]

logger = logging.getLogger(__name__)


class Document:
    """A parsed configuration document.

    Example::

        from ymltree.document import Document

        doc = Document("server:\\n  host: localhost\\n  port: 8080\\n")
        doc.get("server.host").value          # "localhost"
        doc.get("server.port").as_type(int)   # 8080
        doc.get("server.missing")             # None
        doc["server"]["port"].value           # "8080"
    """

    def __init__(
        self,
        text: str | None = None,
        *,
        config: ParserConfig | None = None,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the document, parsing ``text`` when given.

        Args:
            text:   Raw content to parse immediately.  None leaves the
                document empty.
            config: Parser settings.  Defaults to ``ParserConfig()``.
            max_cache_size: Number of resolved paths kept in the LRU path
                cache.  This is an infrastructure parameter, it is NOT part
                of ``ParserConfig`` (which governs the grammar only).
        """
        self._config: ParserConfig = config if config is not None else ParserConfig()
        self._tree = Tree()
        self._raw_content = ""
        self._source: str | None = None
        self._cache = PathCache(max_size=max_cache_size)
        self._lock = threading.RLock()

        if text is not None:
            self.load_from_text(text)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> Tree:
        """The root tree.  Replaced (not mutated) by every reload."""
        with self._lock:
            return self._tree

    @property
    def raw_content(self) -> str:
        """The text of the last load attempt."""
        return self._raw_content

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def source(self) -> str | None:
        """Identifier of the last successful read, None for text loads."""
        return self._source

    # ------------------------------------------------------------------
    # Load lifecycle
    # ------------------------------------------------------------------

    def load_from_text(self, text: str, nesting_level: int | None = None) -> Document:
        """Discard the current tree and parse ``text``.

        Args:
            text:          Raw document content.
            nesting_level: Spaces per indentation step for this and later
                loads.  None keeps the current setting.

        Returns:
            self, for chaining.

        Raises:
            ParseError: The text is malformed.  The document is left empty.
        """
        config = self._config.with_nesting_level(nesting_level)
        with self._lock:
            self._config = config
            self._load(text, None)
        return self

    def load_from_source(
        self,
        identifier: str,
        nesting_level: int | None = None,
        source: TextSource | None = None,
    ) -> Document:
        """Discard the current tree, fetch text for ``identifier`` and parse it.

        Args:
            identifier:    Path or URL understood by ``source``.
            nesting_level: As for ``load_from_text()``.
            source:        A ``TextSource``.  Defaults to
                ``resolve_source(identifier)``.

        Returns:
            self, for chaining.

        Raises:
            SourceUnavailableError: The text could not be obtained.  The
                document is left empty and ``source`` is None.
            ParseError: The text is malformed.  The document is left empty.
        """
        config = self._config.with_nesting_level(nesting_level)
        reader = source if source is not None else resolve_source(identifier)
        with self._lock:
            self._config = config
            try:
                text = reader.read(identifier)
            except Exception:
                self._reset()
                raise
            self._load(text, identifier)
        return self

    def clear(self) -> None:
        """Remove every node; the raw content and source are kept."""
        with self._lock:
            self._tree = Tree()
            self._cache.clear()

    def _reset(self) -> None:
        self._tree = Tree()
        self._raw_content = ""
        self._source = None
        self._cache.clear()

    def _load(self, text: str, identifier: str | None) -> None:
        """Parse ``text`` into a new tree and swap it in; empty on failure."""
        try:
            tree = Parser(Tree(), self._config).parse(text)
        except Exception:
            self._reset()
            self._raw_content = text
            raise

        self._tree = tree
        self._raw_content = text
        self._source = identifier
        self._cache.clear()
        logger.info(
            "Loaded %d root node(s) from %s",
            len(tree),
            identifier if identifier is not None else "<text>",
        )

    # ------------------------------------------------------------------
    # Lookup and mutation
    # ------------------------------------------------------------------

    def get(self, path: str) -> Node | None:
        """Return the node at dotted ``path``, or None when any segment is absent.

        Never raises for a missing path.  A key whose name contains a literal
        dot cannot be addressed.
        """
        with self._lock:
            cached = self._cache.get(path, self._tree)
            if cached is not None:
                return cached
            trail = self._tree.trace_path(path)
            if trail is None:
                return None
            self._cache.put(path, self._tree, trail)
            return trail[-1]

    def set(self, path: str, value: Any) -> Node:
        """Create or replace the leaf at dotted ``path``.

        The value is stored as text (``True`` -> ``"true"``) and its kind is
        inferred from that text.  Every ancestor must already exist.

        Raises:
            NodeNotFoundError: The parent path does not exist.
        """
        parent_path, _, name = path.rpartition(PATH_SEPARATOR)
        if not name:
            msg = f"path must end with a node name, got {path!r}"
            raise ValueError(msg)
        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)

        with self._lock:
            if parent_path:
                parent = self.get(parent_path)
                if parent is None:
                    raise NodeNotFoundError(parent_path)
                target = parent.children
            else:
                target = self._tree
            node = Node(name, text, list_marker=self._config.list_marker)
            target.insert(node)
        return node

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def dump(self, stream: TextIO | None = None) -> str:
        """Write the tree, framed by a banner, to ``stream`` (default stdout).

        Returns:
            The serialized tree without the banner.
        """
        with self._lock:
            return write_dump(
                self._tree,
                stream if stream is not None else sys.stdout,
                self._config.nesting_level,
            )

    def to_text(self) -> str:
        """Return the tree serialized as indented text."""
        with self._lock:
            return dumps(self._tree, self._config.nesting_level)

    # ------------------------------------------------------------------
    # Container protocol (root tree)
    # ------------------------------------------------------------------

    def __getitem__(self, key: str | int) -> Node:
        with self._lock:
            return self._tree[key]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tree

    def __iter__(self) -> Iterator[Node]:
        with self._lock:
            return iter(self._tree)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tree)

    def __repr__(self) -> str:
        with self._lock:
            origin = self._source if self._source is not None else "<text>"
            return f"Document(source={origin!r}, nodes={len(self._tree)})"
