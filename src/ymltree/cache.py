"""PathCache: LRU-backed memo of dotted-path lookups.

A Document resolves the same dotted paths over and over (``"server.port"``,
``"db.pool.size"``).  PathCache keeps the resolved Node per path in a
``cachetools.LRUCache`` so repeated lookups skip the name lookups and string
splitting of a full tree walk.  Only hits are stored; a missing path is
walked again every time, so nodes added later are found.

Each entry remembers the Tree it read at every step of the walk together with
that Tree's ``version``.  A hit is only returned while every one of those
trees is still in place and unchanged, so mutations made directly through
``Tree.insert()`` / ``Tree.clear()`` or by reassigning ``Node.children``
never yield a stale node.  Stale entries are evicted on access.

Each ``PathCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two documents never interfere with each other.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cachetools import LRUCache

if TYPE_CHECKING:
    from ymltree.tree.collection import Tree
    from ymltree.tree.nodes import Node

__all__ = ["PathCache"]


@dataclass(frozen=True, slots=True)
class _Entry:
    """One cached walk: the nodes visited and the trees they were read from."""

    nodes: tuple[Node, ...]
    trees: tuple[Tree, ...]
    versions: tuple[int, ...]

    @classmethod
    def capture(cls, root: Tree, trail: Sequence[Node]) -> _Entry:
        trees = (root, *(node.children for node in trail[:-1]))
        return cls(tuple(trail), trees, tuple(tree.version for tree in trees))

    def resolve(self, root: Tree) -> Node | None:
        """Return the cached node if the walk from ``root`` is unchanged."""
        tree = root
        for node, expected, version in zip(
            self.nodes, self.trees, self.versions, strict=True
        ):
            if tree is not expected or tree.version != version:
                return None
            tree = node.children
        return self.nodes[-1]


class PathCache:
    """LRU cache mapping dotted path -> resolved Node.

    Args:
        max_size: Maximum number of paths to hold.  Defaults to 256.  When
            exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 256) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        self._cache: LRUCache[str, _Entry] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Cache surface
    # ------------------------------------------------------------------

    def get(self, path: str, root: Tree) -> Node | None:
        """Return the node cached for ``path`` under ``root``, or None.

        An entry whose walk no longer matches ``root`` is evicted.
        """
        entry = self._cache.get(path)
        if entry is None:
            return None
        node = entry.resolve(root)
        if node is None:
            del self._cache[path]
        return node

    def put(self, path: str, root: Tree, trail: Sequence[Node]) -> None:
        """Store the walk ``trail`` (outermost node first) found from ``root``."""
        if not trail:
            msg = "trail must contain at least one node"
            raise ValueError(msg)
        self._cache[path] = _Entry.capture(root, trail)

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._cache
