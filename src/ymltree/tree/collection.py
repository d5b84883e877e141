"""Tree: insertion-ordered collection of named sibling nodes.

A Tree maps node names to Node objects.  Positional access (``tree[0]``)
follows insertion order, which a plain ``dict`` guarantees, so index-based
access is stable across runs.

Two kinds of lookup exist on purpose:
- ``tree[name]`` / ``tree[index]`` fail loudly (NodeNotFoundError /
  NodeIndexError).
- ``tree.get(name)`` and ``tree.find_path("a.b.c")`` return None when
  absent.  The parser relies on ``find_path`` to probe ancestors.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ymltree.exceptions import NodeIndexError, NodeNotFoundError

if TYPE_CHECKING:
    from ymltree.tree.nodes import Node

__all__ = ["PATH_SEPARATOR", "Tree"]

PATH_SEPARATOR = "."


class Tree:
    """Ordered mapping of node name to Node.

    Names are unique within one Tree.  Inserting a node whose name already
    exists replaces the previous node but keeps its original position.

    Example::

        tree = Tree()
        tree.insert(Node("host", "localhost"))
        tree["host"].value        # "localhost"
        tree[0].name              # "host"
        tree.get("missing")       # None
    """

    __slots__ = ("_nodes", "_version")

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes: dict[str, Node] = {}
        self._version = 0
        for node in nodes:
            self.insert(node)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, node: Node) -> None:
        """Add ``node`` keyed by its name, overwriting any same-named node."""
        self._nodes[node.name] = node
        self._version += 1

    def clear(self) -> None:
        """Remove every node."""
        self._nodes.clear()
        self._version += 1

    @property
    def version(self) -> int:
        """Mutation counter, bumped by every insert() and clear()."""
        return self._version

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Node | None:
        return self._nodes.get(name)

    def nodes(self) -> list[Node]:
        """Return all nodes in insertion order."""
        return list(self._nodes.values())

    def names(self) -> list[str]:
        return list(self._nodes)

    def find_path(self, path: str) -> Node | None:
        """Walk a dotted path starting at this tree.

        The first segment is looked up in this tree, every following segment
        in the previous node's children.  A name containing a literal dot can
        never be reached this way.

        Args:
            path: Dotted path such as ``"server.port"``.

        Returns:
            The node at the end of the walk, or None if ``path`` is empty or
            any segment is missing.
        """
        trail = self.trace_path(path)
        return trail[-1] if trail else None

    def trace_path(self, path: str) -> list[Node] | None:
        """Like ``find_path`` but return every node walked, outermost first."""
        if not path:
            return None

        tree: Tree = self
        trail: list[Node] = []
        for segment in path.split(PATH_SEPARATOR):
            node = tree.get(segment)
            if node is None:
                return None
            trail.append(node)
            tree = node.children
        return trail

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str | int) -> Node:
        if isinstance(key, int):
            return self._by_index(key)
        try:
            return self._nodes[key]
        except KeyError:
            raise NodeNotFoundError(key) from None

    def _by_index(self, index: int) -> Node:
        size = len(self._nodes)
        if not -size <= index < size:
            raise NodeIndexError(index, size)
        return self.nodes()[index]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return list(self._nodes.items()) == list(other._nodes.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tree({self.names()!r})"
