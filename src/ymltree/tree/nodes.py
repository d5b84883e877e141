"""Node dataclass: one named, typed entry of a parsed document.

A Node is built from the ``(name, value)`` pair of a single source line.
List items (``- apple``) are detected and their marker stripped at
construction.  The scalar kind is inferred once from ``value`` at that point;
OBJECT / LIST are decided on read from whether children exist, because the
parser attaches children only after the node has been created.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import InitVar, dataclass, field
from typing import Any

import numpy as np

from ymltree.exceptions import InvalidNodeTypeError, UnknownNodeTypeError
from ymltree.tree.collection import Tree
from ymltree.tree.inference import infer_scalar_kind
from ymltree.tree.kinds import NodeKind

__all__ = ["LIST_MARKER", "Node"]

LIST_MARKER = "- "


@dataclass(slots=True)
class Node:
    """A node in the parsed tree.

    Attributes:
        name:     Key for keyed entries, item label for list entries.  The list
                  marker is already stripped.
        value:    Raw scalar text; empty for headers and bare list items.
        is_list:  True when the source name started with the list marker.
        children: Owned subtree.  Must use field(default_factory=Tree) so each
                  instance gets its own independent Tree.
    """

    name: str
    value: str = ""
    children: Tree = field(default_factory=Tree)
    is_list: bool = field(default=False, init=False)
    _scalar_kind: NodeKind = field(
        default=NodeKind.UNKNOWN, init=False, repr=False, compare=False
    )
    list_marker: InitVar[str] = LIST_MARKER

    def __post_init__(self, list_marker: str) -> None:
        self.detect_list(list_marker)
        self._scalar_kind = infer_scalar_kind(self.value)

    def detect_list(self, marker: str = LIST_MARKER) -> None:
        """Strip a leading list marker from ``name`` and flag the node.

        Only an exact prefix match is stripped; ``"-apple"`` and ``"-"`` are
        left untouched.
        """
        if len(self.name) >= len(marker) and self.name.startswith(marker):
            self.is_list = True
            self.name = self.name[len(marker) :]

    @property
    def kind(self) -> NodeKind:
        """Inferred kind; OBJECT / LIST whenever children are present.

        A node with children is a LIST when it carries the list marker itself
        or holds list items (``items:`` followed by ``- apple`` lines).
        """
        if self.children:
            if self.is_list or any(child.is_list for child in self.children):
                return NodeKind.LIST
            return NodeKind.OBJECT
        return self._scalar_kind

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------

    def as_type(self, target: type[Any] = str) -> Any:
        """Convert ``value`` to ``target``, checking the inferred kind.

        Supported targets:
            str                          -> raw value, always succeeds
            bool, numpy.bool_            -> requires BOOLEAN
            int, numpy integer types     -> requires INTEGER (within range)
            float, numpy floating types  -> requires INTEGER or DOUBLE

        Raises:
            InvalidNodeTypeError: kind is incompatible with ``target``, or the
                number does not fit a fixed-width numpy integer type.
            UnknownNodeTypeError: ``target`` is not a supported type.
        """
        if not isinstance(target, type):
            raise UnknownNodeTypeError(repr(target))

        if target is str:
            return self.value

        kind = self.kind

        # CRITICAL: bool MUST be checked before int, bool subclasses int
        if target is bool or issubclass(target, np.bool_):
            if kind != NodeKind.BOOLEAN:
                raise InvalidNodeTypeError(self.name, "BOOLEAN")
            return target(self.value == "true")

        if target is int or issubclass(target, np.integer):
            if kind != NodeKind.INTEGER:
                raise InvalidNodeTypeError(self.name, "INT")
            number = int(self.value)
            if issubclass(target, np.integer):
                bounds = np.iinfo(target)
                if not bounds.min <= number <= bounds.max:
                    raise InvalidNodeTypeError(self.name, "INT")
            return target(number)

        if target is float or issubclass(target, np.floating):
            if not kind.is_numeric:
                raise InvalidNodeTypeError(self.name, "FLOAT")
            return target(float(self.value))

        raise UnknownNodeTypeError(target.__name__)

    def as_array(self, dtype: Any = None) -> np.ndarray:
        """Collect the children's scalars into a numpy array.

        Each child contributes its value, or its name when the value is empty
        (a bare list item such as ``- 0.5``).  Without ``dtype`` the array
        type follows the children: all INTEGER -> int64, all numeric ->
        float64, all BOOLEAN -> bool, otherwise str.  A given ``dtype`` casts
        that array.

        Raises:
            InvalidNodeTypeError: this node is a leaf, or one of its children
                has children of its own.
        """
        if not self.children:
            raise InvalidNodeTypeError(self.name, "ARRAY")

        texts: list[str] = []
        kinds: set[NodeKind] = set()
        for child in self.children:
            if child.children:
                raise InvalidNodeTypeError(child.name, "SCALAR")
            text = child.value or child.name
            texts.append(text)
            kinds.add(infer_scalar_kind(text))

        if kinds == {NodeKind.INTEGER}:
            array = np.array([int(t) for t in texts], dtype=np.int64)
        elif kinds <= {NodeKind.INTEGER, NodeKind.DOUBLE}:
            array = np.array([float(t) for t in texts], dtype=np.float64)
        elif kinds == {NodeKind.BOOLEAN}:
            array = np.array([t == "true" for t in texts], dtype=bool)
        else:
            array = np.array(texts, dtype=str)

        return array if dtype is None else array.astype(dtype)

    # ------------------------------------------------------------------
    # Child access (delegates to Tree)
    # ------------------------------------------------------------------

    def __getitem__(self, key: str | int) -> Node:
        return self.children[key]

    def __contains__(self, name: object) -> bool:
        return name in self.children

    def __iter__(self) -> Iterator[Node]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __bool__(self) -> bool:
        # A leaf has len() == 0 but is still a found node
        return True
