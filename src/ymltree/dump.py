"""Serialize a parsed Tree back to indented text.

The output approximates the source format: comments, blank lines and
original spacing are lost, and nodes come out in insertion order.  A
same-named key that was overwritten during parsing appears once.
"""

from __future__ import annotations

from typing import TextIO

from ymltree.config import DEFAULT_NESTING_LEVEL
from ymltree.tree.collection import Tree
from ymltree.tree.nodes import LIST_MARKER, Node

__all__ = ["DUMP_FOOTER", "DUMP_HEADER", "dump_node", "dumps", "write_dump"]

DUMP_HEADER = "---=== YML Dump ===---"
DUMP_FOOTER = "---=== -------- ===---"


def dump_node(
    node: Node, depth: int = 0, nesting_level: int = DEFAULT_NESTING_LEVEL
) -> list[str]:
    """Render ``node`` and its subtree as a list of lines."""
    indent = " " * (depth * nesting_level)
    if node.is_list:
        line = f"{indent}{LIST_MARKER}{node.name}"
        if node.value:
            line += f": {node.value}"
        elif node.children:
            line += ":"
    else:
        line = f"{indent}{node.name}:"
        if node.value:
            line += f" {node.value}"

    lines = [line]
    for child in node.children:
        lines.extend(dump_node(child, depth + 1, nesting_level))
    return lines


def dumps(tree: Tree, nesting_level: int = DEFAULT_NESTING_LEVEL) -> str:
    """Return ``tree`` as indented text, one node per line.

    Returns an empty string for an empty tree; otherwise the text ends with a
    newline.
    """
    lines: list[str] = []
    for node in tree:
        lines.extend(dump_node(node, 0, nesting_level))
    return "".join(f"{line}\n" for line in lines)


def write_dump(
    tree: Tree, stream: TextIO, nesting_level: int = DEFAULT_NESTING_LEVEL
) -> str:
    """Write ``tree`` framed by the dump banner to ``stream``.

    Returns:
        The serialized body without the banner.
    """
    body = dumps(tree, nesting_level)
    stream.write(f"{DUMP_HEADER}\n\n{body}\n{DUMP_FOOTER}\n")
    return body
