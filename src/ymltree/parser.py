"""Parser: converts indented ``key: value`` text into a Tree of Nodes.

The parser makes one pass over the text.  Its only state is the *current
path*, the dotted path of the innermost open header, which is passed into
and returned from ``parse_line`` rather than stored on the instance.  That
keeps each line step a pure function of (line, path, destination tree).

Per line:
1. Skip blank, whitespace-only and comment lines.
2. depth = leading spaces // nesting_level (non-multiples truncate).
3. Split on the first ":" into trimmed ``name`` and optional ``value``.
4. Build a Node (it strips "- " and infers its scalar kind itself).
5. Truncate the current path to its first ``depth`` segments (dedent).
6. Resolve the parent: root tree for an empty path, else the node the path
   names in the destination tree.
7. A node with an empty value whose line contains ``name + ":"`` is a
   header; its name is appended to the current path.
8. Insert the node into the parent's children.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ymltree.config import ParserConfig
from ymltree.exceptions import MalformedLineError
from ymltree.tree.collection import PATH_SEPARATOR, Tree
from ymltree.tree.nodes import Node

__all__ = [
    "Parser",
    "count_leading_spaces",
    "is_header",
    "should_skip_line",
    "split_tokens",
    "truncate_path",
]

logger = logging.getLogger(__name__)

_KEY_SEPARATOR = ":"


def should_skip_line(line: str, comment_marker: str = "#") -> bool:
    """Return True for empty, whitespace-only and comment lines."""
    stripped = line.strip()
    return not stripped or stripped.startswith(comment_marker)


def count_leading_spaces(line: str) -> int:
    """Count leading space characters only; tabs are not indentation."""
    return len(line) - len(line.lstrip(" "))


def split_tokens(line: str) -> list[str]:
    """Split ``line`` on its first colon into at most two trimmed tokens.

    Everything after the first colon is the value, so ``"time: 10:30"``
    yields ``["time", "10:30"]``.  A line without a colon yields one token.
    """
    name, sep, value = line.partition(_KEY_SEPARATOR)
    if not sep:
        return [name.strip()]
    return [name.strip(), value.strip()]


def truncate_path(path: str, depth: int) -> str:
    """Keep the first ``depth`` segments of a dotted path.

    ``truncate_path("a.b.c", 1) == "a"``; depth 0 always gives ``""``.
    """
    if depth <= 0 or not path:
        return ""
    return PATH_SEPARATOR.join(path.split(PATH_SEPARATOR)[:depth])


def is_header(node: Node, line: str) -> bool:
    """True when ``node`` opens a nested block.

    The check re-derives ``name + ":"`` from the post-strip name and looks
    for it in the raw line, so ``- fruit:`` opens a block while ``- apple``
    does not.
    """
    return not node.value and f"{node.name}{_KEY_SEPARATOR}" in line


@dataclass
class Parser:
    """Parses raw text into a destination Tree.

    The destination tree is populated in place; nothing is cleared first, so
    callers that reload must hand in a fresh Tree.

    Example::

        tree = Tree()
        Parser(tree).parse("server:\\n  port: 8080\\n")
        tree.find_path("server.port").as_type(int)   # 8080
    """

    tree: Tree
    config: ParserConfig = field(default_factory=ParserConfig)

    def parse(self, text: str) -> Tree:
        """Parse every line of ``text`` into ``self.tree``.

        Args:
            text: Raw document content.  Both ``\\n`` and ``\\r\\n`` endings
                  are accepted.

        Returns:
            The destination tree, for chaining.

        Raises:
            MalformedLineError: A line has an empty key or its parent path
                cannot be resolved.  Parsing stops at the first such line.
        """
        current_path = ""
        placed = 0
        for line_number, line in enumerate(text.splitlines(), start=1):
            if should_skip_line(line, self.config.comment_marker):
                continue
            current_path = self.parse_line(line, current_path, line_number)
            placed += 1

        logger.debug("Parsed %d node(s), %d at root", placed, len(self.tree))
        return self.tree

    def parse_line(self, line: str, current_path: str, line_number: int = 0) -> str:
        """Place the node described by one non-skipped line.

        Args:
            line:         The raw line, indentation included.
            current_path: Dotted path of the innermost open header before this
                          line.
            line_number:  1-based line number, used in error messages only.

        Returns:
            The current path after this line: truncated to the line's depth,
            and extended by the node's name when the line is a header.
        """
        nesting = self.config.nesting_level
        spaces = count_leading_spaces(line)
        if spaces % nesting:
            logger.warning(
                "Line %d: %d leading space(s) is not a multiple of %d; "
                "rounding down",
                line_number,
                spaces,
                nesting,
            )
        depth = spaces // nesting

        tokens = split_tokens(line)
        if not tokens[0]:
            raise MalformedLineError(line_number, line, "empty key")

        node = Node(*tokens, list_marker=self.config.list_marker)

        parent_path = truncate_path(current_path, depth)
        parent = self._resolve_parent(parent_path, line_number, line)

        path = parent_path
        if is_header(node, line):
            path = f"{path}{PATH_SEPARATOR}{node.name}" if path else node.name

        parent.insert(node)
        logger.debug(
            "Line %d: placed %r (depth %d) under %r",
            line_number,
            node.name,
            depth,
            parent_path or "<root>",
        )
        return path

    def _resolve_parent(self, path: str, line_number: int, line: str) -> Tree:
        """Return the Tree a node at ``path`` belongs in."""
        if not path:
            return self.tree

        parent = self.tree.find_path(path)
        if parent is None:
            # Only reachable when a header name contains a literal dot
            raise MalformedLineError(
                line_number, line, f"parent path {path!r} cannot be resolved"
            )
        return parent.children
