"""ParserConfig: immutable settings for the line parser.

ParserConfig is a frozen (immutable) dataclass holding the grammar
parameters.  Values are validated once in ``__post_init__`` so the parser
never has to re-check them per line.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_NESTING_LEVEL", "ParserConfig"]

DEFAULT_NESTING_LEVEL = 2


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for the indentation parser.

    Attributes:
        nesting_level: Number of space characters that make one indentation
            step.  Leading spaces are divided by this value (truncating) to get
            a line's depth.  Must be >= 1.
        comment_marker: A line whose first non-whitespace text starts with this
            marker is skipped.  Must be non-empty.
        list_marker: Prefix that flags a name as a list item.  It is stripped
            from the node name.  Must be non-empty.
    """

    nesting_level: int = DEFAULT_NESTING_LEVEL
    comment_marker: str = "#"
    list_marker: str = "- "

    def __post_init__(self) -> None:
        if isinstance(self.nesting_level, bool) or not isinstance(
            self.nesting_level, int
        ):
            msg = f"nesting_level must be an int, got {self.nesting_level!r}"
            raise ValueError(msg)
        if self.nesting_level < 1:
            msg = f"nesting_level must be >= 1, got {self.nesting_level}"
            raise ValueError(msg)
        if not self.comment_marker:
            msg = "comment_marker must be a non-empty string"
            raise ValueError(msg)
        if not self.list_marker:
            msg = "list_marker must be a non-empty string"
            raise ValueError(msg)

    def with_nesting_level(self, nesting_level: int | None) -> ParserConfig:
        """Return a copy with ``nesting_level`` replaced, or self when None."""
        if nesting_level is None or nesting_level == self.nesting_level:
            return self
        return ParserConfig(
            nesting_level=nesting_level,
            comment_marker=self.comment_marker,
            list_marker=self.list_marker,
        )
