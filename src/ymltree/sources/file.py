"""FileSource: reads document text from the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from ymltree.exceptions import SourceUnavailableError

__all__ = ["FileSource"]

logger = logging.getLogger(__name__)


class FileSource:
    """Local file source.

    Args:
        encoding: Text encoding used to decode the file.  Defaults to utf-8.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def __repr__(self) -> str:
        return f"FileSource(encoding={self._encoding!r})"

    def read(self, identifier: str) -> str:
        """Return the content of the file at ``identifier``.

        Raises:
            SourceUnavailableError: The file is missing, unreadable, a
                directory, or not valid in the configured encoding.
        """
        try:
            return Path(identifier).read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not read %s: %s", identifier, exc)
            raise SourceUnavailableError(identifier) from exc
