"""TextSource Protocol: the extension point for loading raw document text.

Defines the structural interface every source must satisfy.  Users can plug
in custom sources without inheriting from any base class; any class with a
conformant ``read`` method passes ``isinstance`` checks.

Example::

    from ymltree.protocols import TextSource

    class DictSource:
        def __init__(self, files: dict[str, str]) -> None:
            self._files = files

        def read(self, identifier: str) -> str:
            return self._files[identifier]

    assert isinstance(DictSource({}), TextSource)  # True, structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["TextSource"]


@runtime_checkable
class TextSource(Protocol):
    """Structural protocol for text sources.

    The ``read`` method must:
    - Accept an identifier (a path, URL or any key the source understands).
    - Return the full document text as ``str``.
    - Raise ``SourceUnavailableError`` when the text cannot be obtained.
      Document propagates the error unchanged.
    """

    def read(self, identifier: str) -> str: ...
