"""Sources subpackage: collaborators that turn an identifier into text.

The base install provides ``FileSource``.  ``HttpSource`` needs the optional
``http`` extra (httpx + tenacity); its module imports cleanly without them
and only fails when instantiated:

    pip install ymltree[http]

All sources satisfy the ``TextSource`` Protocol structurally.
"""

from __future__ import annotations

from ymltree.protocols import TextSource
from ymltree.sources.file import FileSource
from ymltree.sources.http import HttpSource

__all__ = ["FileSource", "HttpSource", "resolve_source"]

_HTTP_SCHEMES = ("http://", "https://")


def resolve_source(identifier: str) -> TextSource:
    """Pick the default source for ``identifier``.

    http(s) URLs go to ``HttpSource``; everything else is treated as a local
    path and read by ``FileSource``.
    """
    if identifier.lower().startswith(_HTTP_SCHEMES):
        return HttpSource()
    return FileSource()
