"""Unit tests for HttpSource.

Skipped automatically on base installs (no httpx/tenacity) via
``pytest.importorskip``.  All tests use ``httpx.MockTransport``; no real
network calls are made.
"""

from __future__ import annotations

import builtins
from typing import Any

import pytest

httpx = pytest.importorskip("httpx", reason="http extra not installed")
pytest.importorskip("tenacity", reason="http extra not installed")

from ymltree.document import Document  # noqa: E402
from ymltree.exceptions import SourceUnavailableError  # noqa: E402
from ymltree.protocols import TextSource  # noqa: E402
from ymltree.sources.http import HttpSource  # noqa: E402

URL = "https://config.example.com/app.yml"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_source(handler: Any, max_attempts: int = 3) -> HttpSource:
    """Build an HttpSource whose client answers through ``handler``."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpSource(max_attempts=max_attempts, client=client)


class TestRead:
    def test_returns_body(self) -> None:
        def handler(request: Any) -> Any:
            assert str(request.url) == URL
            return httpx.Response(200, text="server:\n  port: 80\n")

        assert make_source(handler).read(URL) == "server:\n  port: 80\n"

    def test_document_loads_through_source(self) -> None:
        def handler(request: Any) -> Any:
            return httpx.Response(200, text="server:\n  port: 80\n")

        doc = Document().load_from_source(URL, source=make_source(handler))
        assert doc.get("server.port") is not None
        assert doc.source == URL

    def test_status_error_not_retried(self) -> None:
        calls: list[str] = []

        def handler(request: Any) -> Any:
            calls.append(str(request.url))
            return httpx.Response(404)

        with pytest.raises(SourceUnavailableError, match=r"Could not open file"):
            make_source(handler).read(URL)
        assert len(calls) == 1


class TestRetry:
    def test_transport_error_retried_then_succeeds(self) -> None:
        calls: list[int] = []

        def handler(request: Any) -> Any:
            calls.append(1)
            if len(calls) < 2:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="a: 1\n")

        assert make_source(handler).read(URL) == "a: 1\n"
        assert len(calls) == 2

    def test_gives_up_after_max_attempts(self) -> None:
        calls: list[int] = []

        def handler(request: Any) -> Any:
            calls.append(1)
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SourceUnavailableError):
            make_source(handler, max_attempts=2).read(URL)
        assert len(calls) == 2


class TestConstruction:
    def test_repr(self) -> None:
        assert repr(HttpSource(timeout=2.5, max_attempts=4)) == (
            "HttpSource(timeout=2.5, max_attempts=4)"
        )

    def test_invalid_attempts(self) -> None:
        with pytest.raises(ValueError, match=r"max_attempts"):
            HttpSource(max_attempts=0)

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpSource(), TextSource)

    def test_import_error_has_install_hint(self, monkeypatch: pytest.MonkeyPatch) -> None:
        real_import = builtins.__import__

        def fake_import(name: str, *args: Any, **kwargs: Any) -> Any:
            if name == "httpx":
                raise ImportError("No module named 'httpx'")
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(builtins, "__import__", fake_import)
        with pytest.raises(ImportError, match=r"pip install ymltree\[http\]"):
            HttpSource()
