"""pytest plugin for ymltree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from ymltree import Document, ParserConfig
from ymltree.config import DEFAULT_NESTING_LEVEL
from ymltree.exceptions import YmlError


@pytest.fixture
def yml_document() -> Any:
    """Fixture that returns a Document factory.

    Usage in tests::

        def test_port(yml_document):
            doc = yml_document("server:\\n  port: 8080\\n")
            assert doc.get("server.port").as_type(int) == 8080

    Returns:
        A callable ``_build(text, nesting_level=2) -> Document``.
    """

    def _build(text: str, nesting_level: int = DEFAULT_NESTING_LEVEL) -> Document:
        return Document(text, config=ParserConfig(nesting_level=nesting_level))

    return _build


@pytest.fixture(scope="session")
def assert_yml_value() -> Any:
    """Fixture that returns a callable path/value asserter.

    The fixture is session-scoped because the returned callable is stateless
    (text input is parsed into a fresh Document per call).

    Usage in tests::

        def test_debug_flag(assert_yml_value):
            assert_yml_value("debug: true", "debug", True)

        def test_wrong_port(assert_yml_value):
            with pytest.raises(AssertionError, match=r"server.port"):
                assert_yml_value(doc, "server.port", 9090)

    Returns:
        A callable ``_assert(document_or_text, path, expected) -> None``.  The
        node is converted to ``type(expected)`` before comparing.
    """

    def _assert(document: Document | str, path: str, expected: Any) -> None:
        """Assert that ``path`` holds ``expected``.

        Raises:
            AssertionError: When the path is missing, the node cannot be
                converted to ``type(expected)``, or the values differ.  The
                message names the path, the expected value and the actual
                value with its kind.
        """
        doc = Document(document) if isinstance(document, str) else document
        node = doc.get(path)
        if node is None:
            raise AssertionError(f"path {path!r} not found in document")

        try:
            actual = node.as_type(type(expected))
        except YmlError as exc:
            raise AssertionError(
                f"path {path!r}: cannot read {node.value!r} ({node.kind}) "
                f"as {type(expected).__name__}: {exc}"
            ) from exc

        if actual != expected:
            raise AssertionError(
                f"path {path!r} does not match:\n"
                f"  expected: {expected!r}\n"
                f"  actual:   {actual!r} ({node.kind})"
            )

    return _assert
