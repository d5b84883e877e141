"""Tests for Document: load lifecycle, path lookup, direct access, mutation.

Covers:
- The server / items reference documents
- Tolerant get() vs loud bracket access
- Reload discards all previous nodes; failed reloads leave an empty document
- load_from_source() with a file, a custom source and a failing source
- Path cache hits, invalidation on reload, set() and direct tree edits
- Readers never observe an empty or half-built tree during a reload
"""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from ymltree.config import ParserConfig
from ymltree.document import Document
from ymltree.exceptions import (
    MalformedLineError,
    NodeIndexError,
    NodeNotFoundError,
    SourceUnavailableError,
)
from ymltree.parser import Parser
from ymltree.tree.collection import Tree
from ymltree.tree.kinds import NodeKind
from ymltree.tree.nodes import Node

SERVER_DOC = """\
server:
  host: localhost
  port: 8080
  debug: true
"""

ITEMS_DOC = """\
items:
  - apple
  - banana
"""


class DictSource:
    """In-memory TextSource used to exercise load_from_source()."""

    def __init__(self, files: dict[str, str]) -> None:
        self._files = files
        self.reads: list[str] = []

    def read(self, identifier: str) -> str:
        self.reads.append(identifier)
        try:
            return self._files[identifier]
        except KeyError:
            raise SourceUnavailableError(identifier) from None


# ---------------------------------------------------------------------------
# Reference documents
# ---------------------------------------------------------------------------


class TestServerDocument:
    @pytest.fixture
    def doc(self) -> Document:
        return Document(SERVER_DOC)

    def test_host(self, doc: Document) -> None:
        node = doc.get("server.host")
        assert node is not None
        assert node.value == "localhost"

    def test_port_as_int(self, doc: Document) -> None:
        node = doc.get("server.port")
        assert node is not None
        assert node.as_type(int) == 8080

    def test_debug_as_bool(self, doc: Document) -> None:
        node = doc.get("server.debug")
        assert node is not None
        assert node.as_type(bool) is True

    def test_server_is_object(self, doc: Document) -> None:
        node = doc.get("server")
        assert node is not None
        assert node.kind == NodeKind.OBJECT

    def test_raw_content_kept(self, doc: Document) -> None:
        assert doc.raw_content == SERVER_DOC


class TestItemsDocument:
    def test_items_is_list_with_two_children(self) -> None:
        doc = Document(ITEMS_DOC)
        items = doc.get("items")
        assert items is not None
        assert items.kind == NodeKind.LIST
        assert [child.name for child in items] == ["apple", "banana"]
        assert [child.value for child in items] == ["", ""]


# ---------------------------------------------------------------------------
# Lookup semantics
# ---------------------------------------------------------------------------


class TestLookup:
    @pytest.fixture
    def doc(self) -> Document:
        return Document(SERVER_DOC)

    @pytest.mark.parametrize(
        "path", ["missing", "server.missing", "server.port.deeper", ""]
    )
    def test_missing_path_returns_none(self, doc: Document, path: str) -> None:
        assert doc.get(path) is None

    def test_bracket_access(self, doc: Document) -> None:
        assert doc["server"]["port"].value == "8080"
        assert doc[0].name == "server"
        assert doc["server"][2].name == "debug"

    def test_bracket_missing_name_raises(self, doc: Document) -> None:
        with pytest.raises(NodeNotFoundError):
            doc["missing"]
        with pytest.raises(NodeNotFoundError):
            doc["server"]["missing"]

    def test_bracket_missing_index_raises(self, doc: Document) -> None:
        with pytest.raises(NodeIndexError):
            doc[1]

    def test_container_protocol(self, doc: Document) -> None:
        assert len(doc) == 1
        assert "server" in doc
        assert [node.name for node in doc] == ["server"]

    def test_empty_document(self) -> None:
        doc = Document()
        assert len(doc) == 0
        assert doc.get("anything") is None
        assert doc.raw_content == ""

    def test_comment_only_document_is_empty(self) -> None:
        assert len(Document("# nothing\n\n   \n")) == 0


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestReload:
    def test_reload_discards_previous_nodes(self) -> None:
        doc = Document(SERVER_DOC)
        doc.load_from_text("other: 1\n")
        assert len(doc) == 1
        assert doc.get("server") is None
        assert doc.get("other") is not None

    def test_reload_same_text_is_stable(self) -> None:
        doc = Document(SERVER_DOC)
        before = doc.to_text()
        doc.load_from_text(SERVER_DOC)
        assert doc.to_text() == before
        assert len(doc) == 1

    def test_reload_replaces_root_tree_object(self) -> None:
        doc = Document(SERVER_DOC)
        old_root = doc.root
        doc.load_from_text("other: 1\n")
        assert doc.root is not old_root
        assert "server" in old_root

    def test_failed_reload_leaves_empty_document(self) -> None:
        doc = Document(SERVER_DOC)
        with pytest.raises(MalformedLineError):
            doc.load_from_text("ok: 1\n: broken\n")
        assert len(doc) == 0
        assert doc.get("ok") is None

    def test_nesting_level_override_is_kept(self) -> None:
        doc = Document()
        doc.load_from_text("a:\n    b: 1\n", nesting_level=4)
        assert doc.config.nesting_level == 4
        assert doc.get("a.b") is not None

    def test_config_passed_to_parser(self) -> None:
        doc = Document("; note\nkey: 1\n", config=ParserConfig(comment_marker=";"))
        assert [node.name for node in doc] == ["key"]

    def test_load_returns_self(self) -> None:
        doc = Document()
        assert doc.load_from_text("a: 1") is doc

    def test_clear(self) -> None:
        doc = Document(SERVER_DOC)
        doc.clear()
        assert len(doc) == 0
        assert doc.get("server") is None
        assert doc.raw_content == SERVER_DOC


class TestLoadFromSource:
    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text(SERVER_DOC, encoding="utf-8")
        doc = Document().load_from_source(str(path))
        assert doc.get("server.port") is not None
        assert doc.source == str(path)

    def test_missing_file_raises_and_empties(self, tmp_path: Path) -> None:
        doc = Document(SERVER_DOC)
        missing = str(tmp_path / "nope.yml")
        with pytest.raises(SourceUnavailableError, match=r"Could not open file"):
            doc.load_from_source(missing)
        assert len(doc) == 0

    def test_custom_source(self) -> None:
        source = DictSource({"app": ITEMS_DOC})
        doc = Document().load_from_source("app", source=source)
        assert source.reads == ["app"]
        assert doc.get("items.banana") is not None

    def test_failed_read_clears_source(self) -> None:
        doc = Document().load_from_source("app", source=DictSource({"app": "a: 1"}))
        with pytest.raises(SourceUnavailableError):
            doc.load_from_source("missing", source=DictSource({}))
        assert doc.source is None
        assert repr(doc) == "Document(source='<text>', nodes=0)"

    def test_failed_parse_clears_source(self) -> None:
        doc = Document()
        with pytest.raises(MalformedLineError):
            doc.load_from_source("bad", source=DictSource({"bad": ": x"}))
        assert doc.source is None
        assert len(doc) == 0

    def test_text_load_clears_source(self) -> None:
        doc = Document().load_from_source("app", source=DictSource({"app": "a: 1"}))
        doc.load_from_text("b: 2")
        assert doc.source is None


# ---------------------------------------------------------------------------
# Cache and mutation
# ---------------------------------------------------------------------------


class TestPathCache:
    def test_repeated_lookup_returns_same_node(self) -> None:
        doc = Document(SERVER_DOC)
        assert doc.get("server.port") is doc.get("server.port")

    def test_cache_cleared_on_reload(self) -> None:
        doc = Document("a:\n  b: 1\n")
        first = doc.get("a.b")
        doc.load_from_text("a:\n  b: 2\n")
        second = doc.get("a.b")
        assert first is not second
        assert second is not None
        assert second.value == "2"

    def test_sees_child_replaced_through_brackets(self) -> None:
        doc = Document("a:\n  b: 1\n")
        assert doc.get("a.b") is not None
        doc["a"].children.insert(Node("b", "2"))
        node = doc.get("a.b")
        assert node is doc["a"]["b"]
        assert node is not None
        assert node.value == "2"

    def test_sees_root_cleared_in_place(self) -> None:
        doc = Document("a:\n  b: 1\n")
        assert doc.get("a.b") is not None
        doc.root.clear()
        assert doc.get("a.b") is None
        assert doc.get("a") is None

    def test_sees_children_cleared_in_place(self) -> None:
        doc = Document("a:\n  b: 1\n")
        assert doc.get("a.b") is not None
        doc["a"].children.clear()
        assert doc.get("a.b") is None
        assert doc.get("a") is not None

    def test_small_cache_still_resolves(self) -> None:
        doc = Document(SERVER_DOC, max_cache_size=1)
        for _ in range(3):
            for path in ("server.host", "server.port", "server.debug"):
                assert doc.get(path) is not None


class TestSet:
    def test_set_new_leaf(self) -> None:
        doc = Document(SERVER_DOC)
        node = doc.set("server.timeout", 30)
        assert node.kind == NodeKind.INTEGER
        found = doc.get("server.timeout")
        assert found is node

    def test_set_replaces_cached_node(self) -> None:
        doc = Document(SERVER_DOC)
        assert doc.get("server.port") is not None
        doc.set("server.port", 9090)
        node = doc.get("server.port")
        assert node is not None
        assert node.as_type(int) == 9090

    def test_set_bool_stored_as_literal(self) -> None:
        doc = Document(SERVER_DOC)
        doc.set("server.debug", False)
        node = doc.get("server.debug")
        assert node is not None
        assert node.value == "false"
        assert node.as_type(bool) is False

    def test_set_root_level(self) -> None:
        doc = Document()
        doc.set("ratio", 0.25)
        assert doc["ratio"].kind == NodeKind.DOUBLE

    def test_set_missing_parent_raises(self) -> None:
        doc = Document(SERVER_DOC)
        with pytest.raises(NodeNotFoundError):
            doc.set("client.port", 1)

    def test_set_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match=r"node name"):
            Document().set("server.", 1)


class TestDump:
    def test_dump_writes_banner(self, capsys: pytest.CaptureFixture[str]) -> None:
        body = Document(SERVER_DOC).dump()
        out = capsys.readouterr().out
        assert "---=== YML Dump ===---" in out
        assert body in out
        assert body == SERVER_DOC

    def test_repr(self) -> None:
        assert repr(Document(SERVER_DOC)) == "Document(source='<text>', nodes=1)"


class TestConcurrentReaders:
    def test_readers_see_complete_trees(self) -> None:
        """Each observed tree is either the old or the new one, never partial."""
        old = "".join(f"k{i}: {i}\n" for i in range(200))
        new = "".join(f"n{i}: {i}\n" for i in range(200))
        doc = Document(old)
        sizes: list[int] = []
        stop = threading.Event()

        def reader() -> None:
            while not stop.is_set():
                sizes.append(len(doc.root))

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(20):
            doc.load_from_text(new)
            doc.load_from_text(old)
        stop.set()
        thread.join()

        assert sizes
        assert set(sizes) == {200}

    def test_old_tree_visible_while_parsing(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        doc = Document("a: 1\nb: 2\n")
        seen: list[tuple[int, int]] = []
        original = Parser.parse

        def recording_parse(parser: Parser, text: str) -> Tree:
            seen.append((len(doc), len(doc.root)))
            return original(parser, text)

        monkeypatch.setattr(Parser, "parse", recording_parse)
        doc.load_from_text("c: 3\n")
        assert seen == [(2, 2)]
        assert [node.name for node in doc] == ["c"]
