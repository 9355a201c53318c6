"""
Tests for the conversion service

Tests the boundary operations used by the host: load with structural check,
JSON helpers, and the HTML preview.
"""

import logging

import pytest

from utils.mock_utils import doc, node, text
from wysiwym.exceptions import EmptyProductionError, StructuralRejectionError
from wysiwym.services.conversion_service import (
    check_editor_tree,
    dump_editor_tree,
    load_editor_tree,
    preview_html,
    to_editor_tree,
)


class TestToEditorTree:
    """Test the initial-load operation"""

    def test_empty_document_rejected_by_check(self, registry, schema):
        with pytest.raises(StructuralRejectionError) as exc_info:
            to_editor_tree(registry, schema, doc())
        assert exc_info.value.kind == "document"

    def test_empty_document_without_check(self, registry, schema):
        tree = to_editor_tree(registry, schema, doc(), check=False)
        assert tree.type == "document"
        assert tree.content == []

    def test_block_at_inline_position_rejected(self, registry, schema):
        tree = doc(node("paragraph", node("paragraph", text("nested"))))
        with pytest.raises(StructuralRejectionError, match="Invalid content for 'paragraph'"):
            to_editor_tree(registry, schema, tree)

    def test_failure_logs_tree_dump(self, registry, schema, caplog):
        with caplog.at_level(logging.DEBUG, logger="wysiwym.services.conversion_service"):
            with pytest.raises(EmptyProductionError):
                to_editor_tree(registry, schema, doc(node("bullet_list")))
        assert "BULLET_LIST" in caplog.text
        assert "<no children>" in caplog.text


class TestEditorTreeJson:
    """Test loading and dumping editor trees"""

    def test_dump(self, registry, schema):
        tree = to_editor_tree(registry, schema, doc(node("heading", text("T"), payload={"level": 2})))
        assert dump_editor_tree(tree) == {
            "type": "document",
            "content": [{"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "T"}]}],
        }

    def test_load_rejects_invalid_tree(self, schema):
        with pytest.raises(StructuralRejectionError):
            load_editor_tree(schema, {"type": "document", "content": [{"type": "text", "text": "loose"}]})

    def test_load_rejects_malformed_json(self, schema):
        with pytest.raises(StructuralRejectionError, match="Malformed"):
            load_editor_tree(schema, {"content": []})

    def test_check_editor_tree(self, schema):
        tree = schema.node("document")
        with pytest.raises(StructuralRejectionError) as exc_info:
            check_editor_tree(schema, tree)
        assert exc_info.value.details["kind"] == "document"


class TestPreview:
    """Test HTML preview rendering"""

    def test_hello_world(self, registry, schema):
        tree = doc(node("paragraph", text("Hello "), node("emph", text("world"))))
        assert preview_html(registry, schema, tree) == "<p>Hello <em>world</em></p>"

    def test_heading_and_list(self, registry, schema):
        tree = doc(
            node("heading", text("Title"), payload={"level": 2}),
            node("bullet_list", node("list_item", node("paragraph", node("strong", text("x"))))),
        )
        assert preview_html(registry, schema, tree) == "<h2>Title</h2><ul><li><p><strong>x</strong></p></li></ul>"

    def test_hard_break(self, registry, schema):
        tree = doc(node("paragraph", text("a"), node("hard_break"), text("b")))
        assert preview_html(registry, schema, tree) == "<p>a<br>b</p>"

    def test_text_cannot_inject_markup(self, registry, schema):
        tree = doc(node("paragraph", text("<script>alert('x')</script>")))
        html = preview_html(registry, schema, tree)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
