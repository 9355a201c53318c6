"""
Tests for Markdown import and emit

Tests parsing Markdown into doc-model trees through the plugin importers,
normalisation against NodeSpecs, emitting Markdown through the plugin
emitters, and round trips between the two.
"""

import pytest

from utils.mock_utils import doc, node, text
from wysiwym.docmodel.normalize import normalize_node, wrap_inlines
from wysiwym.editor.model import NodeSpec
from wysiwym.exceptions import (
    AmbiguousKindError,
    FlowViolationError,
    StructuralRejectionError,
    UnknownKindError,
    UnsupportedMarkdownError,
)
from wysiwym.plugins.loader import initialize_plugins
from wysiwym.plugins.registry import KindRegistry
from wysiwym.services.conversion_service import to_doc_tree, to_editor_tree
from wysiwym.services.markdown_service import emit_markdown, parse_markdown

SAMPLE = "Hello *world* and *universe*\n\n- one\n- *two*\n"

SAMPLE_DOC = doc(
    node("paragraph", text("Hello "), node("emph", text("world")), text(" and "), node("emph", text("universe"))),
    node(
        "bullet_list",
        node("list_item", node("paragraph", text("one"))),
        node("list_item", node("paragraph", node("emph", text("two")))),
    ),
)


# ============================================================================
# 1. Import
# ============================================================================


class TestParseMarkdown:
    """Test Markdown → doc tree"""

    def test_sample(self, registry):
        parsed = parse_markdown(registry, SAMPLE)
        kinds = {n.kind for n in parsed.walk()}
        assert "emph" in kinds
        assert "bullet_list" in kinds
        assert parsed == SAMPLE_DOC

    def test_heading(self, registry):
        assert parse_markdown(registry, "## Title\n") == doc(node("heading", text("Title"), payload={"level": 2}))

    def test_strong_and_hard_break(self, registry):
        parsed = parse_markdown(registry, "a **b**\\\nc\n")
        assert parsed == doc(node("paragraph", text("a "), node("strong", text("b")), node("hard_break"), text("c")))

    def test_soft_break_is_newline_text(self, registry):
        assert parse_markdown(registry, "one\ntwo\n") == doc(node("paragraph", text("one"), text("\n"), text("two")))

    def test_escapes_are_plain_text(self, registry):
        assert parse_markdown(registry, "a\\*b\n") == doc(node("paragraph", text("a*b")))

    def test_nested_list(self, registry):
        parsed = parse_markdown(registry, "- two\n  - two.one\n")
        assert parsed == doc(
            node(
                "bullet_list",
                node(
                    "list_item",
                    node("paragraph", text("two")),
                    node("bullet_list", node("list_item", node("paragraph", text("two.one")))),
                ),
            )
        )

    def test_empty_source(self, registry):
        assert parse_markdown(registry, "") == doc()

    def test_element_without_importer_keeps_content(self, registry):
        """A blockquote has no importer; its paragraph survives inside a fragment"""
        assert parse_markdown(registry, "> quoted\n") == doc(node("fragment", node("paragraph", text("quoted"))))

    def test_disabled_plugin_falls_back_to_fragment(self):
        reg = KindRegistry()
        initialize_plugins(reg, ["text", "paragraph"])
        assert parse_markdown(reg, "*x*\n") == doc(node("paragraph", node("fragment", text("x"))))

    def test_element_without_importer_or_content(self, registry):
        with pytest.raises(UnsupportedMarkdownError) as exc_info:
            parse_markdown(registry, "```\ncode\n```\n")
        assert exc_info.value.details["element"] == "fence"
        assert "fence" in str(exc_info.value)

    def test_importer_output_is_normalised(self):
        """An importer that puts a block inside a paragraph is caught"""
        reg = KindRegistry()
        initialize_plugins(reg, freeze=False)
        reg.register_markdown_importer(
            "paragraph",
            lambda element, import_children: node("paragraph", node("bullet_list", node("list_item"))),
        )
        with pytest.raises(FlowViolationError) as exc_info:
            parse_markdown(reg, "x\n")
        assert exc_info.value.kind == "bullet_list"


# ============================================================================
# 2. Normalisation
# ============================================================================


class TestNormalizeNode:
    """Test normalize_node and wrap_inlines"""

    def test_valid_tree_unchanged(self, registry):
        assert normalize_node(registry, SAMPLE_DOC) == SAMPLE_DOC

    def test_block_inside_inline_flow(self, registry):
        tree = doc(node("paragraph", node("bullet_list", node("list_item", node("paragraph", text("x"))))))
        with pytest.raises(FlowViolationError) as exc_info:
            normalize_node(registry, tree)
        assert exc_info.value.kind == "bullet_list"
        assert exc_info.value.details["position"] == "inline"

    def test_inline_inside_block_flow(self, registry):
        with pytest.raises(FlowViolationError) as exc_info:
            normalize_node(registry, doc(node("bullet_list", text("x"))))
        assert exc_info.value.kind == "text"
        assert exc_info.value.details["position"] == "block"

    def test_leaf_with_children(self, registry):
        with pytest.raises(FlowViolationError, match="'hard_break' child"):
            normalize_node(registry, doc(node("paragraph", node("hard_break", text("x")))))

    def test_fragment_checked_against_enclosing_kind(self, registry):
        tree = doc(node("paragraph", node("fragment", text("a"))))
        assert normalize_node(registry, tree) == tree
        with pytest.raises(FlowViolationError):
            normalize_node(registry, doc(node("fragment", text("a"))))

    def test_unknown_kind(self, registry):
        with pytest.raises(UnknownKindError) as exc_info:
            normalize_node(registry, doc(node("table")))
        assert exc_info.value.kind == "table"

    def test_nested_document(self, registry):
        with pytest.raises(FlowViolationError):
            normalize_node(registry, doc(doc()))

    def test_ambiguous_kind(self, fake_registry):
        fake_registry.register_node_spec("a", NodeSpec(group="inline", inline=True))
        with pytest.raises(AmbiguousKindError):
            normalize_node(fake_registry, doc(node("line", node("a", text("x")))))

    def test_list_item_gathers_loose_inlines(self, registry):
        tree = node(
            "list_item",
            text("a"),
            node("emph", text("b")),
            node("bullet_list", node("list_item", node("paragraph", text("c")))),
            text("d"),
        )
        assert normalize_node(registry, tree) == node(
            "list_item",
            node("paragraph", text("a"), node("emph", text("b"))),
            node("bullet_list", node("list_item", node("paragraph", text("c")))),
            node("paragraph", text("d")),
        )

    def test_wrap_inlines(self):
        children = [text("a"), text("b"), node("box"), text("c")]
        wrapped = wrap_inlines(children, lambda n: n.kind == "text", lambda run: node("line", *run))
        assert wrapped == [node("line", text("a"), text("b")), node("box"), node("line", text("c"))]

    def test_wrap_inlines_without_inlines(self):
        children = [node("box"), node("box")]
        assert wrap_inlines(children, lambda n: False, lambda run: node("line", *run)) == children


# ============================================================================
# 3. Emit
# ============================================================================


class TestEmitMarkdown:
    """Test doc tree → Markdown"""

    def test_sample(self, registry):
        assert emit_markdown(registry, SAMPLE_DOC) == SAMPLE

    def test_heading(self, registry):
        assert emit_markdown(registry, doc(node("heading", text("Title"), payload={"level": 3}))) == "### Title\n"

    def test_special_characters_escaped(self, registry):
        assert emit_markdown(registry, doc(node("paragraph", text("a*b_c")))) == "a\\*b\\_c\n"

    def test_strong_around_emph(self, registry):
        tree = doc(node("paragraph", node("strong", node("emph", text("x")))))
        assert emit_markdown(registry, tree) == "__*x*__\n"

    def test_list_item_with_two_paragraphs(self, registry):
        tree = doc(node("bullet_list", node("list_item", node("paragraph", text("a")), node("paragraph", text("b")))))
        assert emit_markdown(registry, tree) == "- a\n\n  b\n"

    def test_fragments_are_spliced(self, registry):
        tree = doc(node("fragment", node("paragraph", text("a"))), node("paragraph", text("b")))
        assert emit_markdown(registry, tree) == "a\n\nb\n"

    def test_empty_document(self, registry):
        assert emit_markdown(registry, doc()) == ""

    def test_kind_without_emitter(self, registry):
        with pytest.raises(UnknownKindError) as exc_info:
            emit_markdown(registry, doc(node("table")))
        assert exc_info.value.kind == "table"
        assert exc_info.value.details["direction"] == "markdown"

    def test_bad_heading_payload(self, registry):
        with pytest.raises(StructuralRejectionError) as exc_info:
            emit_markdown(registry, doc(node("heading", text("T"))))
        assert exc_info.value.kind == "heading"


# ============================================================================
# 4. Round trips
# ============================================================================


MARKDOWN_TREES = [
    doc(node("paragraph", text("Hello "), node("emph", text("world")))),
    doc(
        node("heading", text("Title"), payload={"level": 1}),
        node("paragraph", text("Body "), node("strong", text("bold")), text(" end")),
    ),
    doc(node("paragraph", node("emph", text("a"), node("strong", text("b")), text("c")))),
    doc(node("paragraph", node("strong", node("emph", text("x"))), text(" y"))),
    doc(node("paragraph", node("emph", node("strong", text("x"))))),
    doc(node("paragraph", text("line one"), node("hard_break"), text("line two"))),
    doc(node("paragraph", text("one"), text("\n"), text("two"))),
    doc(node("paragraph", text("2 * 3 = [six]"))),
    doc(
        node(
            "bullet_list",
            node("list_item", node("paragraph", text("one"))),
            node(
                "list_item",
                node("paragraph", text("two")),
                node("bullet_list", node("list_item", node("paragraph", node("emph", text("two.one"))))),
            ),
        )
    ),
    doc(node("bullet_list", node("list_item", node("paragraph", text("a")), node("paragraph", text("b"))))),
]


class TestMarkdownRoundTrip:
    """Test Markdown → doc → Markdown → doc"""

    def test_sample(self, registry):
        first = parse_markdown(registry, SAMPLE)
        again = parse_markdown(registry, emit_markdown(registry, first))
        assert again == first

    @pytest.mark.parametrize("tree", MARKDOWN_TREES)
    def test_doc_survives_markdown(self, registry, tree):
        assert parse_markdown(registry, emit_markdown(registry, tree)) == tree

    def test_through_the_editor(self, registry, schema):
        """Markdown loaded into the editor and saved unchanged comes back the same"""
        editor_tree = to_editor_tree(registry, schema, parse_markdown(registry, SAMPLE))
        assert emit_markdown(registry, to_doc_tree(registry, editor_tree)) == SAMPLE
