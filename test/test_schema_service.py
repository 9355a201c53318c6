"""
Tests for the schema assembler

Tests that build_schema merges intrinsic kinds with registered fragments,
is deterministic, and rejects fragments that reuse intrinsic names.
"""

import pytest

from utils.mock_utils import add_node_kind
from wysiwym.editor.model import Flow, MarkSpec, NodeSpec
from wysiwym.exceptions import RegistrationConflictError, RegistryError
from wysiwym.plugins.registry import KindRegistry
from wysiwym.services.schema_service import DOCUMENT_SPEC, TEXT_SPEC, build_schema


class TestBuildSchema:
    """Test schema assembly from a registry"""

    def test_builtin_schema(self, schema):
        assert schema.top_node == "document"
        assert set(schema.nodes) == {
            "document",
            "text",
            "paragraph",
            "heading",
            "bullet_list",
            "list_item",
            "hard_break",
        }
        assert set(schema.marks) == {"emph", "strong"}

    def test_intrinsic_fragments(self, schema):
        assert schema.nodes["document"] is DOCUMENT_SPEC
        assert schema.nodes["text"] is TEXT_SPEC
        assert schema.nodes["document"].content == "block+"
        assert schema.nodes["text"].inline

    def test_registered_fragments_are_used(self, registry, schema):
        assert schema.nodes["paragraph"] is registry.get_node_spec("paragraph")
        assert schema.marks["emph"] is registry.get_mark_spec("emph")

    def test_deterministic(self, registry):
        first = build_schema(registry)
        second = build_schema(registry)
        assert first == second
        assert first.to_json() == second.to_json()

    def test_reflects_registry_changes(self, fake_registry):
        before = build_schema(fake_registry)
        add_node_kind(fake_registry, "quote", NodeSpec(content="block+", group="block", children_flow=Flow.BLOCK))
        after = build_schema(fake_registry)
        assert "quote" not in before.nodes
        assert "quote" in after.nodes

    def test_registry_without_block_kinds(self):
        """The document needs at least one kind in the block group"""
        with pytest.raises(RegistryError, match="'block'"):
            build_schema(KindRegistry())

    @pytest.mark.parametrize("kind", ["document", "text", "fragment"])
    def test_intrinsic_node_name_conflict(self, kind):
        reg = KindRegistry()
        reg.register_node_spec(kind, NodeSpec())
        with pytest.raises(RegistrationConflictError) as exc_info:
            build_schema(reg)
        assert exc_info.value.details["kind"] == kind

    def test_intrinsic_mark_name_conflict(self):
        reg = KindRegistry()
        reg.register_mark_spec("text", MarkSpec())
        with pytest.raises(RegistrationConflictError):
            build_schema(reg)

    def test_dangling_content_reference(self):
        reg = KindRegistry()
        reg.register_node_spec("table", NodeSpec(content="table_row+", group="block"))
        with pytest.raises(RegistryError, match="table_row") as exc_info:
            build_schema(reg)
        assert exc_info.value.details["kind"] == "table"
