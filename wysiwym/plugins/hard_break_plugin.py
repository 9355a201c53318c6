"""
Hard Break Plugin

Inline leaf node: a forced line break inside inline content. It has no
children in either tree.
"""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import DocNode, new_node
from wysiwym.editor.model import EditorNode, NodeSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

KIND_HARD_BREAK = "hard_break"

_META = PluginMeta(
    name="hard_break",
    version="1.0.0",
    description="Forced line break within inline content",
    kinds=[KIND_HARD_BREAK],
)

HARD_BREAK_SPEC = NodeSpec(
    group="inline",
    inline=True,
    tag="br",
)


def hard_break_to_editor(schema: EditorSchema, node: DocNode, children: list[EditorNode]) -> EditorNode:
    return schema.node(KIND_HARD_BREAK)


def hard_break_from_editor(node: EditorNode, children: list[DocNode]) -> DocNode:
    return new_node(KIND_HARD_BREAK)


def hard_break_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_HARD_BREAK)


def hard_break_to_markdown(node: DocNode, emit_children) -> str:
    return "\\\n"


class HardBreakPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_node_spec(KIND_HARD_BREAK, HARD_BREAK_SPEC)
        registry.register_node_to_editor(KIND_HARD_BREAK, hard_break_to_editor)
        registry.register_node_from_editor(KIND_HARD_BREAK, hard_break_from_editor)
        registry.register_markdown_importer("hardbreak", hard_break_from_markdown)
        registry.register_markdown_emitter(KIND_HARD_BREAK, hard_break_to_markdown)
