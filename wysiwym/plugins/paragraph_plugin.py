"""
Paragraph Plugin

Block node holding inline content. Carries no payload; its children are
built by the kernel walker and handed to the converter.
"""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import DocNode, new_node
from wysiwym.editor.model import EditorNode, Flow, NodeSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

KIND_PARAGRAPH = "paragraph"

_META = PluginMeta(
    name="paragraph",
    version="1.0.0",
    description="Paragraph block with inline content",
    kinds=[KIND_PARAGRAPH],
)

PARAGRAPH_SPEC = NodeSpec(
    content="inline+",
    group="block",
    children_flow=Flow.INLINE,
    tag="p",
)


def paragraph_to_editor(schema: EditorSchema, node: DocNode, children: list[EditorNode]) -> EditorNode:
    return schema.node(KIND_PARAGRAPH, None, children)


def paragraph_from_editor(node: EditorNode, children: list[DocNode]) -> DocNode:
    return new_node(KIND_PARAGRAPH, None, children)


def paragraph_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_PARAGRAPH, None, import_children(element))


def paragraph_to_markdown(node: DocNode, emit_children) -> str:
    return "".join(emit_children(node.children))


class ParagraphPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_node_spec(KIND_PARAGRAPH, PARAGRAPH_SPEC)
        registry.register_node_to_editor(KIND_PARAGRAPH, paragraph_to_editor)
        registry.register_node_from_editor(KIND_PARAGRAPH, paragraph_from_editor)
        registry.register_markdown_importer("paragraph", paragraph_from_markdown)
        registry.register_markdown_emitter(KIND_PARAGRAPH, paragraph_to_markdown)
