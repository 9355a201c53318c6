"""
Emphasis Plugin

Inline mark: an ``emph`` doc node contributes no editor node of its own, it
marks every text run below it.
"""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import DocNode, new_node
from wysiwym.editor.model import EditorMark, MarkSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

KIND_EMPH = "emph"

_META = PluginMeta(
    name="emph",
    version="1.0.0",
    description="Emphasis mark (italic)",
    kinds=[KIND_EMPH],
)

EMPH_SPEC = MarkSpec(tag="em")


def emph_to_editor(schema: EditorSchema, node: DocNode) -> EditorMark:
    return schema.mark(KIND_EMPH)


def emph_from_editor(mark: EditorMark, children: list[DocNode]) -> DocNode:
    return new_node(KIND_EMPH, None, children)


def emph_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_EMPH, None, import_children(element))


def emph_to_markdown(node: DocNode, emit_children) -> str:
    return "*" + "".join(emit_children(node.children)) + "*"


class EmphPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_mark_spec(KIND_EMPH, EMPH_SPEC)
        registry.register_mark_to_editor(KIND_EMPH, emph_to_editor)
        registry.register_mark_from_editor(KIND_EMPH, emph_from_editor)
        registry.register_markdown_importer("em", emph_from_markdown)
        registry.register_markdown_emitter(KIND_EMPH, emph_to_markdown)
