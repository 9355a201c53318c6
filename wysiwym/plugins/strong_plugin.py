"""Strong Plugin — strong emphasis mark (bold)."""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import DocNode, new_node
from wysiwym.editor.model import EditorMark, MarkSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

KIND_STRONG = "strong"

_META = PluginMeta(
    name="strong",
    version="1.0.0",
    description="Strong emphasis mark (bold)",
    kinds=[KIND_STRONG],
)

STRONG_SPEC = MarkSpec(tag="strong")


def strong_to_editor(schema: EditorSchema, node: DocNode) -> EditorMark:
    return schema.mark(KIND_STRONG)


def strong_from_editor(mark: EditorMark, children: list[DocNode]) -> DocNode:
    return new_node(KIND_STRONG, None, children)


def strong_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_STRONG, None, import_children(element))


def strong_to_markdown(node: DocNode, emit_children) -> str:
    inner = "".join(emit_children(node.children))
    # "***x***" reads back as emph around strong
    delimiter = "__" if inner.startswith("*") or inner.endswith("*") else "**"
    return delimiter + inner + delimiter


class StrongPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_mark_spec(KIND_STRONG, STRONG_SPEC)
        registry.register_mark_to_editor(KIND_STRONG, strong_to_editor)
        registry.register_mark_from_editor(KIND_STRONG, strong_from_editor)
        registry.register_markdown_importer("strong", strong_from_markdown)
        registry.register_markdown_emitter(KIND_STRONG, strong_to_markdown)
