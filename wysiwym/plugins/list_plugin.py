"""
List Plugin

Responsibilities:
  - schema contribution for bullet_list and list_item
  - doc-model ⇄ editor conversion for both kinds
  - Markdown import and emit for both kinds

A bullet_list holds one or more list_items; a list_item holds a paragraph
followed by any number of blocks (nested lists included). Inline content
placed straight under a list_item is gathered into paragraphs when the tree
is normalised.
"""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import KIND_FRAGMENT, DocNode, new_node
from wysiwym.docmodel.normalize import flow_of, wrap_inlines
from wysiwym.editor.model import EditorNode, Flow, NodeSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.paragraph_plugin import KIND_PARAGRAPH
from wysiwym.plugins.registry import KindRegistry

KIND_BULLET_LIST = "bullet_list"
KIND_LIST_ITEM = "list_item"

LIST_MARKER = "- "

_META = PluginMeta(
    name="list",
    version="1.0.0",
    description="Bullet lists and their items",
    kinds=[KIND_BULLET_LIST, KIND_LIST_ITEM],
)


def coerce_list_item_children(registry: KindRegistry, node: DocNode, children: list[DocNode]) -> list[DocNode]:
    return wrap_inlines(
        children,
        lambda child: child.kind != KIND_FRAGMENT and flow_of(registry, child) is Flow.INLINE,
        lambda run: new_node(KIND_PARAGRAPH, None, run),
    )


BULLET_LIST_SPEC = NodeSpec(
    content="list_item+",
    group="block",
    children_flow=Flow.BLOCK,
    tag="ul",
)

LIST_ITEM_SPEC = NodeSpec(
    content="paragraph block*",
    children_flow=Flow.BLOCK,
    tag="li",
    coerce_children=coerce_list_item_children,
)


def bullet_list_to_editor(schema: EditorSchema, node: DocNode, children: list[EditorNode]) -> EditorNode:
    return schema.node(KIND_BULLET_LIST, None, children)


def list_item_to_editor(schema: EditorSchema, node: DocNode, children: list[EditorNode]) -> EditorNode:
    return schema.node(KIND_LIST_ITEM, None, children)


def bullet_list_from_editor(node: EditorNode, children: list[DocNode]) -> DocNode:
    return new_node(KIND_BULLET_LIST, None, children)


def list_item_from_editor(node: EditorNode, children: list[DocNode]) -> DocNode:
    return new_node(KIND_LIST_ITEM, None, children)


# ── Markdown ──────────────────────────────────────────────────────────────────


def bullet_list_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_BULLET_LIST, None, import_children(element))


def list_item_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_node(KIND_LIST_ITEM, None, import_children(element))


def bullet_list_to_markdown(node: DocNode, emit_children) -> str:
    return "\n".join(emit_children(node.children))


def list_item_to_markdown(node: DocNode, emit_children) -> str:
    lines: list[str] = []
    for index, child in enumerate(node.children):
        # a paragraph right after another block would continue it lazily
        if index and child.kind == KIND_PARAGRAPH:
            lines.append("")
        lines.extend("".join(emit_children([child])).split("\n"))
    if not lines:
        return LIST_MARKER
    indent = " " * len(LIST_MARKER)
    rest = [indent + line if line else line for line in lines[1:]]
    return "\n".join([LIST_MARKER + lines[0], *rest])


class ListPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_node_spec(KIND_BULLET_LIST, BULLET_LIST_SPEC)
        registry.register_node_spec(KIND_LIST_ITEM, LIST_ITEM_SPEC)

        registry.register_node_to_editor(KIND_BULLET_LIST, bullet_list_to_editor)
        registry.register_node_to_editor(KIND_LIST_ITEM, list_item_to_editor)

        registry.register_node_from_editor(KIND_BULLET_LIST, bullet_list_from_editor)
        registry.register_node_from_editor(KIND_LIST_ITEM, list_item_from_editor)

        registry.register_markdown_importer("bullet_list", bullet_list_from_markdown)
        registry.register_markdown_importer("list_item", list_item_from_markdown)
        registry.register_markdown_emitter(KIND_BULLET_LIST, bullet_list_to_markdown)
        registry.register_markdown_emitter(KIND_LIST_ITEM, list_item_to_markdown)
