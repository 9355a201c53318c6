"""
Heading Plugin

Section heading with inline content. The doc-model payload
``{"level": n}`` maps to the editor attribute ``level`` (1-6). Any other
payload is rejected.
"""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import DocNode, new_node
from wysiwym.editor.model import EditorNode, Flow, NodeSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.exceptions import StructuralRejectionError
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

KIND_HEADING = "heading"

MIN_LEVEL = 1
MAX_LEVEL = 6

_META = PluginMeta(
    name="heading",
    version="1.0.0",
    description="Section headings, levels 1 to 6",
    kinds=[KIND_HEADING],
)

HEADING_SPEC = NodeSpec(
    content="inline+",
    group="block",
    attrs={"level": MIN_LEVEL},
    children_flow=Flow.INLINE,
    tag="h{level}",
)


def _level(value, source: str) -> int:
    """The heading level carried by ``value``; anything outside 1-6 is rejected."""
    if isinstance(value, int) and not isinstance(value, bool) and MIN_LEVEL <= value <= MAX_LEVEL:
        return value
    raise StructuralRejectionError(
        f"heading {source} must hold a level between {MIN_LEVEL} and {MAX_LEVEL}, got {value!r}",
        kind=KIND_HEADING,
    )


def _payload_level(payload) -> int:
    if not isinstance(payload, dict) or set(payload) != {"level"}:
        raise StructuralRejectionError(
            f"heading payload must be {{'level': n}}, got {payload!r}",
            kind=KIND_HEADING,
        )
    return _level(payload["level"], "payload")


def heading_to_editor(schema: EditorSchema, node: DocNode, children: list[EditorNode]) -> EditorNode:
    return schema.node(KIND_HEADING, {"level": _payload_level(node.payload)}, children)


def heading_from_editor(node: EditorNode, children: list[DocNode]) -> DocNode:
    return new_node(KIND_HEADING, {"level": _level(node.attrs.get("level", MIN_LEVEL), "attrs")}, children)


def heading_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    # markdown-it tags headings h1 .. h6
    return new_node(KIND_HEADING, {"level": int(element.tag[1:])}, import_children(element))


def heading_to_markdown(node: DocNode, emit_children) -> str:
    return "#" * _payload_level(node.payload) + " " + "".join(emit_children(node.children))


class HeadingPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_node_spec(KIND_HEADING, HEADING_SPEC)
        registry.register_node_to_editor(KIND_HEADING, heading_to_editor)
        registry.register_node_from_editor(KIND_HEADING, heading_from_editor)
        registry.register_markdown_importer("heading", heading_from_markdown)
        registry.register_markdown_emitter(KIND_HEADING, heading_to_markdown)
