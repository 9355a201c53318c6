"""
Text Plugin

``text`` is an intrinsic kind: the doc→editor builder emits text leaves
itself and the schema assembler always contributes the ``text`` node type.
The plugin supplies the reverse converter, turning an editor text leaf back
into a doc-model text node, and the Markdown hooks for plain text.

A Markdown soft line break imports as a ``"\\n"`` text node and is written
back as a newline.
"""

from __future__ import annotations

import re

from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.node import KIND_TEXT, DocNode, new_text
from wysiwym.exceptions import StructuralRejectionError
from wysiwym.plugins.base import KindPlugin, PluginMeta
from wysiwym.plugins.registry import KindRegistry

_META = PluginMeta(
    name="text",
    version="1.0.0",
    description="Reverse conversion of editor text leaves",
    kinds=[KIND_TEXT],
)

# Characters that would start inline markup if written out unescaped
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_\[\]<])")


def text_from_editor(text: str) -> DocNode:
    return new_text(text)


def text_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode | None:
    if not element.content:
        return None
    return new_text(element.content)


def softbreak_from_markdown(element: SyntaxTreeNode, import_children) -> DocNode:
    return new_text("\n")


def text_to_markdown(node: DocNode, emit_children) -> str:
    if not isinstance(node.payload, str):
        raise StructuralRejectionError(f"text payload must be a string, got {type(node.payload).__name__}", kind=KIND_TEXT)
    return _MARKDOWN_SPECIAL.sub(r"\\\1", node.payload)


class TextPlugin(KindPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    def register(self, registry: KindRegistry) -> None:
        registry.register_node_from_editor(KIND_TEXT, text_from_editor)
        registry.register_markdown_importer("text", text_from_markdown)
        registry.register_markdown_importer("softbreak", softbreak_from_markdown)
        registry.register_markdown_emitter(KIND_TEXT, text_to_markdown)
