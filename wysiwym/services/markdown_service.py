"""
Markdown Service

Markdown source ⇄ doc-model tree, driven by the hooks plugins register:

    parse_markdown — Markdown → document node
    emit_markdown  — doc-model tree → Markdown

Parsing uses markdown-it-py with the CommonMark preset and walks its
SyntaxTreeNode tree. Each syntax node goes to the importer registered for
its type; a type without an importer becomes a fragment of its imported
children, and one with neither importer nor children is an error. Every
imported node is normalised against its NodeSpec.

Emitting asks the emitter registered for each kind to render its node.
Fragments are spliced into their parent before emitters see them.
"""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from wysiwym.docmodel.debug import debug_tree
from wysiwym.docmodel.node import KIND_DOCUMENT, KIND_FRAGMENT, DocNode, is_zero_node, new_document, new_fragment
from wysiwym.docmodel.normalize import normalize_node
from wysiwym.exceptions import ConversionError, UnknownKindError, UnsupportedMarkdownError
from wysiwym.plugins.registry import KindRegistry

logger = logging.getLogger(__name__)

MARKDOWN_PRESET = "commonmark"

# markdown-it wraps the inline content of a block in a node of this type
INLINE_CONTAINER = "inline"

BLOCK_SEPARATOR = "\n\n"


def create_parser() -> MarkdownIt:
    return MarkdownIt(MARKDOWN_PRESET)


class MarkdownImporter:
    """Builds a doc-model tree from a markdown-it syntax tree."""

    def __init__(self, registry: KindRegistry):
        self.registry = registry

    def import_root(self, root: SyntaxTreeNode) -> DocNode:
        return normalize_node(self.registry, new_document(self.import_children(root)))

    def import_children(self, node: SyntaxTreeNode) -> list[DocNode]:
        out: list[DocNode] = []
        for child in node.children:
            if child.type == INLINE_CONTAINER:
                out.extend(self.import_children(child))
                continue
            imported = self.import_node(child)
            if not is_zero_node(imported):
                out.append(imported)
        return out

    def import_node(self, node: SyntaxTreeNode) -> DocNode | None:
        importer = self.registry.get_markdown_importer(node.type)
        if importer is not None:
            imported = importer(node, self.import_children)
            if is_zero_node(imported):
                return None
            return normalize_node(self.registry, imported)

        children = self.import_children(node)
        if children:
            logger.debug("No Markdown importer for %s, keeping its content as a fragment", node.type)
            return new_fragment(children)
        raise UnsupportedMarkdownError(node.type)


class MarkdownEmitter:
    """Renders a doc-model tree as Markdown through the registered emitters."""

    def __init__(self, registry: KindRegistry):
        self.registry = registry

    def emit(self, node: DocNode) -> str:
        if is_zero_node(node):
            return ""
        if node.kind == KIND_DOCUMENT:
            return emit_document(node, self.emit_children)
        if node.kind == KIND_FRAGMENT:
            return "".join(self.emit_children(node.children))
        emitter = self.registry.get_markdown_emitter(node.kind)
        if emitter is None:
            raise UnknownKindError(node.kind, direction="markdown")
        return emitter(node, self.emit_children)

    def emit_children(self, children: list[DocNode]) -> list[str]:
        out: list[str] = []
        for child in children:
            if child.kind == KIND_FRAGMENT:
                out.extend(self.emit_children(child.children))
            else:
                out.append(self.emit(child))
        return out


def emit_document(node: DocNode, emit_children) -> str:
    parts = [part for part in emit_children(node.children) if part]
    if not parts:
        return ""
    return BLOCK_SEPARATOR.join(parts) + "\n"


def parse_markdown(registry: KindRegistry, source: str) -> DocNode:
    """
    Parse Markdown source into a ``document`` node.

    Raises:
        ConversionError: an element cannot be imported or the imported tree
                         breaks a NodeSpec; nothing is returned.
    """
    root = SyntaxTreeNode(create_parser().parse(source))
    doc = MarkdownImporter(registry).import_root(root)
    logger.debug("Imported Markdown as doc model:\n%s", debug_tree(doc))
    return doc


def emit_markdown(registry: KindRegistry, node: DocNode) -> str:
    """
    Render a doc-model tree as Markdown.

    Raises:
        UnknownKindError: a kind in the tree has no Markdown emitter.
    """
    try:
        return MarkdownEmitter(registry).emit(node)
    except ConversionError:
        logger.debug("Markdown emit failed for tree:\n%s", debug_tree(node))
        raise
