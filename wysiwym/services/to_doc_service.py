"""
Editor→Doc Builder

Rebuilds a doc-model tree from an edited editor tree. Every editor node is
converted by the reverse converter registered for its type name, children
before parent. Text leaves go through the ``text`` reverse converter, which
receives the raw text.

Marks do not appear as nodes in the editor tree; they sit on inline nodes as
an ordered list, outermost first. Each mark is turned back into a wrapping
doc node by its kind's reverse converter, innermost mark first, so that the
first-applied mark ends up outermost again. Consecutive siblings sharing the
same outer mark are wrapped together.
"""

from __future__ import annotations

import logging

from wysiwym.docmodel.node import KIND_DOCUMENT, KIND_TEXT, DocNode, new_document
from wysiwym.editor.model import EditorMark, EditorNode
from wysiwym.exceptions import FlowViolationError, MissingConverterOutputError, UnknownKindError
from wysiwym.plugins.registry import KindRegistry

logger = logging.getLogger(__name__)

_Run = tuple[DocNode, list[EditorMark]]


class DocTreeBuilder:
    """Builds doc-model trees from editor trees using a registry's reverse converters."""

    def __init__(self, registry: KindRegistry):
        self.registry = registry

    def build(self, tree: EditorNode) -> DocNode:
        if tree.type != KIND_DOCUMENT:
            raise FlowViolationError(tree.type, "document root")
        return new_document(self._convert_children(tree.content))

    def _convert_children(self, nodes: list[EditorNode]) -> list[DocNode]:
        runs = [(self._convert_node(node), node.marks) for node in nodes]
        return self._wrap_runs(runs, 0)

    def _convert_node(self, node: EditorNode) -> DocNode:
        if node.type == KIND_TEXT:
            from_editor = self.registry.get_node_from_editor(KIND_TEXT)
            if from_editor is None:
                raise UnknownKindError(KIND_TEXT, direction="from_editor")
            result = from_editor(node.text or "")
        else:
            from_editor = self.registry.get_node_from_editor(node.type)
            if from_editor is None:
                raise UnknownKindError(node.type, direction="from_editor")
            result = from_editor(node, self._convert_children(node.content))

        if result is None:
            raise MissingConverterOutputError(node.type)
        return result

    def _wrap_runs(self, runs: list[_Run], depth: int) -> list[DocNode]:
        out: list[DocNode] = []
        i = 0
        while i < len(runs):
            doc, marks = runs[i]
            if len(marks) <= depth:
                out.append(doc)
                i += 1
                continue

            mark = marks[depth]
            j = i + 1
            while j < len(runs) and len(runs[j][1]) > depth and runs[j][1][depth] == mark:
                j += 1
            out.append(self._convert_mark(mark, self._wrap_runs(runs[i:j], depth + 1)))
            i = j
        return out

    def _convert_mark(self, mark: EditorMark, children: list[DocNode]) -> DocNode:
        from_editor = self.registry.get_mark_from_editor(mark.type)
        if from_editor is None:
            raise UnknownKindError(mark.type, direction="from_editor")
        result = from_editor(mark, children)
        if result is None:
            raise MissingConverterOutputError(mark.type)
        return result


def build_doc_tree(registry: KindRegistry, tree: EditorNode) -> DocNode:
    """Build the doc-model tree for an editor tree. Raises ConversionError on any failure."""
    doc = DocTreeBuilder(registry).build(tree)
    logger.debug("Built doc tree with %d top-level blocks", len(doc.children))
    return doc
