"""
Doc→Editor Builder

Walks a doc-model tree and builds the editor tree for it, using the
converters registered for each kind. Two mutually recursive procedures do
the work:

  block   — a node at block position; its NodeSpec's children flow decides
            whether its children are built as blocks or as inline content.
  inline  — a node at inline position, threading the ordered tuple of marks
            contributed by enclosing mark kinds. Text leaves carry every
            active mark; mark kinds emit no node of their own.

``fragment`` nodes are transparent in both positions. Any failure raises a
ConversionError and no partial tree is returned.
"""

from __future__ import annotations

import logging

from wysiwym.docmodel.node import KIND_DOCUMENT, KIND_FRAGMENT, KIND_TEXT, DocNode
from wysiwym.editor.model import EditorMark, EditorNode, EditorSchemaError, Flow
from wysiwym.editor.schema import EditorSchema
from wysiwym.exceptions import (
    AmbiguousKindError,
    EmptyProductionError,
    FlowViolationError,
    MissingConverterOutputError,
    RegistrationInconsistencyError,
    StructuralRejectionError,
    UnknownKindError,
    UnsupportedFlowError,
)
from wysiwym.plugins.registry import KindRegistry

logger = logging.getLogger(__name__)


class EditorTreeBuilder:
    """Builds editor trees for one registry/schema pair. Holds no per-build state."""

    def __init__(self, registry: KindRegistry, schema: EditorSchema):
        self.registry = registry
        self.schema = schema

    def build(self, doc: DocNode) -> EditorNode:
        if doc.kind != KIND_DOCUMENT:
            raise FlowViolationError(doc.kind, "document root")

        blocks: list[EditorNode] = []
        for child in doc.children:
            self._build_block(child, blocks)

        try:
            return self.schema.node(self.schema.top_node, None, blocks)
        except EditorSchemaError as exc:
            raise StructuralRejectionError(str(exc), kind=exc.type_name) from exc

    # ── Block position ────────────────────────────────────────────────────────

    def _build_block(self, node: DocNode, out: list[EditorNode]) -> None:
        if node.kind == KIND_FRAGMENT:
            for child in node.children:
                self._build_block(child, out)
            return

        spec = self.registry.get_node_spec(node.kind)
        if spec is None:
            if node.kind == KIND_TEXT or self.registry.has_mark_spec(node.kind):
                raise FlowViolationError(node.kind, "block")
            raise UnknownKindError(node.kind)
        if self.registry.has_mark_spec(node.kind):
            raise AmbiguousKindError(node.kind)

        to_editor = self.registry.get_node_to_editor(node.kind)
        if to_editor is None:
            raise RegistrationInconsistencyError(node.kind, "node spec registered without a to_editor converter")

        try:
            flow = Flow(spec.children_flow)
        except ValueError:
            raise UnsupportedFlowError(node.kind, spec.children_flow) from None

        children: list[EditorNode] = []
        if flow is Flow.INLINE:
            for child in node.children:
                self._build_inline(child, children, ())
        else:
            for child in node.children:
                self._build_block(child, children)

        if not children:
            raise EmptyProductionError(node.kind)

        out.append(self._convert_node(to_editor, node, children))

    # ── Inline position ───────────────────────────────────────────────────────

    def _build_inline(self, node: DocNode, out: list[EditorNode], marks: tuple[EditorMark, ...]) -> None:
        if node.kind == KIND_TEXT:
            if not isinstance(node.payload, str):
                raise StructuralRejectionError(f"text payload must be a string, got {type(node.payload).__name__}", kind=KIND_TEXT)
            try:
                out.append(self.schema.text(node.payload, marks))
            except EditorSchemaError as exc:
                raise StructuralRejectionError(str(exc), kind=KIND_TEXT) from exc
            return

        if node.kind == KIND_FRAGMENT:
            for child in node.children:
                self._build_inline(child, out, marks)
            return

        mark_spec = self.registry.get_mark_spec(node.kind)
        mark_to_editor = self.registry.get_mark_to_editor(node.kind)
        if (mark_spec is None) != (mark_to_editor is None):
            missing = "mark to_editor converter" if mark_to_editor is None else "mark spec"
            raise RegistrationInconsistencyError(node.kind, f"missing {missing}")

        if mark_spec is not None:
            if self.registry.has_node_spec(node.kind):
                raise AmbiguousKindError(node.kind)
            mark = self._convert_mark(mark_to_editor, node)
            produced = len(out)
            for child in node.children:
                self._build_inline(child, out, marks + (mark,))
            if len(out) == produced:
                raise EmptyProductionError(node.kind)
            return

        to_editor = self.registry.get_node_to_editor(node.kind)
        if to_editor is None:
            if self.registry.has_node_spec(node.kind):
                raise RegistrationInconsistencyError(node.kind, "node spec registered without a to_editor converter")
            raise UnknownKindError(node.kind)

        children: list[EditorNode] = []
        for child in node.children:
            self._build_inline(child, children, marks)
        out.append(self._convert_node(to_editor, node, children))

    # ── Converter calls ───────────────────────────────────────────────────────

    def _convert_node(self, to_editor, node: DocNode, children: list[EditorNode]) -> EditorNode:
        try:
            result = to_editor(self.schema, node, children)
        except EditorSchemaError as exc:
            raise StructuralRejectionError(str(exc), kind=node.kind) from exc
        if result is None:
            raise MissingConverterOutputError(node.kind)
        return result

    def _convert_mark(self, to_editor, node: DocNode) -> EditorMark:
        try:
            mark = to_editor(self.schema, node)
        except EditorSchemaError as exc:
            raise StructuralRejectionError(str(exc), kind=node.kind) from exc
        if mark is None:
            raise MissingConverterOutputError(node.kind)
        return mark


def build_editor_tree(registry: KindRegistry, schema: EditorSchema, doc: DocNode) -> EditorNode:
    """Build the editor tree for ``doc``. Raises ConversionError on any failure."""
    tree = EditorTreeBuilder(registry, schema).build(doc)
    logger.debug("Built editor tree with %d top-level blocks", tree.child_count)
    return tree
