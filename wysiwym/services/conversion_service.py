"""
Conversion Service

The two boundary operations the host integration calls:

    to_editor_tree — initial load: doc-model tree → checked editor tree
    to_doc_tree    — save/export: edited editor tree → doc-model tree

plus JSON helpers for editor trees and an HTML preview.
"""

from __future__ import annotations

import logging
from typing import Any

from wysiwym.docmodel.debug import debug_tree
from wysiwym.docmodel.node import DocNode
from wysiwym.editor.html import render_html
from wysiwym.editor.model import EditorNode, EditorSchemaError
from wysiwym.editor.schema import EditorSchema
from wysiwym.exceptions import ConversionError, StructuralRejectionError
from wysiwym.plugins.registry import KindRegistry
from wysiwym.services.to_doc_service import build_doc_tree
from wysiwym.services.to_editor_service import build_editor_tree
from wysiwym.utils.sanitize import sanitize_preview_html

logger = logging.getLogger(__name__)


def check_editor_tree(schema: EditorSchema, tree: EditorNode) -> None:
    """Run the editing surface's structural check, as a StructuralRejectionError on failure."""
    try:
        schema.check(tree)
    except EditorSchemaError as exc:
        raise StructuralRejectionError(str(exc), kind=exc.type_name) from exc


def to_editor_tree(registry: KindRegistry, schema: EditorSchema, doc: DocNode, check: bool = True) -> EditorNode:
    """
    Convert a doc-model tree into an editor tree ready for the editing surface.

    Args:
        registry: Frozen kind registry.
        schema:   Schema assembled from the same registry.
        doc:      Root ``document`` node.
        check:    Validate the result against the schema before returning it.

    Raises:
        ConversionError: the tree cannot be converted; nothing is returned.
    """
    try:
        tree = build_editor_tree(registry, schema, doc)
        if check:
            check_editor_tree(schema, tree)
    except ConversionError:
        logger.debug("Doc→editor conversion failed for tree:\n%s", debug_tree(doc))
        raise
    return tree


def to_doc_tree(registry: KindRegistry, tree: EditorNode) -> DocNode:
    """
    Convert an edited editor tree back into a doc-model tree.

    Raises:
        ConversionError: a type name has no reverse converter; nothing is returned.
    """
    return build_doc_tree(registry, tree)


def load_editor_tree(schema: EditorSchema, data: dict[str, Any]) -> EditorNode:
    """Parse and check the JSON form of an editor tree."""
    try:
        return schema.node_from_json(data)
    except EditorSchemaError as exc:
        raise StructuralRejectionError(str(exc), kind=exc.type_name) from exc


def dump_editor_tree(tree: EditorNode) -> dict[str, Any]:
    return tree.to_json()


def preview_html(registry: KindRegistry, schema: EditorSchema, doc: DocNode) -> str:
    """Render a doc-model tree as sanitized HTML through its editor tree."""
    tree = to_editor_tree(registry, schema, doc)
    return sanitize_preview_html(render_html(schema, tree))
