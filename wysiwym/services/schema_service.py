"""
Schema Assembler

Merges the intrinsic structural kinds (``document`` and ``text``) with every
node and mark fragment in a KindRegistry into one EditorSchema.
"""

from __future__ import annotations

import logging

from wysiwym.docmodel.node import INTRINSIC_KINDS, KIND_DOCUMENT, KIND_TEXT
from wysiwym.editor.model import EditorSchemaError, NodeSpec
from wysiwym.editor.schema import EditorSchema
from wysiwym.exceptions import RegistrationConflictError, RegistryError
from wysiwym.plugins.registry import KindRegistry

logger = logging.getLogger(__name__)

DOCUMENT_SPEC = NodeSpec(content="block+")
TEXT_SPEC = NodeSpec(group="inline", inline=True)


def build_schema(registry: KindRegistry) -> EditorSchema:
    """
    Assemble the editor schema for the current registry state.

    Kinds are merged in name order, so repeated calls on an unchanged registry
    produce equal schemas.

    Raises:
        RegistrationConflictError: a plugin fragment reuses an intrinsic kind name.
        RegistryError: the merged fragments do not form a valid schema.
    """
    nodes: dict[str, NodeSpec] = {KIND_DOCUMENT: DOCUMENT_SPEC, KIND_TEXT: TEXT_SPEC}
    for kind in registry.node_kinds():
        if kind in INTRINSIC_KINDS:
            raise RegistrationConflictError(kind)
        nodes[kind] = registry.get_node_spec(kind)

    marks = {}
    for kind in registry.mark_kinds():
        if kind in INTRINSIC_KINDS:
            raise RegistrationConflictError(kind)
        marks[kind] = registry.get_mark_spec(kind)

    try:
        schema = EditorSchema(nodes, marks, top_node=KIND_DOCUMENT)
    except EditorSchemaError as exc:
        raise RegistryError(f"Invalid schema fragment: {exc}", kind=exc.type_name) from exc

    logger.debug("Schema assembled: %d node types, %d mark types", len(nodes), len(marks))
    return schema
