"""
Editor Routes

Host integration for the editing surface. No persistence: doc trees come in
and go out as JSON.

GET  /api/v1/editor/schema   → assembled editor schema
GET  /api/v1/editor/kinds    → registered kinds and their converters
POST /api/v1/editor/load     → doc tree → editor tree (initial load)
POST /api/v1/editor/save     → edited editor tree → doc tree (form submission)
POST /api/v1/editor/preview  → doc tree → sanitized HTML
POST /api/v1/editor/markdown/import → Markdown source → doc tree
POST /api/v1/editor/markdown/export → doc tree → Markdown source
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from wysiwym.config import settings
from wysiwym.docmodel.node import DocNode
from wysiwym.editor.schema import EditorSchema
from wysiwym.plugins.registry import KindRegistry
from wysiwym.schemas.editor import KindResponse, MarkdownRequest, MarkdownResponse, PreviewResponse, SchemaResponse
from wysiwym.services.conversion_service import (
    dump_editor_tree,
    load_editor_tree,
    preview_html,
    to_doc_tree,
    to_editor_tree,
)
from wysiwym.services.markdown_service import emit_markdown, parse_markdown

router = APIRouter(tags=["Editor"])
logger = logging.getLogger(__name__)


# ── Dependencies ───────────────────────────────────────────────────────────────


def get_registry(request: Request) -> KindRegistry:
    return request.app.state.registry


def get_schema(request: Request) -> EditorSchema:
    return request.app.state.schema


# ── Routes ─────────────────────────────────────────────────────────────────────


@router.get("/schema", response_model=SchemaResponse)
def get_editor_schema(schema: EditorSchema = Depends(get_schema)) -> dict[str, Any]:
    """Describe the node and mark types the editing surface is built with."""
    return schema.to_json()


@router.get("/kinds", response_model=list[KindResponse])
def list_kinds(registry: KindRegistry = Depends(get_registry)) -> list[dict[str, Any]]:
    """List every registered kind and which of its slots are filled."""
    return registry.describe()


@router.post("/load")
def load_document(
    doc: DocNode,
    registry: KindRegistry = Depends(get_registry),
    schema: EditorSchema = Depends(get_schema),
) -> dict[str, Any]:
    """Convert a doc-model tree into the editor tree for the editing surface."""
    tree = to_editor_tree(registry, schema, doc, check=settings.check_structure)
    logger.info("Loaded document into editor (%d blocks)", tree.child_count)
    return dump_editor_tree(tree)


@router.post("/save", response_model=DocNode)
def save_document(
    data: dict[str, Any] = Body(...),
    registry: KindRegistry = Depends(get_registry),
    schema: EditorSchema = Depends(get_schema),
) -> DocNode:
    """Convert an edited editor tree back into a doc-model tree."""
    tree = load_editor_tree(schema, data)
    doc = to_doc_tree(registry, tree)
    logger.info("Saved editor tree as doc model (%d blocks)", len(doc.children))
    return doc


@router.post("/preview", response_model=PreviewResponse)
def preview_document(
    doc: DocNode,
    registry: KindRegistry = Depends(get_registry),
    schema: EditorSchema = Depends(get_schema),
) -> PreviewResponse:
    """Render a doc-model tree as HTML."""
    return PreviewResponse(html=preview_html(registry, schema, doc))


@router.post("/markdown/import", response_model=DocNode)
def import_markdown(
    body: MarkdownRequest,
    registry: KindRegistry = Depends(get_registry),
) -> DocNode:
    """Parse Markdown into a doc-model tree."""
    doc = parse_markdown(registry, body.markdown)
    logger.info("Imported Markdown as doc model (%d blocks)", len(doc.children))
    return doc


@router.post("/markdown/export", response_model=MarkdownResponse)
def export_markdown(
    doc: DocNode,
    registry: KindRegistry = Depends(get_registry),
) -> MarkdownResponse:
    """Render a doc-model tree as Markdown."""
    return MarkdownResponse(markdown=emit_markdown(registry, doc))
