"""
Editing Surface

Public API:
    EditorSchema       — node/mark types, tree construction and structural check
    EditorNode         — node of the editor tree
    EditorMark         — mark applied to an inline node
    NodeSpec, MarkSpec — schema fragments contributed by plugins
    Flow               — children flow declared by a NodeSpec
    EditorSchemaError  — raised when a tree violates the schema
    render_html        — serialize an editor tree to HTML
"""

from .html import render_html
from .model import REQUIRED, EditorMark, EditorNode, EditorSchemaError, Flow, MarkSpec, NodeSpec
from .schema import TEXT_TYPE, EditorSchema

__all__ = [
    "REQUIRED",
    "TEXT_TYPE",
    "EditorMark",
    "EditorNode",
    "EditorSchema",
    "EditorSchemaError",
    "Flow",
    "MarkSpec",
    "NodeSpec",
    "render_html",
]
