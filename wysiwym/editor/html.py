"""
HTML Serialization

Renders an editor tree to HTML using the ``tag`` each schema fragment
declares. Tags may reference node attributes, e.g. ``"h{level}"``. Nodes
without a tag (the top node) render only their content; marks wrap text runs
in the order they were applied, outermost first.
"""

from __future__ import annotations

from html import escape

from wysiwym.editor.model import EditorNode
from wysiwym.editor.schema import EditorSchema


def render_html(schema: EditorSchema, node: EditorNode) -> str:
    if node.is_text:
        out = escape(node.text)
    else:
        spec = schema.nodes[node.type]
        inner = "".join(render_html(schema, child) for child in node.content)
        if spec.tag is None:
            out = inner
        else:
            tag = spec.tag.format(**node.attrs)
            out = f"<{tag}>" if spec.is_leaf else f"<{tag}>{inner}</{tag}>"

    for mark in reversed(node.marks):
        tag = schema.marks[mark.type].tag
        if tag:
            tag = tag.format(**mark.attrs)
            out = f"<{tag}>{out}</{tag}>"
    return out
