"""Indented dump of doc-model trees for logs and error reports."""

from __future__ import annotations

from wysiwym.docmodel.node import KIND_TEXT, DocNode, is_zero_node

_INDENT = "  "


def debug_tree(node: DocNode | None, indent: int = 0) -> str:
    prefix = _INDENT * indent
    if is_zero_node(node):
        return f"{prefix}<nil>\n"

    if node.kind == KIND_TEXT:
        return f"{prefix}TEXT({node.payload!r})\n"

    header = node.kind.upper()
    if node.payload not in (None, {}):
        header += f" {node.payload!r}"
    out = f"{prefix}{header}\n"
    for child in node.children:
        out += debug_tree(child, indent + 1)
    if not node.children:
        out += f"{prefix}{_INDENT}<no children>\n"
    return out
