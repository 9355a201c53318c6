"""
Editor Schema

EditorSchema is the editing surface's view of the assembled node and mark
fragments. It constructs editor nodes (filling attribute defaults), loads
editor trees from JSON, and checks a tree's structural well-formedness.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from wysiwym.editor.content import ContentExpr
from wysiwym.editor.model import REQUIRED, EditorMark, EditorNode, EditorSchemaError, MarkSpec, NodeSpec

logger = logging.getLogger(__name__)

TEXT_TYPE = "text"


class EditorSchema:
    """Node and mark types known to the editing surface."""

    def __init__(self, nodes: dict[str, NodeSpec], marks: dict[str, MarkSpec], top_node: str = "document"):
        if top_node not in nodes:
            raise EditorSchemaError(f"Schema is missing its top node '{top_node}'", top_node)
        if TEXT_TYPE not in nodes:
            raise EditorSchemaError("Schema is missing the 'text' node type", TEXT_TYPE)

        self.nodes: dict[str, NodeSpec] = dict(nodes)
        self.marks: dict[str, MarkSpec] = dict(marks)
        self.top_node = top_node

        self._content: dict[str, ContentExpr | None] = {}
        self._groups: dict[str, set[str]] = {}
        for name, spec in self.nodes.items():
            self._content[name] = ContentExpr(spec.content) if spec.content is not None else None
            for group in spec.groups():
                self._groups.setdefault(group, set()).add(name)

        for name, expr in self._content.items():
            if expr is None:
                continue
            for ref in expr.names():
                if ref not in self.nodes and ref not in self._groups:
                    raise EditorSchemaError(f"Content expression of '{name}' references unknown type '{ref}'", name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditorSchema):
            return NotImplemented
        return self.top_node == other.top_node and self.nodes == other.nodes and self.marks == other.marks

    def __repr__(self) -> str:
        return f"EditorSchema(nodes={sorted(self.nodes)}, marks={sorted(self.marks)})"

    # ── Construction ──────────────────────────────────────────────────────────

    def resolve(self, name: str) -> set[str]:
        """Node type names matched by a content-expression name."""
        matched = set(self._groups.get(name, set()))
        if name in self.nodes:
            matched.add(name)
        return matched

    def node(
        self,
        type_name: str,
        attrs: dict[str, Any] | None = None,
        content: list[EditorNode] | None = None,
        marks: list[EditorMark] | None = None,
    ) -> EditorNode:
        spec = self._node_spec(type_name)
        if type_name == TEXT_TYPE:
            raise EditorSchemaError("Use EditorSchema.text() to create text nodes", type_name)
        return EditorNode(
            type=type_name,
            attrs=self._compute_attrs(type_name, spec.attrs, attrs),
            content=list(content or []),
            marks=list(marks or []),
        )

    def text(self, text: str, marks: list[EditorMark] | tuple[EditorMark, ...] | None = None) -> EditorNode:
        if not text:
            raise EditorSchemaError("Empty text nodes are not allowed", TEXT_TYPE)
        return EditorNode(type=TEXT_TYPE, text=text, marks=list(marks or []))

    def mark(self, type_name: str, attrs: dict[str, Any] | None = None) -> EditorMark:
        spec = self.marks.get(type_name)
        if spec is None:
            raise EditorSchemaError(f"Unknown mark type '{type_name}'", type_name)
        return EditorMark(type=type_name, attrs=self._compute_attrs(type_name, spec.attrs, attrs))

    def node_from_json(self, data: dict[str, Any]) -> EditorNode:
        """Load an editor tree from its JSON form and check it against the schema."""
        try:
            node = EditorNode.model_validate(data)
        except PydanticValidationError as exc:
            raise EditorSchemaError(f"Malformed editor tree: {exc.error_count()} validation error(s)") from exc
        self.check(node)
        return node

    # ── Structural check ──────────────────────────────────────────────────────

    def check(self, node: EditorNode) -> None:
        """Raise EditorSchemaError if the tree rooted at ``node`` is not well-formed."""
        spec = self._node_spec(node.type)

        if node.type == TEXT_TYPE:
            if not node.text:
                raise EditorSchemaError("Empty text nodes are not allowed", TEXT_TYPE)
            if node.content:
                raise EditorSchemaError("Text nodes cannot have content", TEXT_TYPE)
        elif node.text is not None:
            raise EditorSchemaError(f"Only text nodes carry text, got text on '{node.type}'", node.type)

        for name in node.attrs:
            if name not in spec.attrs:
                raise EditorSchemaError(f"Unsupported attribute '{name}' on '{node.type}'", node.type)
        self._compute_attrs(node.type, spec.attrs, node.attrs)

        if node.marks:
            if not spec.inline:
                raise EditorSchemaError(f"Marks are only allowed on inline nodes, not on '{node.type}'", node.type)
            seen = set()
            for mark in node.marks:
                mark_spec = self.marks.get(mark.type)
                if mark_spec is None:
                    raise EditorSchemaError(f"Unknown mark type '{mark.type}'", mark.type)
                if mark.type in seen:
                    raise EditorSchemaError(f"Mark '{mark.type}' applied twice on '{node.type}'", mark.type)
                seen.add(mark.type)

        expr = self._content[node.type]
        if expr is None:
            if node.content:
                raise EditorSchemaError(f"Leaf node '{node.type}' cannot have content", node.type)
        elif not expr.matches([child.type for child in node.content], self.resolve):
            children = ", ".join(child.type for child in node.content) or "nothing"
            raise EditorSchemaError(
                f"Invalid content for '{node.type}': expected {expr.text!r}, got {children}", node.type
            )

        for child in node.content:
            self.check(child)

    # ── Description ───────────────────────────────────────────────────────────

    def to_json(self) -> dict[str, Any]:
        return {
            "top_node": self.top_node,
            "nodes": {name: self.nodes[name].to_json() for name in sorted(self.nodes)},
            "marks": {name: self.marks[name].to_json() for name in sorted(self.marks)},
        }

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _node_spec(self, type_name: str) -> NodeSpec:
        spec = self.nodes.get(type_name)
        if spec is None:
            raise EditorSchemaError(f"Unknown node type '{type_name}'", type_name)
        return spec

    @staticmethod
    def _compute_attrs(type_name: str, defaults: dict[str, Any], given: dict[str, Any] | None) -> dict[str, Any]:
        given = given or {}
        for name in given:
            if name not in defaults:
                raise EditorSchemaError(f"Unsupported attribute '{name}' on '{type_name}'", type_name)
        attrs = {}
        for name, default in defaults.items():
            if name in given:
                attrs[name] = given[name]
            elif default is REQUIRED:
                raise EditorSchemaError(f"No value supplied for attribute '{name}' on '{type_name}'", type_name)
            else:
                attrs[name] = default
        return attrs
