"""
Doc Model Nodes

DocNode is the editor-independent document tree: every node has a kind, an
opaque payload and an ordered list of children. The JSON form
(``kind``/``payload``/``children``) is the interchange format with any
backend.

Kinds owned by the kernel rather than by a plugin (document, fragment, text)
get their constructors here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

KIND_DOCUMENT = "document"
KIND_FRAGMENT = "fragment"
KIND_TEXT = "text"

INTRINSIC_KINDS: frozenset[str] = frozenset({KIND_DOCUMENT, KIND_FRAGMENT, KIND_TEXT})


class DocNode(BaseModel):
    kind: str = Field(..., title="Kind", description="Identifier of the node or mark kind.")
    payload: Any = Field(None, title="Payload", description="Kind-specific data, opaque to the converters.")
    children: list[DocNode] = Field(default_factory=list, title="Children")

    model_config = {
        "json_schema_extra": {
            "example": {
                "kind": "document",
                "payload": None,
                "children": [
                    {
                        "kind": "paragraph",
                        "payload": None,
                        "children": [{"kind": "text", "payload": "Hello", "children": []}],
                    }
                ],
            }
        }
    }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocNode):
            return NotImplemented
        return self.kind == other.kind and self.payload == other.payload and self.children == other.children

    def walk(self):
        """Yield this node and all its descendants, depth first, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


DocNode.model_rebuild()


# ── Kernel constructors ───────────────────────────────────────────────────────


def new_node(kind: str, payload: Any = None, children: list[DocNode] | None = None) -> DocNode:
    return DocNode(kind=kind, payload=payload, children=list(children or []))


def new_document(children: list[DocNode]) -> DocNode:
    return new_node(KIND_DOCUMENT, None, children)


def new_fragment(children: list[DocNode]) -> DocNode:
    """A transparent grouping node; converters splice its children into the parent."""
    return new_node(KIND_FRAGMENT, None, children)


def new_text(text: str) -> DocNode:
    return new_node(KIND_TEXT, text, [])


def is_zero_node(node: DocNode | None) -> bool:
    """Return True for the empty placeholder node (no kind, payload or children)."""
    if node is None:
        return True
    return node.kind == "" and node.payload is None and not node.children
