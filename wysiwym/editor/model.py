"""
Editing Surface Model

Value types for the live tree of the editing surface, and the schema
fragments (NodeSpec / MarkSpec) that plugins contribute to describe their
kinds to it.

The JSON form of an editor tree mirrors the usual rich-text editor format:

    {"type": "paragraph", "content": [
        {"type": "text", "text": "world", "marks": [{"type": "emph"}]}
    ]}
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EditorSchemaError(ValueError):
    """Raised by the editing surface when a node or tree violates its schema."""

    def __init__(self, message: str, type_name: str | None = None):
        self.type_name = type_name
        super().__init__(message)


class Flow(str, Enum):
    """How the children of a node kind are laid out."""

    INLINE = "inline"
    BLOCK = "block"


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


# Attribute default marking an attr that has to be supplied explicitly.
REQUIRED: Any = _Required()


@dataclass
class NodeSpec:
    """
    Schema fragment for a node kind.

    Attributes:
        content:       Content expression ("inline+", "list_item+", ...);
                       None for leaf nodes that take no children.
        group:         Space separated groups the node belongs to ("block").
        inline:        True for nodes placed among inline content.
        attrs:         Attribute name -> default value (or REQUIRED).
        children_flow: Flow of the children, read by the doc→editor builder.
        tag:           HTML tag used when serializing to markup.
        coerce_children: Optional (registry, parent, children) -> children hook
                       run by normalize_node before the flow check.
    """

    content: str | None = None
    group: str | None = None
    inline: bool = False
    attrs: dict[str, Any] = field(default_factory=dict)
    children_flow: Any = None
    tag: str | None = None
    coerce_children: Callable[..., list[Any]] | None = None

    @property
    def is_leaf(self) -> bool:
        return self.content is None

    def groups(self) -> list[str]:
        return self.group.split() if self.group else []

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.content is not None:
            data["content"] = self.content
        if self.group:
            data["group"] = self.group
        if self.inline:
            data["inline"] = True
        if self.attrs:
            data["attrs"] = {
                name: ({} if default is REQUIRED else {"default": default}) for name, default in self.attrs.items()
            }
        if self.tag:
            data["tag"] = self.tag
        return data


@dataclass
class MarkSpec:
    """Schema fragment for a mark kind."""

    attrs: dict[str, Any] = field(default_factory=dict)
    tag: str | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.attrs:
            data["attrs"] = {
                name: ({} if default is REQUIRED else {"default": default}) for name, default in self.attrs.items()
            }
        if self.tag:
            data["tag"] = self.tag
        return data


class EditorMark(BaseModel):
    type: str = Field(..., title="Mark Type")
    attrs: dict[str, Any] = Field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditorMark):
            return NotImplemented
        return self.type == other.type and self.attrs == other.attrs


class EditorNode(BaseModel):
    type: str = Field(..., title="Node Type")
    attrs: dict[str, Any] = Field(default_factory=dict)
    content: list[EditorNode] = Field(default_factory=list)
    marks: list[EditorMark] = Field(default_factory=list)
    text: str | None = None

    @property
    def is_text(self) -> bool:
        return self.text is not None

    @property
    def child_count(self) -> int:
        return len(self.content)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)


EditorNode.model_rebuild()
