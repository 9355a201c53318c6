from typing import Any

from pydantic import BaseModel, Field


class KindResponse(BaseModel):
    kind: str = Field(..., title="Kind", description="Registered kind identifier.")
    category: str = Field(..., title="Category", description="Either 'node' or 'mark'.")
    has_spec: bool = Field(..., title="Has Schema Fragment")
    to_editor: bool = Field(..., title="Has Doc→Editor Converter")
    from_editor: bool = Field(..., title="Has Editor→Doc Converter")
    markdown: bool = Field(False, title="Has Markdown Emitter")


class SchemaResponse(BaseModel):
    top_node: str = Field(..., title="Top Node", description="Type name of the editor tree root.")
    nodes: dict[str, dict[str, Any]] = Field(..., title="Node Types")
    marks: dict[str, dict[str, Any]] = Field(..., title="Mark Types")

    class Config:
        json_schema_extra = {
            "example": {
                "top_node": "document",
                "nodes": {
                    "document": {"content": "block+"},
                    "paragraph": {"content": "inline+", "group": "block", "tag": "p"},
                    "text": {"group": "inline", "inline": True},
                },
                "marks": {"emph": {"tag": "em"}},
            }
        }


class PreviewResponse(BaseModel):
    html: str = Field(..., title="HTML", description="Sanitized HTML rendering of the document.")


class MarkdownRequest(BaseModel):
    markdown: str = Field(..., title="Markdown", description="CommonMark source to import.")

    class Config:
        json_schema_extra = {"example": {"markdown": "Hello *world*\n\n- one\n- two\n"}}


class MarkdownResponse(BaseModel):
    markdown: str = Field(..., title="Markdown", description="Markdown rendering of the document.")
