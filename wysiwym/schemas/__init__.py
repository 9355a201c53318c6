from .editor import KindResponse, PreviewResponse, SchemaResponse

# Define the public API of this module
__all__ = [
    "KindResponse",
    "PreviewResponse",
    "SchemaResponse",
]
