"""
Doc Model

Public API:
    DocNode       — generic document tree node (kind/payload/children)
    new_document  — root container constructor
    new_fragment  — transparent grouping constructor
    new_text      — text leaf constructor
    new_node      — generic constructor used by plugins
    debug_tree    — indented dump for diagnostics
    normalize_node — check and coerce a tree against registered NodeSpecs
    wrap_inlines  — gather runs of inline children under a wrapper
"""

from .debug import debug_tree
from .node import (
    INTRINSIC_KINDS,
    KIND_DOCUMENT,
    KIND_FRAGMENT,
    KIND_TEXT,
    DocNode,
    is_zero_node,
    new_document,
    new_fragment,
    new_node,
    new_text,
)
from .normalize import normalize_node, wrap_inlines

__all__ = [
    "INTRINSIC_KINDS",
    "KIND_DOCUMENT",
    "KIND_FRAGMENT",
    "KIND_TEXT",
    "DocNode",
    "debug_tree",
    "is_zero_node",
    "new_document",
    "new_fragment",
    "new_node",
    "new_text",
    "normalize_node",
    "wrap_inlines",
]
