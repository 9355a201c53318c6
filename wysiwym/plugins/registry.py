"""
Kind Registry

KindRegistry maps a kind identifier to its schema fragment, to the
converters for both directions and, optionally, to its Markdown emitter.
Markdown importers are keyed by markdown-it syntax node type instead.
Plugins fill it once at start-up; after ``freeze()`` it is read-only and may
be shared by any number of conversions.

Node and mark kinds live in separate tables. Lookups return None for unknown
kinds and leave it to the caller to decide whether absence is fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from wysiwym.exceptions import AmbiguousKindError, RegistrationInconsistencyError, RegistryFrozenError

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from wysiwym.docmodel.node import DocNode
    from wysiwym.editor.model import EditorMark, EditorNode, MarkSpec, NodeSpec
    from wysiwym.editor.schema import EditorSchema

logger = logging.getLogger(__name__)

# (schema, doc node, built editor children) -> editor node
NodeToEditor = Callable[["EditorSchema", "DocNode", "list[EditorNode]"], "EditorNode | None"]
# (schema, doc node) -> mark instance
MarkToEditor = Callable[["EditorSchema", "DocNode"], "EditorMark | None"]
# (editor node, converted doc children) -> doc node; text leaves get (text,)
NodeFromEditor = Callable[..., "DocNode"]
# (editor mark, wrapped doc children) -> doc node
MarkFromEditor = Callable[["EditorMark", "list[DocNode]"], "DocNode"]
# (markdown-it syntax node, import_children) -> doc node; None drops the element
MarkdownImporter = Callable[["SyntaxTreeNode", "Callable[[SyntaxTreeNode], list[DocNode]]"], "DocNode | None"]
# (doc node, emit_children) -> Markdown source for the node
MarkdownEmitter = Callable[["DocNode", "Callable[[list[DocNode]], list[str]]"], str]


class KindRegistry:
    """
    Registry of node and mark kinds.

    Each (kind, direction) slot may be written more than once; the last write
    wins and the overwrite is logged.
    """

    def __init__(self) -> None:
        self._node_specs: dict[str, NodeSpec] = {}
        self._node_to_editor: dict[str, NodeToEditor] = {}
        self._node_from_editor: dict[str, NodeFromEditor] = {}

        self._mark_specs: dict[str, MarkSpec] = {}
        self._mark_to_editor: dict[str, MarkToEditor] = {}
        self._mark_from_editor: dict[str, MarkFromEditor] = {}

        self._md_importers: dict[str, MarkdownImporter] = {}
        self._md_emitters: dict[str, MarkdownEmitter] = {}

        self._frozen = False

    # ── Registration ──────────────────────────────────────────────────────────

    def register_node_spec(self, kind: str, spec: NodeSpec) -> None:
        self._set(self._node_specs, "node spec", kind, spec)

    def register_node_to_editor(self, kind: str, fn: NodeToEditor) -> None:
        self._set(self._node_to_editor, "node to_editor", kind, fn)

    def register_node_from_editor(self, type_name: str, fn: NodeFromEditor) -> None:
        """Register the reverse converter for an editor node type name."""
        self._set(self._node_from_editor, "node from_editor", type_name, fn)

    def register_mark_spec(self, kind: str, spec: MarkSpec) -> None:
        self._set(self._mark_specs, "mark spec", kind, spec)

    def register_mark_to_editor(self, kind: str, fn: MarkToEditor) -> None:
        self._set(self._mark_to_editor, "mark to_editor", kind, fn)

    def register_mark_from_editor(self, type_name: str, fn: MarkFromEditor) -> None:
        self._set(self._mark_from_editor, "mark from_editor", type_name, fn)

    def register_markdown_importer(self, element: str, fn: MarkdownImporter) -> None:
        """Register the importer for a markdown-it syntax node type ("em", "bullet_list", ...)."""
        self._set(self._md_importers, "markdown importer", element, fn)

    def register_markdown_emitter(self, kind: str, fn: MarkdownEmitter) -> None:
        self._set(self._md_emitters, "markdown emitter", kind, fn)

    def _set(self, table: dict[str, Any], slot: str, kind: str, value: Any) -> None:
        if self._frozen:
            raise RegistryFrozenError(kind)
        if kind in table:
            logger.warning("Overwriting %s for kind %s", slot, kind)
        table[kind] = value
        logger.debug("Registered %s for kind %s", slot, kind)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get_node_spec(self, kind: str) -> NodeSpec | None:
        return self._node_specs.get(kind)

    def get_node_to_editor(self, kind: str) -> NodeToEditor | None:
        return self._node_to_editor.get(kind)

    def get_node_from_editor(self, type_name: str) -> NodeFromEditor | None:
        return self._node_from_editor.get(type_name)

    def get_mark_spec(self, kind: str) -> MarkSpec | None:
        return self._mark_specs.get(kind)

    def get_mark_to_editor(self, kind: str) -> MarkToEditor | None:
        return self._mark_to_editor.get(kind)

    def get_mark_from_editor(self, type_name: str) -> MarkFromEditor | None:
        return self._mark_from_editor.get(type_name)

    def get_markdown_importer(self, element: str) -> MarkdownImporter | None:
        return self._md_importers.get(element)

    def get_markdown_emitter(self, kind: str) -> MarkdownEmitter | None:
        return self._md_emitters.get(kind)

    def has_node_spec(self, kind: str) -> bool:
        return kind in self._node_specs

    def has_mark_spec(self, kind: str) -> bool:
        return kind in self._mark_specs

    def has_mark_to_editor(self, kind: str) -> bool:
        return kind in self._mark_to_editor

    def node_kinds(self) -> list[str]:
        """Kinds with a node schema fragment, sorted by name."""
        return sorted(self._node_specs)

    def mark_kinds(self) -> list[str]:
        """Kinds with a mark schema fragment, sorted by name."""
        return sorted(self._mark_specs)

    def describe(self) -> list[dict[str, Any]]:
        """One entry per known kind, listing which slots are filled."""
        kinds = (
            set(self._node_specs)
            | set(self._node_to_editor)
            | set(self._node_from_editor)
            | set(self._mark_specs)
            | set(self._mark_to_editor)
            | set(self._mark_from_editor)
        )
        entries = []
        for kind in sorted(kinds):
            is_mark = kind in self._mark_specs or kind in self._mark_to_editor or kind in self._mark_from_editor
            entries.append(
                {
                    "kind": kind,
                    "category": "mark" if is_mark else "node",
                    "has_spec": kind in (self._mark_specs if is_mark else self._node_specs),
                    "to_editor": kind in (self._mark_to_editor if is_mark else self._node_to_editor),
                    "from_editor": kind in (self._mark_from_editor if is_mark else self._node_from_editor),
                    "markdown": kind in self._md_emitters,
                }
            )
        return entries

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True
        logger.info(
            "Kind registry frozen: %d node kinds, %d mark kinds",
            len(self._node_specs),
            len(self._mark_specs),
        )

    def validate(self) -> None:
        """
        Check the pairing invariants for every registered kind.

        - a mark kind has a fragment, a to_editor and a from_editor, or none of them
        - a node kind with a fragment has a to_editor and vice versa
        - no kind is registered both as a node and as a mark

        Raises:
            RegistrationInconsistencyError, AmbiguousKindError
        """
        mark_kinds = set(self._mark_specs) | set(self._mark_to_editor) | set(self._mark_from_editor)
        for kind in sorted(mark_kinds):
            slots = {
                "mark spec": kind in self._mark_specs,
                "mark to_editor": kind in self._mark_to_editor,
                "mark from_editor": kind in self._mark_from_editor,
            }
            if not all(slots.values()):
                missing = ", ".join(name for name, present in slots.items() if not present)
                raise RegistrationInconsistencyError(kind, f"missing {missing}")
            if kind in self._node_specs or kind in self._node_to_editor:
                raise AmbiguousKindError(kind)

        for kind in sorted(set(self._node_specs) | set(self._node_to_editor)):
            if kind not in self._node_specs:
                raise RegistrationInconsistencyError(kind, "node to_editor registered without a node spec")
            if kind not in self._node_to_editor:
                raise RegistrationInconsistencyError(kind, "node spec registered without a to_editor converter")


# ── Global instance ───────────────────────────────────────────────────────────
# Filled by wysiwym.plugins.loader during application start-up. Library code
# takes a registry argument instead of reaching for this instance.
kind_registry = KindRegistry()
