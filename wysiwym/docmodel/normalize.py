"""
Doc Model Normalisation

normalize_node checks a doc-model tree against the NodeSpecs held in a
registry: every child must have the flow its parent's ``children_flow``
asks for, and leaf kinds take no children. A spec may carry a
``coerce_children`` hook that reshapes the children before the check,
usually by gathering loose inline runs with wrap_inlines.

Fragments stay in place; their children are checked against the flow of the
nearest enclosing kind.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from wysiwym.docmodel.node import KIND_DOCUMENT, KIND_FRAGMENT, KIND_TEXT, DocNode, new_node
from wysiwym.editor.model import Flow
from wysiwym.exceptions import AmbiguousKindError, FlowViolationError, UnknownKindError, UnsupportedFlowError

if TYPE_CHECKING:
    from wysiwym.plugins.registry import KindRegistry


def flow_of(registry: KindRegistry, node: DocNode) -> Flow:
    """Where ``node`` may be placed: among inline content or among blocks."""
    if node.kind == KIND_DOCUMENT:
        raise FlowViolationError(KIND_DOCUMENT, "child")
    if node.kind == KIND_TEXT:
        return Flow.INLINE
    is_mark = registry.has_mark_spec(node.kind)
    spec = registry.get_node_spec(node.kind)
    if is_mark and spec is not None:
        raise AmbiguousKindError(node.kind)
    if is_mark:
        return Flow.INLINE
    if spec is None:
        raise UnknownKindError(node.kind)
    return Flow.INLINE if spec.inline else Flow.BLOCK


def children_flow_of(registry: KindRegistry, node: DocNode) -> Flow | None:
    """The flow ``node`` expects of its children; None when it takes none."""
    if node.kind == KIND_DOCUMENT:
        return Flow.BLOCK
    if node.kind == KIND_TEXT:
        return None
    if registry.has_mark_spec(node.kind):
        return Flow.INLINE
    spec = registry.get_node_spec(node.kind)
    if spec is None:
        raise UnknownKindError(node.kind)
    if spec.is_leaf:
        return None
    try:
        return Flow(spec.children_flow)
    except ValueError:
        raise UnsupportedFlowError(node.kind, spec.children_flow) from None


def _spliced(children: list[DocNode]) -> Iterator[DocNode]:
    for child in children:
        if child.kind == KIND_FRAGMENT:
            yield from _spliced(child.children)
        else:
            yield child


def normalize_node(registry: KindRegistry, node: DocNode) -> DocNode:
    """
    Return ``node`` with its whole subtree checked and coerced.

    Raises:
        FlowViolationError:  a child sits where its flow is not allowed.
        UnknownKindError:    a kind in the tree is not registered.
        AmbiguousKindError:  a kind is registered as both node and mark.
    """
    children = [normalize_node(registry, child) for child in node.children]
    if node.kind == KIND_FRAGMENT:
        return new_node(node.kind, node.payload, children)

    spec = registry.get_node_spec(node.kind)
    if spec is not None and spec.coerce_children is not None:
        children = spec.coerce_children(registry, node, children)

    expected = children_flow_of(registry, node)
    for child in _spliced(children):
        if expected is None:
            raise FlowViolationError(child.kind, f"'{node.kind}' child")
        if flow_of(registry, child) is not expected:
            raise FlowViolationError(child.kind, expected.value)

    return new_node(node.kind, node.payload, children)


def wrap_inlines(
    children: list[DocNode],
    is_inline: Callable[[DocNode], bool],
    wrap: Callable[[list[DocNode]], DocNode],
) -> list[DocNode]:
    """Replace every run of consecutive inline children with ``wrap(run)``."""
    out: list[DocNode] = []
    run: list[DocNode] = []
    for child in children:
        if is_inline(child):
            run.append(child)
            continue
        if run:
            out.append(wrap(run))
            run = []
        out.append(child)
    if run:
        out.append(wrap(run))
    return out
