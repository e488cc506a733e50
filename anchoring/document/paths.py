"""Indexed sibling paths over any ordered tree.

A path records, for every level below the root, the node kind and the node's
1-based index among siblings of the same kind. Document implementations pass
their own ``parent_of``/``children_of``/``kind_of`` accessors, so the same
path logic serves lxml trees, plain in-memory trees or any other host.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable

from anchoring.selectors import PathStep

ParentFn = Callable[[Hashable], Hashable | None]
ChildrenFn = Callable[[Hashable], Iterable[Hashable]]
KindFn = Callable[[Hashable], str]


def indexed_path(
    node: Hashable,
    root: Hashable,
    parent_of: ParentFn,
    children_of: ChildrenFn,
    kind_of: KindFn,
) -> tuple[PathStep, ...]:
    """Build the path from ``root`` down to ``node``.

    Args:
        node: Target node
        root: Document root (not part of the path)
        parent_of: Returns a node's parent, None above the root
        children_of: Returns a node's children in document order
        kind_of: Returns a node's kind

    Returns:
        Path steps, root-most first

    Raises:
        ValueError: If ``node`` is not below ``root``
    """
    steps: list[PathStep] = []
    current = node

    while current != root:
        parent = parent_of(current)
        if parent is None:
            raise ValueError("node is not part of this document")

        kind = kind_of(current)
        index = 0
        for sibling in children_of(parent):
            if kind_of(sibling) == kind:
                index += 1
            if sibling == current:
                break

        steps.append(PathStep(kind=kind, index=index))
        current = parent

    return tuple(reversed(steps))


def descend(
    root: Hashable,
    path: Iterable[PathStep],
    children_of: ChildrenFn,
    kind_of: KindFn,
) -> Hashable | None:
    """Follow a path down from ``root``.

    Returns:
        The node at the path, or None when a level has too few same-kind children
    """
    node = root
    for step in path:
        seen = 0
        for child in children_of(node):
            if kind_of(child) == step.kind:
                seen += 1
                if seen == step.index:
                    node = child
                    break
        else:
            return None
    return node


def common_ancestor(
    first: Hashable,
    second: Hashable,
    parent_of: ParentFn,
) -> Hashable | None:
    """Deepest node that is an ancestor-or-self of both nodes."""
    ancestors = set()
    current: Hashable | None = first
    while current is not None:
        ancestors.add(current)
        current = parent_of(current)

    current = second
    while current is not None:
        if current in ancestors:
            return current
        current = parent_of(current)
    return None
