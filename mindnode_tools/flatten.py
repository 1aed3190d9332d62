"""Flatten a nested node tree into a single ordered list.

Both converters walk the tree the same way and only differ in what they
record for a node's parent, so the walk takes a projection function. Each
node is projected exactly once; children receive their parent's projected
value instead of recomputing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

from .models import Identifier, RawNode

T = TypeVar("T")


@dataclass(frozen=True)
class FlatEntry(Generic[T]):
    """One node of the flattened tree.

    `value` is the projection of `node`; `parent` is the projection of the
    node's immediate parent and is None for top-level nodes.
    """
    node: RawNode
    value: T
    parent: Optional[T]
    depth: int

    @property
    def is_top_level(self) -> bool:
        return self.depth == 0


def by_identifier(node: RawNode) -> Identifier:
    return node.id


def flatten(nodes: Iterable[RawNode], project: Callable[[RawNode], T]) -> list[FlatEntry[T]]:
    """Walk `nodes` depth-first in pre-order.

    Every node at every depth yields one entry, each node before its
    descendants and a whole subtree before the next sibling. An explicit
    stack is used so arbitrarily deep maps do not hit the recursion limit.
    """
    entries: list[FlatEntry[T]] = []
    stack: list[tuple[RawNode, Optional[T], int]] = [
        (node, None, 0) for node in reversed(list(nodes))
    ]

    while stack:
        node, parent, depth = stack.pop()
        value = project(node)
        entries.append(FlatEntry(node=node, value=value, parent=parent, depth=depth))
        for child in reversed(node.children):
            stack.append((child, value, depth + 1))

    return entries


def flatten_subnodes(nodes: Iterable[RawNode], project: Callable[[RawNode], T]) -> list[FlatEntry[T]]:
    """Like `flatten`, but only the nested entries (depth >= 1)."""
    return [entry for entry in flatten(nodes, project) if not entry.is_top_level]
