"""Ownership forest assembly.

Nodes are indexed by uid and linked through a ``parent_of`` map keyed by
uid. Output nodes are copies, so the input list is never mutated and the
same list can be assembled any number of times.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from karmada_console.models.resources import ResourceNode


def _closes_cycle(child_uid: str, parent_uid: str, parent_of: dict[str, str]) -> bool:
    """True if *child_uid* is already an ancestor of *parent_uid*."""
    current: str | None = parent_uid
    while current is not None:
        if current == child_uid:
            return True
        current = parent_of.get(current)
    return False


def build_resource_tree(nodes: Iterable[ResourceNode]) -> list[ResourceNode]:
    """Nest *nodes* under their owners and return the roots.

    - Nodes with an empty uid are dropped.
    - Duplicate uids: the last node wins.
    - The first owner reference that resolves to a known node is used;
      self references and links that would close a cycle are ignored.
    - Roots keep the order in which their uid was first seen.
    """
    index: dict[str, ResourceNode] = {}
    for node in nodes:
        if node.uid:
            index[node.uid] = node.shallow_copy()

    parent_of: dict[str, str] = {}
    for uid, node in index.items():
        for ref in node.owner_references:
            if ref.uid == uid:
                continue
            parent = index.get(ref.uid)
            if parent is None or _closes_cycle(uid, ref.uid, parent_of):
                continue
            parent.children.append(node)
            parent_of[uid] = ref.uid
            break

    return [node for uid, node in index.items() if uid not in parent_of]


def iter_tree(roots: Iterable[ResourceNode]) -> Iterator[ResourceNode]:
    """Yield every node of the forest, depth first, parents before children."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def count_nodes(roots: Iterable[ResourceNode]) -> int:
    return sum(1 for _ in iter_tree(roots))

