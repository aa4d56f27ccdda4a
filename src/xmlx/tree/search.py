"""Qualified-name search over a node subtree.

Both lookups walk the subtree depth-first in pre-order, testing the starting
node first. A node that matches is returned (or collected) without visiting
its own children, so a same-named element nested inside a match is never
reached. Callers rely on that shadowing; keep it.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from xmlx.tree.node import Node, QName

WILDCARD = "*"


def name_matches(name: "QName", space: str, local: str) -> bool:
    """Check a qualified name against a namespace (``*`` for any) and local name."""
    return (space == WILDCARD or name.space == space) and name.local == local


def select_node(node: "Node", space: str, local: str) -> Optional["Node"]:
    """Return the first matching node in pre-order, or None."""
    pending = [node]
    while pending:
        current = pending.pop()
        if name_matches(current.name, space, local):
            return current
        # Reversed so the first child is popped next
        pending.extend(reversed(current.children))
    return None


def select_nodes(node: "Node", space: str, local: str) -> List["Node"]:
    """Return every matching node in pre-order, never descending past a match."""
    results: List["Node"] = []
    pending = [node]
    while pending:
        current = pending.pop()
        if name_matches(current.name, space, local):
            results.append(current)
            continue
        pending.extend(reversed(current.children))
    return results
