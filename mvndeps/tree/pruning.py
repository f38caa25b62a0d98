"""Pruning of dependency trees down to matching nodes and their ancestors."""

import logging
from typing import Callable, Dict, Iterator, Optional, Set

from ..models import Node

logger = logging.getLogger(__name__)


def build_parent_index(root: Node) -> Dict[Node, Node]:
    """Map every node below ``root`` to its parent with one pre-order walk."""
    parents: Dict[Node, Node] = {}
    for parent in root.stream():
        for child in parent.children:
            parents[child] = parent
    return parents


def ancestors_or_self(parents: Dict[Node, Node], node: Optional[Node]) -> Iterator[Node]:
    """Yield ``node`` and then each of its ancestors up to the root."""
    while node is not None:
        yield node
        node = parents.get(node)


def prune(root: Node, predicate: Optional[Callable[[Node], bool]]) -> Node:
    """
    Reduce a tree to the nodes matching ``predicate`` plus all their ancestors.

    Child order is preserved and the root is always kept, so a predicate that
    matches nothing yields the bare root. Without a predicate the tree is
    returned unchanged.

    Args:
        root: Root of the tree to prune
        predicate: Node predicate, or None for no filtering

    Returns:
        The pruned tree; untouched sub-trees are shared with the input
    """
    if predicate is None:
        return root

    parents = build_parent_index(root)

    keep: Set[Node] = set()
    matches = 0
    for node in root.stream():
        if not predicate(node):
            continue
        matches += 1
        for ancestor in ancestors_or_self(parents, node):
            if ancestor in keep:
                break  # everything above was added by an earlier match
            keep.add(ancestor)

    logger.debug(f"Pruning kept {len(keep)} nodes for {matches} matches")
    return root.filter(keep.__contains__)
