"""Visitor protocol shared by the dependency tree serializers."""

from typing import Dict, Optional, TextIO

from ..models import Node
from .pruning import build_parent_index


class NodeVisitor:
    """
    Callbacks for ``Node.accept``.

    ``enter`` is called before a node's children and ``leave`` after them.
    Returning False from ``enter`` skips the children; returning False from
    ``leave`` skips the remaining siblings.
    """

    def enter(self, node: Node) -> bool:
        return True

    def leave(self, node: Node) -> bool:
        return True


class AbstractSerializingVisitor(NodeVisitor):
    """
    Base for visitors writing to a text stream.

    Nodes only point downwards, so each serializer builds its own parent
    index from the node the walk started at, the first time it is entered.
    """

    def __init__(self, writer: TextIO):
        self.writer = writer
        self.parents: Dict[Node, Node] = {}

    def _index_parents(self, node: Node) -> None:
        if not self.parents:
            self.parents = build_parent_index(node)

    def get_parent(self, node: Node) -> Optional[Node]:
        return self.parents.get(node)


def generate_id(node: Node) -> str:
    """Return an id for ``node`` that is stable for the duration of one walk."""
    return str(hash(node))
