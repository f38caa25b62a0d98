"""TGF rendering of dependency trees (https://en.wikipedia.org/wiki/Trivial_Graph_Format)."""

from dataclasses import dataclass
from typing import List, Optional, TextIO

from ..models import Node
from .visitors import AbstractSerializingVisitor, generate_id


@dataclass(frozen=True)
class EdgeAppender:
    """A buffered ``from to [label]`` edge line."""

    from_node: Node
    to_node: Node
    label: Optional[str] = None

    def __str__(self) -> str:
        result = f"{generate_id(self.from_node)} {generate_id(self.to_node)}"
        if self.label is not None:
            result += f" {self.label}"
        return result


class TGFDependencyNodeVisitor(AbstractSerializingVisitor):
    """
    Writes node lines as nodes are entered and buffers edges until the root
    is left, then writes the ``#`` separator and every edge.
    """

    def __init__(self, writer: TextIO):
        super().__init__(writer)
        self.edges: List[EdgeAppender] = []

    def enter(self, node: Node) -> bool:
        self._index_parents(node)
        self.writer.write(f"{generate_id(node)} {node.artifact}\n")
        return True

    def leave(self, node: Node) -> bool:
        parent = self.get_parent(node)
        if parent is not None:
            # scope is the edge label
            self.edges.append(EdgeAppender(parent, node, node.scope))
            return True

        self.writer.write("#\n")
        for edge in self.edges:
            self.writer.write(f"{edge}\n")
        return True
