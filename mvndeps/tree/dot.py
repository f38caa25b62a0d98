"""DOT rendering of dependency trees (https://en.wikipedia.org/wiki/DOT_language)."""

from ..models import Node
from .visitors import AbstractSerializingVisitor


class DOTDependencyNodeVisitor(AbstractSerializingVisitor):
    """Writes a ``digraph`` with one edge line per parent/child pair."""

    def enter(self, node: Node) -> bool:
        self._index_parents(node)

        if self.get_parent(node) is None:
            self.writer.write(f'digraph "{node.artifact}" {{ \n')

        # All edges of a node are written when the node itself is entered
        for child in node.children:
            self.writer.write(f'\t"{node.artifact}" -> "{child.artifact}" ; \n')

        return True

    def leave(self, node: Node) -> bool:
        if self.get_parent(node) is None:
            self.writer.write(" } ")
        return True
