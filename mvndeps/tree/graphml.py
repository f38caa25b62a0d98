"""GraphML rendering of dependency trees (https://en.wikipedia.org/wiki/GraphML)."""

from xml.sax.saxutils import escape

from ..models import Node
from .visitors import AbstractSerializingVisitor, generate_id

# Schema, root element and two yEd keys for node and edge graphics
GRAPHML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?> '
    '<graphml xmlns="http://graphml.graphdrawing.org/xmlns" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xmlns:y="http://www.yworks.com/xml/graphml" '
    'xsi:schemaLocation="http://graphml.graphdrawing.org/xmlns '
    'http://graphml.graphdrawing.org/xmlns/1.0/graphml.xsd">\n'
    '  <key for="node" id="d0" yfiles.type="nodegraphics"/> \n'
    '  <key for="edge" id="d1" yfiles.type="edgegraphics"/> \n'
    '<graph id="dependencies" edgedefault="directed">\n'
)

GRAPHML_FOOTER = "</graph></graphml>"


class GraphmlDependencyNodeVisitor(AbstractSerializingVisitor):
    """
    Writes a ``<node>`` element on enter and the ``<edge>`` to its parent on
    leave, labelled with the dependency scope when there is one.
    """

    def enter(self, node: Node) -> bool:
        self._index_parents(node)

        if self.get_parent(node) is None:
            self.writer.write(GRAPHML_HEADER)

        self.writer.write(f'<node id="{generate_id(node)}">')
        self.writer.write(
            f'<data key="d0"><y:ShapeNode><y:NodeLabel>{escape(str(node.artifact))}'
            '</y:NodeLabel></y:ShapeNode></data>'
        )
        self.writer.write("</node>\n")
        return True

    def leave(self, node: Node) -> bool:
        parent = self.get_parent(node)
        if parent is None:
            self.writer.write(GRAPHML_FOOTER)
            return True

        self.writer.write(f'<edge source="{generate_id(parent)}" target="{generate_id(node)}">')
        if node.scope is not None:
            self.writer.write(
                f'<data key="d1"><y:PolyLineEdge><y:EdgeLabel>{escape(node.scope)}'
                '</y:EdgeLabel></y:PolyLineEdge></data>'
            )
        self.writer.write("</edge>\n")
        return True
