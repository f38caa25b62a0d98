"""Indented text rendering of dependency trees."""

from dataclasses import dataclass
from typing import List, TextIO

from ..models import Node
from .visitors import AbstractSerializingVisitor


@dataclass(frozen=True)
class GraphTokens:
    """The four strings used to draw the tree."""

    node_indent: str
    last_node_indent: str
    fill_indent: str
    last_fill_indent: str

    def get_node_indent(self, last: bool) -> str:
        return self.last_node_indent if last else self.node_indent

    def get_fill_indent(self, last: bool) -> str:
        return self.last_fill_indent if last else self.fill_indent


WHITESPACE_TOKENS = GraphTokens("   ", "   ", "   ", "   ")

STANDARD_TOKENS = GraphTokens("+- ", "\\- ", "|  ", "   ")

EXTENDED_TOKENS = GraphTokens("├─ ", "└─ ", "│  ", "   ")


class SerializingDependencyNodeVisitor(AbstractSerializingVisitor):
    """
    Writes one line per node, indented with graph tokens:

        org.example:app:jar:1.0
        +- org.example:lib:jar:1.0:compile
        |  \\- org.example:util:jar:1.0:compile
        \\- junit:junit:jar:4.13:test
    """

    def __init__(self, writer: TextIO, tokens: GraphTokens = WHITESPACE_TOKENS):
        super().__init__(writer)
        self.tokens = tokens
        # Whether each node on the current path is the last child of its parent, root first
        self.last_flags: List[bool] = []

    def enter(self, node: Node) -> bool:
        self._index_parents(node)
        last = self._is_last(node)
        self._indent(last)
        self.writer.write(node.as_string())
        self.writer.write("\n")
        self.last_flags.append(last)
        return True

    def leave(self, node: Node) -> bool:
        self.last_flags.pop()
        return True

    def _indent(self, last: bool) -> None:
        for ancestor_last in self.last_flags[1:]:
            self.writer.write(self.tokens.get_fill_indent(ancestor_last))

        if self.last_flags:
            self.writer.write(self.tokens.get_node_indent(last))

    def _is_last(self, node: Node) -> bool:
        parent = self.get_parent(node)
        if parent is None:
            return True
        return parent.children[-1] is node
