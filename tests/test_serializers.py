"""Tests for the text, DOT, GraphML and TGF tree serializers."""

import io

import pytest

from mvndeps.models import Artifact, Node
from mvndeps.tree import (
    EXTENDED_TOKENS,
    STANDARD_TOKENS,
    DOTDependencyNodeVisitor,
    GraphmlDependencyNodeVisitor,
    SerializingDependencyNodeVisitor,
    TGFDependencyNodeVisitor,
    get_serializing_visitor,
    serialize_dependency_tree,
    to_graph_tokens,
)
from mvndeps.tree.graphml import GRAPHML_FOOTER, GRAPHML_HEADER
from mvndeps.tree.visitors import generate_id


@pytest.fixture
def tree():
    """a -> b -> c, a -> d"""
    c = Node(Artifact("g", "c", "1.0"), scope="runtime")
    b = Node(Artifact("g", "b", "1.0"), scope="compile", children=[c])
    d = Node(Artifact("g", "d", "1.0"), scope="test")
    return Node(Artifact("g", "a", "1.0"), children=[b, d])


def render(root, visitor_class, *args):
    writer = io.StringIO()
    root.accept(visitor_class(writer, *args))
    return writer.getvalue()


class TestTextSerializer:
    """Tests for SerializingDependencyNodeVisitor."""

    def test_standard_tokens(self, tree):
        """Test rendering with the standard tokens."""
        assert render(tree, SerializingDependencyNodeVisitor, STANDARD_TOKENS) == (
            "g:a:jar:1.0\n"
            "+- g:b:jar:1.0:compile\n"
            "|  \\- g:c:jar:1.0:runtime\n"
            "\\- g:d:jar:1.0:test\n"
        )

    def test_extended_tokens(self, tree):
        """Test rendering with the extended tokens."""
        assert render(tree, SerializingDependencyNodeVisitor, EXTENDED_TOKENS) == (
            "g:a:jar:1.0\n"
            "├─ g:b:jar:1.0:compile\n"
            "│  └─ g:c:jar:1.0:runtime\n"
            "└─ g:d:jar:1.0:test\n"
        )

    def test_whitespace_tokens_by_default(self, tree):
        """Test that whitespace tokens are the default."""
        assert render(tree, SerializingDependencyNodeVisitor) == (
            "g:a:jar:1.0\n"
            "   g:b:jar:1.0:compile\n"
            "      g:c:jar:1.0:runtime\n"
            "   g:d:jar:1.0:test\n"
        )

    def test_line_structure(self, tree):
        """Test that every node gets one line with the right connector."""
        lines = [line for line in render(tree, SerializingDependencyNodeVisitor, STANDARD_TOKENS).split("\n") if line]
        assert len(lines) == 4
        assert lines[1].startswith(STANDARD_TOKENS.node_indent)
        assert lines[3].startswith(STANDARD_TOKENS.last_node_indent)

    def test_last_child_fill_is_blank(self):
        """Test that the fill below a last child is blank."""
        grandchild = Node(Artifact("g", "c", "1.0"), scope="compile")
        child = Node(Artifact("g", "b", "1.0"), scope="compile", children=[grandchild])
        root = Node(Artifact("g", "a", "1.0"), children=[child])
        assert render(root, SerializingDependencyNodeVisitor, STANDARD_TOKENS) == (
            "g:a:jar:1.0\n"
            "\\- g:b:jar:1.0:compile\n"
            "   \\- g:c:jar:1.0:compile\n"
        )

    def test_optional_marker(self):
        """Test that optional dependencies are marked."""
        root = Node(Artifact("g", "a", "1.0"), children=[Node(Artifact("g", "b", "1.0"), scope="compile", optional=True)])
        assert "\\- g:b:jar:1.0:compile (optional)\n" in render(root, SerializingDependencyNodeVisitor, STANDARD_TOKENS)


class TestDotSerializer:
    """Tests for DOTDependencyNodeVisitor."""

    def test_output(self, tree):
        """Test the DOT digraph."""
        assert render(tree, DOTDependencyNodeVisitor) == (
            'digraph "g:a:jar:1.0" { \n'
            '\t"g:a:jar:1.0" -> "g:b:jar:1.0" ; \n'
            '\t"g:a:jar:1.0" -> "g:d:jar:1.0" ; \n'
            '\t"g:b:jar:1.0" -> "g:c:jar:1.0" ; \n'
            ' } '
        )


class TestGraphmlSerializer:
    """Tests for GraphmlDependencyNodeVisitor."""

    def test_document_shape(self, tree):
        """Test the GraphML header, footer and element counts."""
        output = render(tree, GraphmlDependencyNodeVisitor)
        assert output.startswith(GRAPHML_HEADER)
        assert output.endswith(GRAPHML_FOOTER)
        assert output.count("<node id=") == 4
        assert output.count("<edge source=") == 3

    def test_edge_carries_scope_label(self, tree):
        """Test that edges are labelled with the child's scope."""
        output = render(tree, GraphmlDependencyNodeVisitor)
        b = tree.children[0]
        assert (
            f'<edge source="{generate_id(tree)}" target="{generate_id(b)}">'
            '<data key="d1"><y:PolyLineEdge><y:EdgeLabel>compile</y:EdgeLabel></y:PolyLineEdge></data></edge>\n'
        ) in output

    def test_node_label(self, tree):
        """Test the node label of the root."""
        output = render(tree, GraphmlDependencyNodeVisitor)
        assert (
            f'<node id="{generate_id(tree)}"><data key="d0"><y:ShapeNode>'
            '<y:NodeLabel>g:a:jar:1.0</y:NodeLabel></y:ShapeNode></data></node>\n'
        ) in output


class TestTgfSerializer:
    """Tests for TGFDependencyNodeVisitor."""

    def test_nodes_then_separator_then_edges(self, tree):
        """Test the TGF node list, separator and edge list."""
        b, d = tree.children
        c = b.children[0]
        assert render(tree, TGFDependencyNodeVisitor) == (
            f"{generate_id(tree)} g:a:jar:1.0\n"
            f"{generate_id(b)} g:b:jar:1.0\n"
            f"{generate_id(c)} g:c:jar:1.0\n"
            f"{generate_id(d)} g:d:jar:1.0\n"
            "#\n"
            f"{generate_id(b)} {generate_id(c)} runtime\n"
            f"{generate_id(tree)} {generate_id(b)} compile\n"
            f"{generate_id(tree)} {generate_id(d)} test\n"
        )

    def test_edges_reference_emitted_nodes(self, tree):
        """Test that every TGF edge joins listed nodes."""
        lines = render(tree, TGFDependencyNodeVisitor).splitlines()
        separator = lines.index("#")
        node_ids = {line.split(" ")[0] for line in lines[:separator]}
        edges = lines[separator + 1:]
        assert len(edges) == 3
        for edge in edges:
            source, target = edge.split(" ")[:2]
            assert source in node_ids and target in node_ids


class TestSerializerSelection:
    """Tests for visitor and token selection."""

    def test_get_serializing_visitor(self):
        """Test selecting a visitor by output type."""
        writer = io.StringIO()
        assert isinstance(get_serializing_visitor("dot", writer), DOTDependencyNodeVisitor)
        assert isinstance(get_serializing_visitor("graphml", writer), GraphmlDependencyNodeVisitor)
        assert isinstance(get_serializing_visitor("tgf", writer), TGFDependencyNodeVisitor)
        assert isinstance(get_serializing_visitor("text", writer), SerializingDependencyNodeVisitor)
        assert isinstance(get_serializing_visitor(None, writer), SerializingDependencyNodeVisitor)

    def test_unknown_tokens_are_standard(self):
        """Test that unknown token styles fall back to standard."""
        assert to_graph_tokens("bogus") is STANDARD_TOKENS
        assert to_graph_tokens("extended") is EXTENDED_TOKENS

    def test_serialize_with_includes(self, tree):
        """Test serializing a tree pruned by include patterns."""
        assert serialize_dependency_tree(tree, includes="g:c") == (
            "g:a:jar:1.0\n"
            "\\- g:b:jar:1.0:compile\n"
            "   \\- g:c:jar:1.0:runtime\n"
        )

    def test_serialize_with_excludes(self, tree):
        """Test serializing a tree pruned by exclude patterns."""
        assert serialize_dependency_tree(tree, excludes="g:c") == (
            "g:a:jar:1.0\n"
            "+- g:b:jar:1.0:compile\n"
            "\\- g:d:jar:1.0:test\n"
        )

    def test_excluded_node_is_kept_as_ancestor_of_a_match(self, tree):
        """Test that an excluded node stays when a match sits below it."""
        output = serialize_dependency_tree(tree, excludes="g:b")
        assert "g:b:jar:1.0:compile" in output
        assert "g:c:jar:1.0:runtime" in output

    @pytest.mark.parametrize("output_type", ["dot", "graphml", "tgf"])
    def test_serialize_other_formats(self, tree, output_type):
        """Test serializing to each graph format."""
        output = serialize_dependency_tree(tree, output_type=output_type)
        assert "g:d:jar:1.0" in output


def chain(depth):
    """a -> n1 -> ... -> n<depth>, with a sibling leaf next to n1."""
    current = Node(Artifact("g", f"n{depth}", "1.0"), scope="compile")
    for level in range(depth - 1, 0, -1):
        current = Node(Artifact("g", f"n{level}", "1.0"), scope="compile", children=[current])
    sibling = Node(Artifact("g", "sibling", "1.0"), scope="test")
    return Node(Artifact("g", "a", "1.0"), children=[current, sibling])


class TestDeepTrees:
    """Tests for serializing trees deeper than the interpreter's recursion limit."""

    def test_text_indentation_of_deep_chain(self):
        """Test that every level of a deep chain gets one fill token per ancestor."""
        depth = 1500
        lines = render(chain(depth), SerializingDependencyNodeVisitor, STANDARD_TOKENS).splitlines()
        assert len(lines) == depth + 2
        assert lines[1] == "+- g:n1:jar:1.0:compile"
        assert lines[2] == "|  \\- g:n2:jar:1.0:compile"
        assert lines[depth] == "|  " + "   " * (depth - 2) + "\\- g:n1500:jar:1.0:compile"
        assert lines[-1] == "\\- g:sibling:jar:1.0:test"

    def test_serialize_deep_chain_with_includes(self):
        """Test pruning then rendering a deep chain down to its deepest node."""
        output = serialize_dependency_tree(chain(1500), includes="g:n1500")
        lines = output.splitlines()
        assert len(lines) == 1501
        assert lines[-1] == "   " * 1499 + "\\- g:n1500:jar:1.0:compile"

    @pytest.mark.parametrize("output_type", ["dot", "graphml", "tgf"])
    def test_serialize_deep_chain_other_formats(self, output_type):
        """Test that the graph formats handle a deep chain."""
        output = serialize_dependency_tree(chain(1500), output_type=output_type)
        assert "g:n1500:jar:1.0" in output
