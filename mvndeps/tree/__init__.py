"""Dependency tree filtering and rendering (text, DOT, GraphML, TGF)."""

import io
import logging
from typing import Callable, Optional, TextIO

from ..filters import StrictPatternArtifactFilter, combine
from ..models import Node
from ..version_parser import VersionParser
from .dot import DOTDependencyNodeVisitor
from .graphml import GraphmlDependencyNodeVisitor
from .pruning import ancestors_or_self, build_parent_index, prune
from .serializing import (
    EXTENDED_TOKENS,
    STANDARD_TOKENS,
    WHITESPACE_TOKENS,
    GraphTokens,
    SerializingDependencyNodeVisitor,
)
from .tgf import TGFDependencyNodeVisitor
from .visitors import AbstractSerializingVisitor, NodeVisitor

logger = logging.getLogger(__name__)

OUTPUT_TYPES = ('text', 'dot', 'graphml', 'tgf')
TOKEN_STYLES = ('whitespace', 'standard', 'extended')


def to_graph_tokens(name: Optional[str]) -> GraphTokens:
    """Return the token preset called ``name``; anything unknown is standard."""
    if name == 'whitespace':
        logger.debug("+ Using whitespace tree tokens")
        return WHITESPACE_TOKENS
    if name == 'extended':
        logger.debug("+ Using extended tree tokens")
        return EXTENDED_TOKENS
    return STANDARD_TOKENS


def get_serializing_visitor(output_type: Optional[str], writer: TextIO, tokens: Optional[str] = 'standard') -> NodeVisitor:
    """Return the visitor rendering ``output_type``; unknown types render as text."""
    if output_type == 'graphml':
        return GraphmlDependencyNodeVisitor(writer)
    if output_type == 'tgf':
        return TGFDependencyNodeVisitor(writer)
    if output_type == 'dot':
        return DOTDependencyNodeVisitor(writer)
    return SerializingDependencyNodeVisitor(writer, to_graph_tokens(tokens))


def _split_patterns(patterns: str):
    return [pattern.strip() for pattern in patterns.split(',')]


def create_dependency_node_filter(
    includes: Optional[str] = None,
    excludes: Optional[str] = None,
    version_parser=VersionParser,
) -> Optional[Callable[[Node], bool]]:
    """
    Build the node predicate for the comma separated include and exclude patterns.

    Returns:
        A predicate over nodes, or None when neither list is given
    """
    node_filter = None

    if includes is not None:
        patterns = _split_patterns(includes)
        logger.debug(f"+ Filtering dependency tree by artifact include patterns: {patterns}")
        include_filter = StrictPatternArtifactFilter(patterns, True, version_parser)
        node_filter = combine(node_filter, lambda node: include_filter.test(node.artifact))

    if excludes is not None:
        patterns = _split_patterns(excludes)
        logger.debug(f"+ Filtering dependency tree by artifact exclude patterns: {patterns}")
        exclude_filter = StrictPatternArtifactFilter(patterns, False, version_parser)
        node_filter = combine(node_filter, lambda node: exclude_filter.test(node.artifact))

    return node_filter


def serialize_dependency_tree(
    root: Node,
    output_type: str = 'text',
    tokens: str = 'standard',
    includes: Optional[str] = None,
    excludes: Optional[str] = None,
    version_parser=VersionParser,
) -> str:
    """
    Prune ``root`` by the include/exclude patterns and render it.

    Nodes matching the patterns keep their whole ancestor path so they are
    still shown in context.
    """
    node_filter = create_dependency_node_filter(includes, excludes, version_parser)
    root = prune(root, node_filter)

    writer = io.StringIO()
    root.accept(get_serializing_visitor(output_type, writer, tokens))
    return writer.getvalue()


__all__ = [
    'EXTENDED_TOKENS',
    'OUTPUT_TYPES',
    'STANDARD_TOKENS',
    'TOKEN_STYLES',
    'WHITESPACE_TOKENS',
    'AbstractSerializingVisitor',
    'DOTDependencyNodeVisitor',
    'GraphTokens',
    'GraphmlDependencyNodeVisitor',
    'NodeVisitor',
    'SerializingDependencyNodeVisitor',
    'TGFDependencyNodeVisitor',
    'ancestors_or_self',
    'build_parent_index',
    'create_dependency_node_filter',
    'get_serializing_visitor',
    'prune',
    'serialize_dependency_tree',
    'to_graph_tokens',
]
