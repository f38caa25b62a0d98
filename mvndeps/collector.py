"""Build dependency trees from JSON documents or from deps.dev graphs."""

import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .api_client import DepsDevClient
from .exceptions import ResolutionError
from .models import Artifact, Node, extension_for

logger = logging.getLogger(__name__)


def artifact_from_dict(document: Dict[str, Any]) -> Artifact:
    """Create an artifact from the ``groupId``/``artifactId``/``version`` keys of a tree document."""
    type_ = document.get("type") or "jar"
    return Artifact(
        group_id=document["groupId"],
        artifact_id=document["artifactId"],
        version=document["version"],
        classifier=document.get("classifier") or "",
        extension=document.get("extension") or extension_for(type_),
        type=type_,
    )


def node_from_dict(document: Dict[str, Any]) -> Node:
    """
    Build a dependency tree from a nested JSON-style document.

    Each level carries ``groupId``, ``artifactId``, ``version`` and optionally
    ``type``, ``classifier``, ``scope``, ``optional`` and ``children``.
    """
    # Post-order over the documents; a node can only be built once its children exist
    built: Dict[int, Node] = {}
    stack = [(document, False)]
    while stack:
        current, expanded = stack.pop()
        children = current.get("children") or []
        if not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(children))
            continue

        built[id(current)] = Node(
            artifact=artifact_from_dict(current),
            scope=current.get("scope"),
            optional=bool(current.get("optional", False)),
            children=tuple(built.pop(id(child)) for child in children),
        )

    return built[id(document)]


def load_tree(path: Union[str, Path]) -> Node:
    """Load a dependency tree from a JSON file."""
    with open(path, 'r', encoding='UTF-8') as f:
        document = json.load(f)
    root = node_from_dict(document)
    logger.info(f"Loaded dependency tree of {root.artifact} from {path}")
    return root


class DepsDevCollector:
    """
    Collect dependency trees from the resolved graphs deps.dev publishes.

    deps.dev returns a graph in which an artifact appears once however many
    paths lead to it. The tree gives every artifact the parent that reaches it
    first in breadth-first order, so it sits at its nearest position.
    deps.dev does not report scopes; every dependency is ``compile``.
    """

    def __init__(self, client: Optional[DepsDevClient] = None):
        self.client = client or DepsDevClient()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.client.close()

    def collect(self, artifact: Artifact) -> Node:
        """
        Fetch and convert the dependency graph of ``artifact``.

        Raises:
            ResolutionError: If deps.dev has no graph for the artifact
        """
        graph = self.client.get_dependency_graph(artifact)
        if graph is None:
            raise ResolutionError(artifact.key)
        return self._parse_dependency_graph(graph, artifact)

    def _parse_dependency_graph(self, graph: Dict, root_artifact: Artifact) -> Node:
        nodes = graph.get("nodes", [])
        edges = graph.get("edges", [])

        if not nodes:
            # No nodes at all - leaf
            return Node(artifact=root_artifact)

        artifacts: List[Artifact] = []
        self_node_index = 0
        for i, node in enumerate(nodes):
            version_key = node.get("versionKey", {})
            group_id, _, artifact_id = version_key.get("name", "").partition(':')
            artifacts.append(Artifact(group_id, artifact_id, version_key.get("version", "")))
            if node.get("relation") == "SELF":
                self_node_index = i

        adjacency: Dict[int, List[int]] = {}
        for edge in edges:
            from_node = edge.get("fromNode")
            to_node = edge.get("toNode")
            if from_node is not None and to_node is not None:
                adjacency.setdefault(from_node, []).append(to_node)

        # Breadth-first; the first parent to reach a node keeps it
        children: Dict[int, List[int]] = {}
        order = [self_node_index]
        seen = {self_node_index}
        queue = deque([self_node_index])
        while queue:
            current = queue.popleft()
            for target in adjacency.get(current, []):
                if target in seen:
                    continue
                seen.add(target)
                children.setdefault(current, []).append(target)
                order.append(target)
                queue.append(target)

        built: Dict[int, Node] = {}
        for index in reversed(order):
            is_root = index == self_node_index
            built[index] = Node(
                artifact=root_artifact if is_root else artifacts[index],
                scope=None if is_root else "compile",
                children=tuple(built[child] for child in children.get(index, [])),
            )

        logger.debug(f"Parsed graph for {root_artifact.key}: {len(nodes)} nodes, {len(order)} in tree")
        return built[self_node_index]
