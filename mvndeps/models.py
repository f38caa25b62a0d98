"""Core data models for mvndeps."""

from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from packageurl import PackageURL

from .version_parser import is_snapshot, to_snapshot_version

# Packaging types whose file extension differs from the type name
TYPE_EXTENSIONS = {
    "test-jar": "jar",
    "maven-plugin": "jar",
    "ejb": "jar",
    "ejb-client": "jar",
    "java-source": "jar",
    "javadoc": "jar",
    "bundle": "jar",
}


def extension_for(type_: str) -> str:
    """Return the file extension of an artifact of the given packaging type."""
    return TYPE_EXTENSIONS.get(type_, type_)


@dataclass(frozen=True)
class Artifact:
    """Represents a Maven artifact identified by its coordinate."""

    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    extension: str = "jar"
    type: Optional[str] = None  # defaults to the extension
    scope: Optional[str] = field(default=None, compare=False)  # scope it was reached with, if any
    path: Optional[str] = field(default=None, compare=False)  # materialized file, once resolved

    def __post_init__(self):
        """Normalize optional coordinate parts."""
        if self.classifier is None:
            object.__setattr__(self, 'classifier', "")
        if not self.extension:
            object.__setattr__(self, 'extension', "jar")
        if not self.type:
            object.__setattr__(self, 'type', self.extension)

    @property
    def base_version(self) -> str:
        """Version with any snapshot timestamp normalized back to -SNAPSHOT."""
        return to_snapshot_version(self.version)

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot(self.version)

    @property
    def key(self) -> str:
        """Return the groupId:artifactId:version key."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def conflict_id(self) -> str:
        """Return the groupId:artifactId:type[:classifier] id."""
        suffix = f":{self.classifier}" if self.classifier else ""
        return f"{self.group_id}:{self.artifact_id}:{self.type}{suffix}"

    @property
    def id_with_dashes(self) -> str:
        classifier = f"-{self.classifier}" if self.classifier else ""
        return f"{self.group_id}-{self.artifact_id}-{self.type}{classifier}-{self.version}-"

    @property
    def purl(self) -> str:
        """Return the Package URL (purl) string for this artifact."""
        qualifiers = {}
        if self.classifier:
            qualifiers['classifier'] = self.classifier
        if self.type != "jar":
            qualifiers['type'] = self.type
        return PackageURL(
            type='maven',
            namespace=self.group_id,
            name=self.artifact_id,
            version=self.version,
            qualifiers=qualifiers or None,
        ).to_string()

    def with_scope(self, scope: Optional[str]) -> 'Artifact':
        return replace(self, scope=scope)

    def with_path(self, path: Optional[str]) -> 'Artifact':
        return replace(self, path=path)

    def __str__(self) -> str:
        classifier = f":{self.classifier}" if self.classifier else ""
        return f"{self.group_id}:{self.artifact_id}:{self.extension}{classifier}:{self.version}"


@dataclass(frozen=True, eq=False)
class Node:
    """
    A vertex of a resolved dependency tree.

    Nodes only know their children; anything that needs to walk upwards builds
    its own parent index. Equality and hashing are by identity, so the same
    artifact reached through two paths yields two distinct nodes.
    """

    artifact: Artifact
    scope: Optional[str] = None  # None for the root
    optional: bool = False
    children: Tuple['Node', ...] = ()

    def __post_init__(self):
        if not isinstance(self.children, tuple):
            object.__setattr__(self, 'children', tuple(self.children))

    def as_string(self) -> str:
        """Return the display string used by the text tree."""
        text = str(self.artifact)
        if self.scope:
            text += f":{self.scope}"
        if self.optional:
            text += " (optional)"
        return text

    def stream(self) -> Iterator['Node']:
        """Iterate over this node and all its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def accept(self, visitor) -> bool:
        """
        Walk this tree depth-first, calling ``visitor.enter`` before and
        ``visitor.leave`` after each node's children.

        Children are only visited when ``enter`` returned True; a child whose
        walk returned False stops the visit of its remaining siblings.

        Returns:
            The result of ``visitor.leave`` for this node
        """
        if not visitor.enter(self):
            return visitor.leave(self)

        stack = [(self, iter(self.children))]
        while stack:
            node, children = stack[-1]
            child = next(children, None)

            if child is None:
                stack.pop()
                result = visitor.leave(node)
                if not stack:
                    return result
                if not result:
                    stack[-1] = (stack[-1][0], iter(()))
                continue

            if visitor.enter(child):
                stack.append((child, iter(child.children)))
            elif not visitor.leave(child):
                stack[-1] = (node, iter(()))

        return True

    def filter(self, predicate: Callable[['Node'], bool]) -> 'Node':
        """
        Return a tree keeping only the descendants accepted by ``predicate``.

        A rejected node takes its whole sub-tree with it. The root is always
        kept. Sub-trees that lose nothing are reused as-is, so filtering with
        a predicate that accepts everything returns this very node.
        """
        # Post-order: rebuild each node after all of its children were handled
        rebuilt = {}
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                for child in reversed(node.children):
                    if predicate(child):
                        stack.append((child, False))
                continue

            kept = [rebuilt.pop(child) for child in node.children if child in rebuilt]
            unchanged = len(kept) == len(node.children) and all(
                new is old for new, old in zip(kept, node.children)
            )
            rebuilt[node] = node if unchanged else replace(node, children=tuple(kept))

        return rebuilt[self]

    def __repr__(self) -> str:
        return f"Node({self.as_string()!r}, children={len(self.children)})"


@dataclass
class Project:
    """The project model pieces the filters need: identity, direct dependencies, parent."""

    artifact: Artifact
    dependencies: List[Artifact] = field(default_factory=list)
    parent: Optional['Project'] = None

    def ancestors(self) -> Iterator['Project']:
        """Yield the parent chain, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    @classmethod
    def from_root(cls, root: Node, reactor: Sequence['Project'] = ()) -> 'Project':
        """Derive a project from a collected tree: the root artifact and its direct children."""
        for project in reactor:
            if project.artifact == root.artifact:
                return project
        return cls(artifact=root.artifact, dependencies=[child.artifact for child in root.children])
