"""Dependency set selection and artifact resolution."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from .exceptions import ConfigurationError, ResolutionError
from .filters import ExcludeReactorProjectsFilter, IncludeExcludeFilter, ScopeFilter, combine
from .models import Artifact, Node, Project, extension_for
from .naming import get_formatted_file_name, get_repository_directory
from .status import DependencyStatusSets

logger = logging.getLogger(__name__)


@dataclass
class DependencyFilterConfig:
    """
    Which dependencies of a project a goal works on.

    Every list option is a comma separated string. ``classifier`` and ``type``
    switch the goal to a different artifact of each selected dependency, e.g.
    ``classifier="sources"``.
    """

    include_scope: Optional[str] = None
    exclude_scope: Optional[str] = None
    include_types: Optional[str] = None
    exclude_types: Optional[str] = None
    include_classifiers: Optional[str] = None
    exclude_classifiers: Optional[str] = None
    include_group_ids: Optional[str] = None
    exclude_group_ids: Optional[str] = None
    include_artifact_ids: Optional[str] = None
    exclude_artifact_ids: Optional[str] = None
    exclude_transitive: bool = False
    exclude_reactor: bool = True
    classifier: Optional[str] = None
    type: Optional[str] = None


class ArtifactResolver(Protocol):
    """Anything that can materialize an artifact to a file."""

    def resolve(self, artifact: Artifact) -> Artifact:
        """
        Return ``artifact`` with its path set.

        Raises:
            ResolutionError: If the artifact cannot be found
        """
        ...


class LocalRepositoryResolver:
    """Resolve artifacts from a directory laid out like a Maven local repository."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def locate(self, artifact: Artifact) -> Path:
        return get_repository_directory(self.base_dir, artifact) / get_formatted_file_name(artifact, False)

    def resolve(self, artifact: Artifact) -> Artifact:
        path = self.locate(artifact)
        if not path.is_file():
            raise ResolutionError(artifact, f"error resolving: {artifact}: {path} not found")
        logger.debug(f"Resolved {artifact} to {path}")
        return artifact.with_path(str(path))


def build_node_filter(
    config: DependencyFilterConfig,
    project: Project,
    reactor_projects: Sequence[Project] = (),
) -> Callable[[Node], bool]:
    """
    Build the node-level part of the selection: direct-only, scope, reactor.

    Raises:
        ConfigurationError: If a scope is not a Maven scope
    """
    node_filter = None

    if config.exclude_transitive:
        direct = {artifact.conflict_id for artifact in project.dependencies}
        node_filter = combine(node_filter, lambda node: node.artifact.conflict_id in direct)

    scope_filter = ScopeFilter(config.include_scope, config.exclude_scope, lambda node: node.scope)
    node_filter = combine(node_filter, scope_filter)

    if config.exclude_reactor:
        node_filter = combine(node_filter, ExcludeReactorProjectsFilter(reactor_projects))

    return node_filter


def build_artifact_filter(config: DependencyFilterConfig) -> Callable[[Artifact], bool]:
    """Build the artifact-level part of the selection: types, classifiers, group ids, artifact ids."""
    artifact_filter = None
    artifact_filter = combine(
        artifact_filter,
        IncludeExcludeFilter(config.include_types, config.exclude_types, lambda a: a.type),
    )
    artifact_filter = combine(
        artifact_filter,
        IncludeExcludeFilter(config.include_classifiers, config.exclude_classifiers, lambda a: a.classifier),
    )
    artifact_filter = combine(
        artifact_filter,
        IncludeExcludeFilter(
            config.include_group_ids, config.exclude_group_ids, lambda a: a.group_id, str.startswith
        ),
    )
    artifact_filter = combine(
        artifact_filter,
        IncludeExcludeFilter(config.include_artifact_ids, config.exclude_artifact_ids, lambda a: a.artifact_id),
    )
    return artifact_filter


def resolve(
    artifacts: Iterable[Artifact],
    resolver: ArtifactResolver,
    stop_on_failure: bool = False,
) -> Tuple[List[Artifact], List[Artifact]]:
    """
    Resolve each artifact in order.

    Returns:
        Tuple of (resolved, unresolved) artifacts

    Raises:
        ResolutionError: On the first failure when ``stop_on_failure`` is set
    """
    resolved = []
    unresolved = []
    for artifact in artifacts:
        try:
            resolved.append(resolver.resolve(artifact))
        except ResolutionError as e:
            if stop_on_failure:
                raise
            logger.debug(f"Unable to resolve {artifact}: {e}")
            unresolved.append(artifact)
    return resolved, unresolved


def translate_classifier(artifact: Artifact, classifier: Optional[str], type_: Optional[str]) -> Artifact:
    """Return the sibling artifact with the given classifier and type."""
    new_type = type_ or artifact.type
    return replace(
        artifact,
        classifier=classifier or artifact.classifier,
        extension=extension_for(new_type),
        type=new_type,
        path=None,
    )


def _parent_artifacts(project: Project) -> List[Artifact]:
    parents = []
    for ancestor in project.ancestors():
        a = ancestor.artifact
        parents.append(Artifact(a.group_id, a.artifact_id, a.version, extension="pom"))
    return parents


def get_dependency_sets(
    root: Node,
    project: Project,
    config: DependencyFilterConfig,
    resolver: Optional[ArtifactResolver] = None,
    stop_on_failure: bool = False,
    include_parents: bool = False,
    project_builder: Optional[Callable[[Artifact], Project]] = None,
    reactor_projects: Sequence[Project] = (),
    marked_artifact_filter: Optional[Callable[[Artifact], bool]] = None,
) -> DependencyStatusSets:
    """
    Select and resolve the dependencies of ``project`` described by ``root``.

    Args:
        root: The collected dependency tree, rooted at the project
        project: The project the tree belongs to
        config: Selection options
        resolver: Resolves the selected artifacts; without one they are reported as resolved with no file
        stop_on_failure: Raise on the first artifact that cannot be resolved
        include_parents: Also select the parent POMs of the dependencies and of the project
        project_builder: Builds the project model of a dependency, needed by ``include_parents``
        reactor_projects: Modules of the current build, excluded when ``config.exclude_reactor`` is set
        marked_artifact_filter: Returns True for artifacts that still need processing; the rest are skipped

    Returns:
        The resolved, unresolved and skipped artifacts

    Raises:
        ConfigurationError: On contradictory or invalid filter settings
        ResolutionError: When resolution fails and ``stop_on_failure`` is set
    """
    if (config.exclude_scope or "").strip() == "test":
        raise ConfigurationError(
            "Excluding every artifact inside 'test' resolution scope means excluding everything: "
            "you probably want includeScope='compile', read parameters documentation for detailed explanations"
        )

    node_filter = build_node_filter(config, project, reactor_projects)

    artifacts = []
    for node in root.stream():
        if node is root or node.artifact == project.artifact:
            continue
        if node_filter(node):
            artifacts.append(node.artifact.with_scope(node.scope))
    artifacts = list(dict.fromkeys(artifacts))
    logger.debug(f"Selected {len(artifacts)} dependencies of {project.artifact}")

    if include_parents:
        if project_builder is None:
            raise ConfigurationError("Including parent POMs requires a project builder")
        for artifact in list(artifacts):
            artifacts.extend(_parent_artifacts(project_builder(artifact)))
        artifacts.extend(_parent_artifacts(project))
        artifacts = list(dict.fromkeys(artifacts))

    artifact_filter = build_artifact_filter(config)
    artifacts = [artifact for artifact in artifacts if artifact_filter(artifact)]

    if resolver is not None:
        resolved, unresolved = resolve(artifacts, resolver, stop_on_failure)
    else:
        resolved, unresolved = artifacts, []

    if config.classifier:
        translated = [translate_classifier(a, config.classifier, config.type) for a in resolved]
        if resolver is not None:
            resolved, missing = resolve(translated, resolver, stop_on_failure)
            unresolved.extend(missing)
        else:
            resolved = translated
        return DependencyStatusSets(resolved, unresolved)

    skipped = []
    if marked_artifact_filter is not None:
        skipped = [a for a in resolved if not marked_artifact_filter(a)]
        resolved = [a for a in resolved if marked_artifact_filter(a)]

    return DependencyStatusSets(resolved, unresolved, skipped)


def parse_coordinate(value: str) -> Artifact:
    """
    Parse ``groupId:artifactId:version[:packaging[:classifier]]``.

    Raises:
        ConfigurationError: If the value does not have three to five tokens
    """
    tokens = value.split(':')
    if not 3 <= len(tokens) <= 5:
        raise ConfigurationError(
            f"Invalid artifact, you must specify groupId:artifactId:version[:packaging[:classifier]] {value}"
        )
    group_id, artifact_id, version = tokens[:3]
    packaging = tokens[3] if len(tokens) > 3 and tokens[3] else "jar"
    classifier = tokens[4] if len(tokens) > 4 else ""
    return Artifact(
        group_id, artifact_id, version, classifier=classifier, extension=extension_for(packaging), type=packaging
    )


def dependency_properties(artifacts: Iterable[Artifact]) -> Dict[str, str]:
    """Map each resolved artifact's conflict id to the absolute path of its file."""
    properties = {}
    for artifact in artifacts:
        if not artifact.path:
            logger.debug(f"No file for {artifact}, no property set")
            continue
        properties[artifact.conflict_id] = os.path.abspath(artifact.path)
    return properties


def collect_ancestors(project: Project) -> List[str]:
    """Return the groupId:artifactId:version of every parent POM, nearest first."""
    ancestors = [ancestor.artifact.key for ancestor in project.ancestors()]
    if ancestors:
        logger.info(f"Ancestor POMs: {' <- '.join(ancestors)}")
    else:
        logger.info("No Ancestor POMs!")
    return ancestors
