"""Exclusion of artifacts built by the current reactor."""

import logging
from typing import Iterable, Union

from ..models import Artifact, Node, Project

logger = logging.getLogger(__name__)


class ExcludeReactorProjectsFilter:
    """
    Reject nodes and artifacts that are modules of the current multi-module build.

    Only groupId:artifactId:version is compared; type and classifier are
    ignored, so a reactor module's test-jar is rejected along with its jar.
    """

    def __init__(self, reactor_projects: Iterable[Project]):
        self.reactor_artifact_keys = {project.artifact.key for project in reactor_projects}

    def test(self, value: Union[Node, Artifact]) -> bool:
        artifact = value.artifact if isinstance(value, Node) else value
        key = artifact.key
        if key in self.reactor_artifact_keys:
            logger.debug(f"Skipped dependency {key} because it is present in the reactor")
            return False
        return True

    __call__ = test
