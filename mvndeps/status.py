"""Resolved, unresolved and skipped artifact collections."""

import os
from dataclasses import dataclass, field
from typing import Iterable, List

from .models import Artifact


def _unique(artifacts: Iterable[Artifact]) -> List[Artifact]:
    return list(dict.fromkeys(artifacts or ()))


@dataclass
class DependencyStatusSets:
    """
    Outcome of a dependency resolution pass.

    Attributes:
        resolved: Artifacts that were resolved (or collected) successfully
        unresolved: Artifacts the resolver could not provide
        skipped: Artifacts left out, e.g. because they are already up to date
    """

    resolved: List[Artifact] = field(default_factory=list)
    unresolved: List[Artifact] = field(default_factory=list)
    skipped: List[Artifact] = field(default_factory=list)

    def __post_init__(self):
        self.resolved = _unique(self.resolved)
        self.unresolved = _unique(self.unresolved)
        self.skipped = _unique(self.skipped)

    def get_output(
        self,
        output_absolute_artifact_filename: bool = False,
        output_scope: bool = True,
        sort: bool = False,
    ) -> str:
        """Render the three sets as the resolve goal's console report."""
        lines = ["", "The following files have been resolved:"]
        if not self.resolved:
            lines.append("   none")
        else:
            lines.extend(self._artifact_lines(self.resolved, output_absolute_artifact_filename, output_scope, sort))

        if self.skipped:
            lines.extend(["", "The following files were skipped:"])
            lines.extend(self._artifact_lines(self.skipped, output_absolute_artifact_filename, output_scope, sort))

        if self.unresolved:
            lines.extend(["", "The following files have NOT been resolved:"])
            lines.extend(self._artifact_lines(self.unresolved, output_absolute_artifact_filename, output_scope, sort))

        return "\n".join(lines) + "\n\n"

    @staticmethod
    def _artifact_lines(
        artifacts: List[Artifact],
        output_absolute_artifact_filename: bool,
        output_scope: bool,
        sort: bool,
    ) -> List[str]:
        lines = []
        for artifact in artifacts:
            line = f"   {artifact}"
            if output_scope and artifact.scope:
                line += f":{artifact.scope}"
            if output_absolute_artifact_filename and artifact.path:
                line += f":{os.path.abspath(artifact.path)}"
            lines.append(line)
        if sort:
            lines.sort()
        return lines
