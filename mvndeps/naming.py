"""Destination file names and directories for copied or unpacked artifacts."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .models import Artifact


def get_formatted_file_name(
    artifact: Artifact,
    remove_version: bool,
    prepend_group_id: bool = False,
    use_base_version: bool = False,
    remove_classifier: bool = False,
    remove_type: bool = False,
) -> str:
    """
    Build the file name ``[groupId-]artifactId[-version][-classifier].extension``.

    Args:
        artifact: The artifact to name
        remove_version: Leave out the version
        prepend_group_id: Start with the group id
        use_base_version: Use the -SNAPSHOT base version instead of the timestamped one
        remove_classifier: Leave out the classifier
        remove_type: Leave out the extension

    Returns:
        The file name
    """
    parts = []
    if prepend_group_id:
        parts.append(f"{artifact.group_id}-")
    parts.append(artifact.artifact_id)

    if not remove_version:
        version = artifact.base_version if use_base_version else artifact.version
        parts.append(f"-{version}")

    if not remove_classifier and artifact.classifier:
        parts.append(f"-{artifact.classifier}")

    if not remove_type:
        parts.append(f".{artifact.extension}")

    return "".join(parts)


def get_dependency_id(artifact: Artifact, remove_version: bool, remove_type: bool) -> str:
    """Return ``artifactId[-version][-classifier][-type]``, used for per-artifact directories."""
    parts = [artifact.artifact_id]
    if not remove_version:
        parts.append(f"-{artifact.version}")
    if artifact.classifier:
        parts.append(f"-{artifact.classifier}")
    # avoid names like foo-sources-sources
    if not remove_type and artifact.classifier != artifact.type:
        parts.append(f"-{artifact.type}")
    return "".join(parts)


def get_repository_directory(output_directory: Union[str, Path], artifact: Artifact) -> Path:
    """Return the Maven repository layout directory of ``artifact`` below ``output_directory``."""
    return Path(output_directory).joinpath(
        *artifact.group_id.split('.'), artifact.artifact_id, artifact.base_version
    )


def get_formatted_output_directory(
    use_sub_directory_per_scope: bool,
    use_sub_directory_per_type: bool,
    use_sub_directory_per_artifact: bool,
    use_repository_layout: bool,
    remove_version: bool,
    remove_type: bool,
    output_directory: Union[str, Path],
    artifact: Artifact,
) -> Path:
    """
    Compute the directory an artifact is copied or unpacked into.

    With the repository layout the sub-directory flags are ignored. Otherwise
    segments are appended in a fixed order: scope, ``<type>s``, then the
    dependency id.
    """
    if use_repository_layout:
        return get_repository_directory(output_directory, artifact)

    directory = Path(output_directory)
    if use_sub_directory_per_scope and artifact.scope:
        directory = directory / artifact.scope
    if use_sub_directory_per_type:
        directory = directory / f"{artifact.type}s"
    if use_sub_directory_per_artifact:
        directory = directory / get_dependency_id(artifact, remove_version, remove_type)
    return directory


@dataclass
class ArtifactItem:
    """An artifact plus the naming options of the copy or unpack it takes part in."""

    artifact: Artifact
    output_directory: Optional[Union[str, Path]] = None  # unset: decided by the goal
    dest_file_name: Optional[str] = None  # overrides the computed name
    remove_version: bool = False
    remove_classifier: bool = False
    remove_type: bool = False
    prepend_group_id: bool = False
    use_base_version: bool = False
    use_sub_directory_per_artifact: bool = False
    use_sub_directory_per_type: bool = False
    use_sub_directory_per_scope: bool = False
    use_repository_layout: bool = False

    def get_formatted_file_name(self) -> str:
        if self.dest_file_name:
            return self.dest_file_name
        return get_formatted_file_name(
            self.artifact,
            self.remove_version,
            self.prepend_group_id,
            self.use_base_version,
            self.remove_classifier,
            self.remove_type,
        )

    def get_output_directory(self) -> Path:
        return get_formatted_output_directory(
            self.use_sub_directory_per_scope,
            self.use_sub_directory_per_type,
            self.use_sub_directory_per_artifact,
            self.use_repository_layout,
            self.remove_version,
            self.remove_type,
            self.output_directory if self.output_directory is not None else ".",
            self.artifact,
        )

    def get_output_path(self) -> Path:
        """Return the full destination path of the artifact file."""
        return self.get_output_directory() / self.get_formatted_file_name()
