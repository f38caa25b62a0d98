"""Skipping of artifacts that are already present at their copy destination."""

import logging
import os
from pathlib import Path
from typing import Union

from ..models import Artifact
from ..naming import ArtifactItem, get_formatted_file_name, get_formatted_output_directory

logger = logging.getLogger(__name__)


class DestFileFilter:
    """
    Accept artifacts that still have to be copied to the output directory.

    An artifact whose destination file already exists is rejected unless the
    overwrite flag for its kind (release or snapshot) is set, or
    ``overwrite_if_newer`` is set and the resolved file is newer than the copy.

    The destination is the item's own output directory when it has one,
    otherwise the directory derived from the layout flags below
    ``output_file_directory``. The file name is the item's ``dest_file_name``
    when set, otherwise the name derived from the naming flags.
    """

    def __init__(
        self,
        output_file_directory: Union[str, Path],
        overwrite_releases: bool = False,
        overwrite_snapshots: bool = False,
        overwrite_if_newer: bool = False,
        use_sub_directory_per_artifact: bool = False,
        use_sub_directory_per_type: bool = False,
        use_sub_directory_per_scope: bool = False,
        use_repository_layout: bool = False,
        remove_version: bool = False,
        remove_type: bool = False,
        remove_classifier: bool = False,
        prepend_group_id: bool = False,
        use_base_version: bool = False,
    ):
        self.output_file_directory = Path(output_file_directory)
        self.overwrite_releases = overwrite_releases
        self.overwrite_snapshots = overwrite_snapshots
        self.overwrite_if_newer = overwrite_if_newer
        self.use_sub_directory_per_artifact = use_sub_directory_per_artifact
        self.use_sub_directory_per_type = use_sub_directory_per_type
        self.use_sub_directory_per_scope = use_sub_directory_per_scope
        self.use_repository_layout = use_repository_layout
        self.remove_version = remove_version
        self.remove_type = remove_type
        self.remove_classifier = remove_classifier
        self.prepend_group_id = prepend_group_id
        self.use_base_version = use_base_version

    def get_dest_file(self, item: ArtifactItem) -> Path:
        """Return where ``item`` would be copied to."""
        artifact = item.artifact
        if item.output_directory is not None:
            dest_folder = Path(item.output_directory)
        else:
            dest_folder = get_formatted_output_directory(
                self.use_sub_directory_per_scope,
                self.use_sub_directory_per_type,
                self.use_sub_directory_per_artifact,
                self.use_repository_layout,
                self.remove_version,
                self.remove_type,
                self.output_file_directory,
                artifact,
            )

        if item.dest_file_name:
            return dest_folder / item.dest_file_name
        return dest_folder / get_formatted_file_name(
            artifact,
            self.remove_version,
            self.prepend_group_id,
            self.use_base_version,
            self.remove_classifier,
            self.remove_type,
        )

    def test(self, value: Union[ArtifactItem, Artifact]) -> bool:
        item = value if isinstance(value, ArtifactItem) else ArtifactItem(value)
        artifact = item.artifact

        if artifact.is_snapshot:
            overwrite = self.overwrite_snapshots
        else:
            overwrite = self.overwrite_releases
        if overwrite:
            return True

        dest_file = self.get_dest_file(item)
        if not dest_file.exists():
            return True

        if self.overwrite_if_newer and artifact.path:
            if os.path.getmtime(artifact.path) > os.path.getmtime(dest_file):
                logger.debug(f"{artifact} is newer than {dest_file}")
                return True

        logger.debug(f"Skipped {artifact}: {dest_file} already exists")
        return False

    __call__ = test
