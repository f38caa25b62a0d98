"""Tests for artifact file and directory naming."""

from pathlib import Path

from mvndeps.models import Artifact
from mvndeps.naming import (
    ArtifactItem,
    get_dependency_id,
    get_formatted_file_name,
    get_formatted_output_directory,
)

SNAPSHOT = Artifact("org.example", "lib", "1.0-20230101.120000-3", classifier="sources")


class TestFormattedFileName:
    """Tests for get_formatted_file_name."""

    def test_full_name(self):
        """Test the name with version and classifier."""
        assert get_formatted_file_name(SNAPSHOT, False) == "lib-1.0-20230101.120000-3-sources.jar"

    def test_is_deterministic(self):
        """Test that the same options always give the same name."""
        assert get_formatted_file_name(SNAPSHOT, False, True) == get_formatted_file_name(SNAPSHOT, False, True)

    def test_remove_version_strips_only_the_version(self):
        """Test that removing the version keeps the classifier."""
        assert get_formatted_file_name(SNAPSHOT, True) == "lib-sources.jar"

    def test_base_version(self):
        """Test naming a timestamped snapshot by its base version."""
        assert get_formatted_file_name(SNAPSHOT, False, use_base_version=True) == "lib-1.0-SNAPSHOT-sources.jar"

    def test_prepend_group_id(self):
        """Test prefixing the group id."""
        assert get_formatted_file_name(SNAPSHOT, True, prepend_group_id=True) == "org.example-lib-sources.jar"

    def test_remove_classifier(self):
        """Test leaving out the classifier."""
        assert get_formatted_file_name(SNAPSHOT, True, remove_classifier=True) == "lib.jar"

    def test_remove_type(self):
        """Test leaving out the extension."""
        artifact = Artifact("org.example", "lib", "1.0", extension="war")
        assert get_formatted_file_name(artifact, False, remove_type=True) == "lib-1.0"


class TestDependencyId:
    """Tests for get_dependency_id."""

    def test_with_type(self):
        """Test the dependency id with version and type."""
        assert get_dependency_id(Artifact("org.example", "lib", "1.0"), False, False) == "lib-1.0-jar"

    def test_without_version_and_type(self):
        """Test the dependency id without version and type."""
        assert get_dependency_id(Artifact("org.example", "lib", "1.0"), True, True) == "lib"

    def test_type_equal_to_classifier_is_not_repeated(self):
        """Test that a type equal to the classifier is not repeated."""
        artifact = Artifact("org.example", "lib", "1.0", classifier="javadoc", type="javadoc")
        assert get_dependency_id(artifact, False, False) == "lib-1.0-javadoc"


class TestOutputDirectory:
    """Tests for get_formatted_output_directory."""

    def test_plain(self):
        """Test that no flags give the base directory."""
        artifact = Artifact("org.example", "lib", "1.0")
        assert get_formatted_output_directory(False, False, False, False, False, False, "out", artifact) == Path("out")

    def test_repository_layout(self):
        """Test that the repository layout ignores the other flags."""
        directory = get_formatted_output_directory(True, True, True, True, False, False, "out", SNAPSHOT)
        assert directory == Path("out", "org", "example", "lib", "1.0-SNAPSHOT")

    def test_sub_directories(self):
        """Test scope, type and artifact sub-directories in order."""
        artifact = Artifact("org.example", "lib", "1.0").with_scope("compile")
        directory = get_formatted_output_directory(True, True, True, False, False, False, "out", artifact)
        assert directory == Path("out", "compile", "jars", "lib-1.0-jar")

    def test_per_artifact_without_version(self):
        """Test the per-artifact directory without the version."""
        artifact = Artifact("org.example", "lib", "1.0")
        directory = get_formatted_output_directory(False, False, True, False, True, False, "out", artifact)
        assert directory == Path("out", "lib-jar")


class TestArtifactItem:
    """Tests for ArtifactItem."""

    def test_output_path(self, tmp_path):
        """Test the destination of an item."""
        item = ArtifactItem(Artifact("org.example", "lib", "1.0"), output_directory=tmp_path, remove_version=True)
        assert item.get_output_path() == tmp_path / "lib.jar"

    def test_dest_file_name_overrides(self, tmp_path):
        """Test that an explicit file name wins."""
        item = ArtifactItem(Artifact("org.example", "lib", "1.0"), output_directory=tmp_path, dest_file_name="x.jar")
        assert item.get_formatted_file_name() == "x.jar"
        assert item.get_output_path() == tmp_path / "x.jar"

    def test_output_directory_defaults_to_current_directory(self):
        """Test that an item without an output directory is placed in the current directory."""
        item = ArtifactItem(Artifact("org.example", "lib", "1.0"), use_sub_directory_per_type=True)
        assert item.output_directory is None
        assert item.get_output_path() == Path(".", "jars", "lib-1.0.jar")
