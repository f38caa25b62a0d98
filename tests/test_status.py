"""Tests for the resolution status report."""

import os

from mvndeps.models import Artifact
from mvndeps.status import DependencyStatusSets

LIB = Artifact("org.example", "lib", "1.0").with_scope("compile")
UTIL = Artifact("org.example", "util", "2.0").with_scope("runtime")


class TestDependencyStatusSets:
    """Tests for DependencyStatusSets."""

    def test_nothing_resolved(self):
        """Test the report when nothing was resolved."""
        assert DependencyStatusSets().get_output() == (
            "\nThe following files have been resolved:\n   none\n\n"
        )

    def test_resolved_with_scope(self):
        """Test resolved artifacts listed with their scope."""
        assert DependencyStatusSets([UTIL, LIB]).get_output() == (
            "\nThe following files have been resolved:\n"
            "   org.example:util:jar:2.0:runtime\n"
            "   org.example:lib:jar:1.0:compile\n"
            "\n"
        )

    def test_sorted_without_scope(self):
        """Test a sorted report without scopes."""
        assert DependencyStatusSets([UTIL, LIB]).get_output(output_scope=False, sort=True) == (
            "\nThe following files have been resolved:\n"
            "   org.example:lib:jar:1.0\n"
            "   org.example:util:jar:2.0\n"
            "\n"
        )

    def test_all_sections(self):
        """Test the resolved, skipped and unresolved sections together."""
        output = DependencyStatusSets([LIB], [UTIL], [LIB.with_scope("test")]).get_output()
        assert output == (
            "\nThe following files have been resolved:\n"
            "   org.example:lib:jar:1.0:compile\n"
            "\nThe following files were skipped:\n"
            "   org.example:lib:jar:1.0:test\n"
            "\nThe following files have NOT been resolved:\n"
            "   org.example:util:jar:2.0:runtime\n"
            "\n"
        )

    def test_absolute_file_name(self, tmp_path):
        """Test appending the absolute file of a resolved artifact."""
        jar = tmp_path / "lib-1.0.jar"
        output = DependencyStatusSets([LIB.with_path(str(jar))]).get_output(output_absolute_artifact_filename=True)
        assert f"   org.example:lib:jar:1.0:compile:{os.path.abspath(jar)}\n" in output

    def test_duplicates_are_dropped(self):
        """Test that each artifact is reported once."""
        status = DependencyStatusSets([LIB, LIB, UTIL])
        assert status.resolved == [LIB, UTIL]
