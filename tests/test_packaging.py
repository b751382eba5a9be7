"""Tests for the project metadata in pyproject.toml."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


@pytest.fixture
def project():
    with PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]


class TestProjectMetadata:
    """Tests for the [project] table."""

    def test_no_requirements_document_as_readme(self, project):
        assert project.get("readme") != "SPEC_FULL.md"

    def test_cli_entry_point(self, project):
        assert project["scripts"]["push-variation"] == "main:main"

    def test_runtime_has_no_third_party_dependencies(self, project):
        assert project["dependencies"] == []
        assert any(req.startswith("pytest") for req in project["optional-dependencies"]["test"])
