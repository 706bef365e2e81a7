"""Shared pytest-bdd steps for the documentation pipeline scenarios."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, then, when

from markdown_docs.config import load_docs_config
from markdown_docs.generator import MarkdownGenerator
from markdown_docs.nodes import load_nodes

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ..conftest import DocsProject


def generate(project: DocsProject) -> Path:
    """Run the full pipeline for ``project`` with default collaborators."""
    config = load_docs_config(project.config_path)
    return MarkdownGenerator(config).run(load_nodes(project.nodes_path))


@pytest.fixture
def generate_docs() -> cabc.Callable[[DocsProject], Path]:
    """Return the pipeline runner used by scenario steps."""
    return generate


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a documented project")
def given_project(
    docs_project: DocsProject, scenario_state: dict[str, object]
) -> None:
    """Expose the sample project to later steps."""
    scenario_state["project"] = docs_project


@given("the documentation has been generated once")
@when("I generate the documentation")
def when_generate(scenario_state: dict[str, object]) -> None:
    """Generate the sample project's documentation."""
    generate(typ.cast("DocsProject", scenario_state["project"]))


@given(parsers.parse('the output directory already contains "{name}"'))
def given_existing_file(scenario_state: dict[str, object], name: str) -> None:
    """Place a file the tool did not write into the output directory."""
    project = typ.cast("DocsProject", scenario_state["project"])
    project.output_dir.mkdir(parents=True, exist_ok=True)
    (project.output_dir / name).write_text("hand-written\n", encoding="utf-8")


@then(parsers.parse('the output contains "{name}"'))
def then_output_contains(scenario_state: dict[str, object], name: str) -> None:
    project = typ.cast("DocsProject", scenario_state["project"])
    assert name in project.output_files(), f"expected {name} in the output"


@then(parsers.parse('the output does not contain "{name}"'))
def then_output_lacks(scenario_state: dict[str, object], name: str) -> None:
    project = typ.cast("DocsProject", scenario_state["project"])
    assert name not in project.output_files(), f"expected {name} to be removed"
