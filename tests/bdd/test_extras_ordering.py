"""Behaviour tests for prose page ordering and extra validation.

The scenarios in ``extras_ordering.feature`` confirm that the build manifest
lists prose pages in group-table order, and that a non-Markdown extra stops
the run before the output directory is created.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from pytest_bdd import given, parsers, scenarios, then, when

from markdown_docs.extras import UnsupportedFormatError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..conftest import DocsProject

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "extras_ordering.feature"
)
scenarios(FEATURE_FILE)


@given(parsers.parse('the configuration lists a "{name}" extra'))
def given_unsupported_extra(scenario_state: dict[str, object], name: str) -> None:
    """Add a non-Markdown source to the configured extras."""
    project = typ.cast("DocsProject", scenario_state["project"])
    project.write_extra(name, "plain text\n")
    project.write_config(["README.md", name])


@when("I try to generate the documentation")
def when_try_generate(
    scenario_state: dict[str, object],
    generate_docs: cabc.Callable[[DocsProject], Path],
) -> None:
    """Generate, recording the failure instead of raising it."""
    project = typ.cast("DocsProject", scenario_state["project"])
    try:
        generate_docs(project)
    except UnsupportedFormatError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the manifest begins with "{names}"'))
def then_manifest_begins(scenario_state: dict[str, object], names: str) -> None:
    project = typ.cast("DocsProject", scenario_state["project"])
    expected = names.split(", ")
    manifest = (project.output_dir / ".build").read_text(encoding="utf-8")
    assert manifest.splitlines()[: len(expected)] == expected


@then("the run fails with an unsupported format error")
def then_run_fails(scenario_state: dict[str, object]) -> None:
    error = scenario_state.get("error")
    assert isinstance(error, UnsupportedFormatError), "expected the run to fail"
    assert "notes.txt" in str(error)


@then("no output directory exists")
def then_no_output(scenario_state: dict[str, object]) -> None:
    project = typ.cast("DocsProject", scenario_state["project"])
    assert not project.output_dir.exists()
