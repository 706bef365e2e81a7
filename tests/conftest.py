"""Shared fixtures for markdown_docs tests.

The ``docs_project`` fixture lays out a small project inside ``tmp_path``:
three prose extras spread over two groups plus one ungrouped file, a
``docs.yaml`` configuration, and a ``nodes.json`` tree containing a module,
an exception, a task, and an implementation node. The working directory is
switched to the project root so relative output paths resolve there.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

import pytest

SAMPLE_NODES: list[dict[str, typ.Any]] = [
    {
        "id": "Demo",
        "title": "Demo",
        "type": "module",
        "doc": "Demo module.\n\nUse `Demo.greet/1` to say hello.",
        "source_url": "https://example.invalid/demo.ex",
        "docs": [
            {
                "id": "greet/1",
                "title": "greet/1",
                "type": "function",
                "signature": "greet(name)",
                "doc": "Greets `name`.\n\nReturns a string.",
                "specs": ["greet(String.t()) :: String.t()"],
            },
            {
                "id": "init/1",
                "title": "init/1",
                "type": "callback",
                "signature": "init(args)",
                "doc": "Initializes state.",
            },
        ],
        "typespecs": [
            {
                "id": "t/0",
                "title": "t/0",
                "type": "type",
                "signature": "t()",
                "specs": ["t() :: term()"],
            }
        ],
    },
    {
        "id": "Demo.Error",
        "title": "Demo.Error",
        "type": "exception",
        "doc": "Raised when greeting fails.",
    },
    {
        "id": "Mix.Tasks.Demo",
        "title": "demo",
        "type": "task",
        "doc": "Runs the demo.",
    },
    {"id": "Demo.Impl", "title": "Demo.Impl", "type": "impl"},
]


@dc.dataclass(slots=True)
class DocsProject:
    """Paths of a sample project laid out on disk."""

    root: Path
    config_path: Path
    nodes_path: Path
    output_dir: Path

    def write_extra(self, relative: str, content: str) -> Path:
        """Create or overwrite a prose source under the project root."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_config(self, extras: list[typ.Any], **extra_keys: str) -> None:
        """Rewrite ``docs.yaml`` with ``extras`` and the default group table."""
        lines = [
            "project: Demo",
            "version: 1.0.0",
            "output: doc",
            "groups_for_extras:",
            "  Guides:",
            "    - guides/*.md",
            "  Reference:",
            "    - re:^reference/",
        ]
        lines.extend(f"{key}: {value}" for key, value in extra_keys.items())
        lines.append("extras:")
        for entry in extras:
            if isinstance(entry, str):
                lines.append(f"  - {entry}")
            else:
                lines.append(f"  - path: {entry['path']}")
                lines.extend(
                    f"    {key}: {value}"
                    for key, value in entry.items()
                    if key != "path"
                )
        self.config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def write_nodes(self, nodes: list[dict[str, typ.Any]]) -> None:
        """Rewrite ``nodes.json`` with ``nodes``."""
        self.nodes_path.write_text(json.dumps(nodes), encoding="utf-8")

    def output_files(self) -> set[str]:
        """Return the names of every entry in the output directory."""
        return {path.name for path in self.output_dir.iterdir()}


@pytest.fixture
def docs_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> DocsProject:
    """Lay out the sample project and chdir into it."""
    monkeypatch.chdir(tmp_path)
    project = DocsProject(
        root=tmp_path,
        config_path=tmp_path / "docs.yaml",
        nodes_path=tmp_path / "nodes.json",
        output_dir=tmp_path / "doc",
    )
    project.write_extra("README.md", "Plain readme without a heading.\n")
    project.write_extra("reference/api.md", "# API\n\nSee `Demo.greet/1`.\n")
    project.write_extra(
        "guides/getting-started.md", "# Getting Started \nWelcome to `Demo`.\n"
    )
    project.write_config(
        ["README.md", "reference/api.md", "guides/getting-started.md"]
    )
    project.write_nodes(SAMPLE_NODES)
    return project
