"""Cyclopts CLI entrypoint for generating Markdown documentation directories.

The ``mddocs`` console script defined here renders a documentation tree
(exported as JSON by the extraction step) into a directory of Markdown files
and keeps that directory consistent across runs. Typical usage involves
running ``mddocs generate`` locally or in CI after extracting docs, and
``mddocs prune`` when another tool wrote the pages and only the stale-file
cleanup is needed.

Examples
--------
Generate docs for the default configuration:

>>> from markdown_docs.cli import main
>>> main()  # doctest: +SKIP

Generate into a custom directory:

>>> from markdown_docs.cli import app
>>> app(
...     ["generate", "--nodes", "nodes.json", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import BUILD_MANIFEST
from .config import load_docs_config
from .generator import MarkdownGenerator
from .nodes import load_nodes
from .reconciler import BuildManifest, reconcile, relative_to_cwd

DEFAULT_CONFIG = Path("docs.yaml")
DEFAULT_NODES = Path("nodes.json")

app = App(
    name="mddocs",
    config=cyclopts.config.Env("INPUT_", command=False),  # type: ignore[unknown-argument]
)


@app.command(help="Render a documentation tree into Markdown pages.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to docs config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    nodes: typ.Annotated[
        Path, Parameter(help="Path to the node tree JSON", env_var="INPUT_NODES")
    ] = DEFAULT_NODES,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Generate Markdown documentation for the configured project.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docs.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    nodes : Path, optional
        Path to the JSON node tree produced by the extraction step.
    output_dir : Path or None, optional
        Override for the configured output directory.

    Returns
    -------
    None
        Writes the Markdown pages and manifest, then prints the output
        directory.

    Raises
    ------
    ConfigError
        If the configuration or node tree is invalid, or an extra is not a
        Markdown file.
    FileNotFoundError
        If the configuration, node tree, or an extra source is missing.
    """
    docs_config = load_docs_config(config, output=output_dir)
    tree = load_nodes(nodes)
    output = MarkdownGenerator(docs_config).run(tree)
    print(f"wrote {output}")


@app.command(help="Remove files a previous run wrote that are no longer produced.")
def prune(
    produced: list[str],
    /,
    *,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output folder to reconcile", env_var="INPUT_OUTPUT_DIR")
    ],
    manifest: typ.Annotated[
        Path | None,
        Parameter(help="Manifest path; defaults to <output-dir>/.build"),
    ] = None,
) -> None:
    """Reconcile ``output_dir`` against the filenames produced by this run.

    Parameters
    ----------
    produced : list[str]
        Filenames, relative to ``output_dir``, that the current run wrote.
    output_dir : Path
        Directory holding the generated files.
    manifest : Path or None, optional
        Manifest recorded by the previous run.

    Returns
    -------
    None
        Deletes stale files, rewrites the manifest, and prints each removal.
    """
    manifest_path = manifest or output_dir / BUILD_MANIFEST
    output_dir.mkdir(parents=True, exist_ok=True)
    previous = BuildManifest.read(manifest_path)
    stale = previous.stale(produced) if previous is not None else []
    reconcile(output_dir, manifest_path, produced)
    for name in stale:
        print(f"removed {relative_to_cwd(output_dir / name)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `mddocs` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
