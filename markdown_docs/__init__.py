"""Render documentation trees into reconciled directories of Markdown pages.

This package exposes the CLI entry points used by ``mddocs`` along with the
pipeline pieces: the page model builder, the group ordering service, the
concurrent render dispatcher, and the output reconciler.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``MarkdownGenerator``: Pipeline orchestrator for programmatic use.
- ``run``: Generate docs for a node tree with the default collaborators.

Examples
--------
>>> from markdown_docs import main
>>> main()  # doctest: +SKIP
>>> from markdown_docs import run
>>> run(nodes, config)  # doctest: +SKIP
PosixPath('doc')
"""

from __future__ import annotations

from .cli import app, main
from .generator import MarkdownGenerator, run

__all__ = ["MarkdownGenerator", "app", "main", "run"]
