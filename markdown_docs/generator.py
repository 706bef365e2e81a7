"""High-level orchestration for Markdown documentation generation.

This module wires the pipeline into a single pass over a documentation tree.
:class:`MarkdownGenerator` consumes a :class:`~markdown_docs.config.DocsConfig`
and a list of :class:`~markdown_docs.nodes.DocNode` records, then:

1. normalizes the output directory to a resolved absolute path;
2. validates the extras and clears the previous run's output;
3. links the whole tree once;
4. partitions the linked tree into modules, exceptions, and tasks;
5. builds the prose pages concurrently and orders them by group;
6. writes the prose pages;
7. renders and writes every entity page concurrently;
8. records the written filenames in the build manifest;
9. returns the output directory relative to the working directory.

Any failure aborts the run before the manifest is written.

Example
-------
>>> from pathlib import Path
>>> from markdown_docs.config import load_docs_config
>>> from markdown_docs.generator import MarkdownGenerator
>>> from markdown_docs.nodes import load_nodes
>>> config = load_docs_config(Path("docs.yaml"))  # doctest: +SKIP
>>> nodes = load_nodes(Path("nodes.json"))  # doctest: +SKIP
>>> MarkdownGenerator(config).run(nodes)  # doctest: +SKIP
PosixPath('doc')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import LINK_EXTENSION, PAGE_FILENAME_TEMPLATE
from .dispatcher import RenderDispatcher
from .extras import build_extras, validate_extras
from .grouping import GroupMatcher
from .linker import AutoLinker
from .nodes import build_nodes_map
from .reconciler import OutputReconciler, relative_to_cwd
from .renderer import MarkdownPageRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import DocsConfig
    from .linker import Linker
    from .nodes import DocNode, NodesMap


class EntityPageRenderer(typ.Protocol):
    """Contract for the collaborator that renders one entity page."""

    def render_entity_page(
        self, node: DocNode, nodes_map: NodesMap, config: DocsConfig
    ) -> str:
        """Return the Markdown content for ``node``."""
        ...


class MarkdownGenerator:
    """Render a documentation tree into a reconciled Markdown directory."""

    def __init__(
        self,
        config: DocsConfig,
        *,
        linker: Linker | None = None,
        renderer: EntityPageRenderer | None = None,
        dispatcher: RenderDispatcher | None = None,
    ) -> None:
        """Initialize the generator with configuration and collaborators.

        Parameters
        ----------
        config : DocsConfig
            Build configuration describing the output directory, extras,
            group table, canonical base URL, and linker dependencies.
        linker : Linker, optional
            Cross-reference collaborator; defaults to :class:`AutoLinker`.
        renderer : EntityPageRenderer, optional
            Entity page collaborator; defaults to
            :class:`~markdown_docs.renderer.MarkdownPageRenderer`.
        dispatcher : RenderDispatcher, optional
            Concurrent executor; defaults to one bounded by
            ``config.max_workers``.
        """
        self.config = dc.replace(config, output=config.output.expanduser().resolve())
        self.linker = linker or AutoLinker()
        self.renderer = renderer or MarkdownPageRenderer()
        self.dispatcher = dispatcher or RenderDispatcher(config.max_workers)
        self.matcher = GroupMatcher(self.config.groups_for_extras)
        self.reconciler = OutputReconciler(
            self.config.output, self.config.manifest_name
        )

    def run(self, nodes: cabc.Sequence[DocNode]) -> Path:
        """Generate every page for ``nodes`` and reconcile the output directory.

        Returns
        -------
        Path
            The output directory relative to the working directory, or the
            absolute path when it lies outside it.

        Raises
        ------
        UnsupportedFormatError
            Raised before any file is touched when an extra is not Markdown.
        FileNotFoundError
            Raised when an extra source is missing.
        OSError
            Raised on filesystem failures while cleaning or writing; the
            manifest is not written in that case.
        """
        validate_extras(self.config.extras)
        self.reconciler.prepare()

        context = self.linker.compile(nodes, LINK_EXTENSION, self.config.deps)
        linked = self.linker.resolve_all(nodes, context)
        nodes_map = build_nodes_map(linked)

        extras = build_extras(
            self.config.extras,
            linker=self.linker,
            context=context,
            matcher=self.matcher,
            dispatcher=self.dispatcher,
        )
        generated = [
            self.reconciler.write_page(page.filename, page.content) for page in extras
        ]
        for bucket in (nodes_map.modules, nodes_map.exceptions, nodes_map.tasks):
            generated.extend(self._generate_list(bucket, nodes_map))

        self.reconciler.commit(generated)
        return relative_to_cwd(self.config.output)

    def _generate_list(
        self, nodes: cabc.Sequence[DocNode], nodes_map: NodesMap
    ) -> list[str]:
        """Render and write one bucket of entity pages concurrently."""
        return self.dispatcher.map(
            lambda node: self._generate_entity_page(node, nodes_map), nodes
        )

    def _generate_entity_page(self, node: DocNode, nodes_map: NodesMap) -> str:
        """Render ``node`` with its canonical URL set and write it to disk."""
        filename = PAGE_FILENAME_TEMPLATE.format(id=node.id)
        config = self._with_canonical_url(filename)
        content = self.renderer.render_entity_page(node, nodes_map, config)
        return self.reconciler.write_page(filename, content)

    def _with_canonical_url(self, filename: str) -> DocsConfig:
        """Return the config with ``canonical`` pointing at ``filename``."""
        if not self.config.canonical:
            return self.config
        canonical_url = f"{self.config.canonical.rstrip('/')}/{filename}"
        return dc.replace(self.config, canonical=canonical_url)


def run(nodes: cabc.Sequence[DocNode], config: DocsConfig) -> Path:
    """Generate Markdown documentation for ``nodes`` with the default collaborators."""
    return MarkdownGenerator(config).run(nodes)


__all__ = ["EntityPageRenderer", "MarkdownGenerator", "run"]
