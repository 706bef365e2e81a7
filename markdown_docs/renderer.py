"""Render entity nodes into Markdown pages with shared Jinja templates."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .nodes import get_specs, link_id, module_summary, module_title, synopsis

if typ.TYPE_CHECKING:
    from .config import DocsConfig
    from .nodes import DocNode, NodesMap

SUMMARY_SECTIONS: tuple[dict[str, str], ...] = (
    {"key": "types", "label": "Types"},
    {"key": "functions", "label": "Functions"},
    {"key": "guards", "label": "Guards"},
    {"key": "callbacks", "label": "Callbacks"},
)
_HTML_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))
_URI_SAFE = ":/?#[]@!$&'()*+,;=%~"


def h(value: str) -> str:
    """Escape the HTML-special characters ``& < > "`` in ``value``."""
    for char, escape in _HTML_ESCAPES:
        value = value.replace(char, escape)
    return value


def enc_h(value: str) -> str:
    """Percent-encode ``value`` as a URI, then HTML-escape it."""
    return h(quote(value, safe=_URI_SAFE))


def table_cell(value: str | None) -> str:
    """Flatten ``value`` into a single Markdown table cell."""
    if not value:
        return ""
    return " ".join(value.split()).replace("|", "\\|")


def detail_section(node: DocNode) -> str:
    """Return the Markdown block documenting one child entity.

    The block opens with an HTML anchor matching :func:`link_id` so summary
    tables and the linker can target it, followed by the signature heading,
    annotations, specs, any deprecation notice, and the docs.
    """
    parts = [f'<a id="{enc_h(link_id(node.id, node.type))}"></a>\n\n']
    header = f"### {node.signature or node.id}"
    if node.source_url:
        header = f"{header} ([Source]({enc_h(node.source_url)}))"
    parts.append(f"{header}\n\n")
    if node.annotations:
        parts.append(" ".join(f"({annotation})" for annotation in node.annotations))
        parts.append("\n\n")
    specs = get_specs(node)
    if specs:
        parts.extend(f"- `{spec}`\n" for spec in specs)
        parts.append("\n")
    if node.deprecated:
        parts.append(
            f"*This {node.type.value} is deprecated. {h(node.deprecated)}.*\n\n"
        )
    parts.append(node.doc or "")
    return "".join(parts).strip()


def navigation(node: DocNode, nodes_map: NodesMap) -> str:
    """Return previous/next links among the pages sharing ``node``'s bucket."""
    for bucket in (nodes_map.modules, nodes_map.exceptions, nodes_map.tasks):
        ids = [entry.id for entry in bucket]
        if node.id not in ids:
            continue
        index = ids.index(node.id)
        links: list[str] = []
        if index > 0:
            links.append(_page_link(bucket[index - 1], "\u2190 "))
        if index + 1 < len(bucket):
            links.append(_page_link(bucket[index + 1], "", " \u2192"))
        return " | ".join(links)
    return ""


def _page_link(node: DocNode, before: str = "", after: str = "") -> str:
    return f"[{before}{node.title}{after}]({enc_h(node.id)}.md)"


class MarkdownPageRenderer:
    """Render module, exception, and task pages from Jinja templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``module_page.md.jinja`` and
            ``footer.md.jinja``; defaults to the package templates.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters.update(
            h=h, enc_h=enc_h, synopsis=synopsis, table_cell=table_cell
        )
        self.env.globals.update(
            detail_section=detail_section,
            link_id=link_id,
            module_title=module_title,
        )
        self.template = self.env.get_template("module_page.md.jinja")

    def render_entity_page(
        self, node: DocNode, nodes_map: NodesMap, config: DocsConfig
    ) -> str:
        """Return the Markdown page for a module-level ``node``.

        Parameters
        ----------
        node : DocNode
            Linked module, exception, or task node.
        nodes_map : NodesMap
            Every page-level node of the run, for cross-page listings.
        config : DocsConfig
            Build configuration; ``canonical`` holds this page's URL.
        """
        context = {
            "module": node,
            "summary": module_summary(node),
            "sections": SUMMARY_SECTIONS,
            "nodes_map": nodes_map,
            "config": config,
            "navigation": navigation(node, nodes_map),
        }
        return self.template.render(**context)


__all__ = [
    "MarkdownPageRenderer",
    "detail_section",
    "enc_h",
    "h",
    "navigation",
    "table_cell",
]
