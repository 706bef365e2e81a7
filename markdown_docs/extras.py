r"""Normalize prose ("extra") sources into uniform :class:`Page` records.

Each extra is a Markdown file listed in the configuration, optionally with an
explicit output filename and title. Building one reads the file, links its
references through the linker, derives an id and a title, and assigns a
group from the group table. Pages are built concurrently and then sorted by
group rank so the output order never depends on which build finished first.

Example
-------
>>> from markdown_docs.extras import extract_title, input_to_title, title_to_id
>>> extract_title("# Getting Started \nWelcome.")
'Getting Started'
>>> title_to_id(input_to_title("guides/Getting Started.md"))
'getting-started'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from ._constants import ALLOWED_EXTRA_EXTENSIONS, PAGE_FILENAME_TEMPLATE
from .config import ConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import ExtraEntry
    from .dispatcher import RenderDispatcher
    from .grouping import GroupMatcher
    from .linker import Linker

H1_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t]*$", re.MULTILINE)


class UnsupportedFormatError(ConfigError):
    """Raised when an extra source is not a Markdown file."""


@dc.dataclass(frozen=True, slots=True)
class Page:
    """One rendered Markdown output unit.

    Attributes
    ----------
    id : str
        Identifier from which the output filename ``<id>.md`` derives.
    title : str
        Page title, either configured or extracted from the content.
    content : str
        Fully rendered Markdown written verbatim to disk.
    group : str or None
        Group label used for ordering; ``None`` sorts after every group.
    canonical_url : str or None
        Canonical URL of the published page, when a base URL is configured.
    """

    id: str
    title: str
    content: str
    group: str | None = None
    canonical_url: str | None = None

    @property
    def filename(self) -> str:
        """Return the output filename for this page."""
        return PAGE_FILENAME_TEMPLATE.format(id=self.id)


def valid_extension_name(path: str | Path) -> bool:
    """Return True when ``path`` has an accepted extension (case-insensitive)."""
    return Path(path).suffix.lower() in ALLOWED_EXTRA_EXTENSIONS


def validate_extras(entries: cabc.Iterable[ExtraEntry]) -> None:
    """Reject the first entry whose source is not a Markdown file.

    Raises
    ------
    UnsupportedFormatError
        If any entry has an extension other than ``.md``.
    """
    allowed = ", ".join(ALLOWED_EXTRA_EXTENSIONS)
    for entry in entries:
        if not valid_extension_name(entry.path):
            msg = (
                f"file format not recognized for '{entry.match_key}', "
                f"allowed format is: {allowed}"
            )
            raise UnsupportedFormatError(msg)


def input_to_title(path: str | Path) -> str:
    """Return the base filename of ``path`` without its extension."""
    return Path(path).stem


def title_to_id(title: str) -> str:
    """Create a page id from ``title``: spaces become hyphens, case is folded."""
    return title.replace(" ", "-").lower()


def extract_title(content: str) -> str | None:
    """Return the text of the first non-blank level-one heading, or None."""
    for match in H1_PATTERN.finditer(content):
        title = match.group(1).strip()
        if title:
            return title
    return None


def build_extra(
    entry: ExtraEntry,
    *,
    linker: Linker,
    context: typ.Any,
    matcher: GroupMatcher,
) -> Page:
    """Build a :class:`Page` from one extra entry.

    Parameters
    ----------
    entry : ExtraEntry
        Source path with optional ``filename`` and ``title`` overrides.
    linker : Linker
        Collaborator used to link references in the content.
    context : Any
        Link context compiled from the node tree.
    matcher : GroupMatcher
        Group table used to assign the page's group.

    Returns
    -------
    Page
        The normalized page. The title is extracted after linking, so it
        reflects linked text.

    Raises
    ------
    UnsupportedFormatError
        If the source is not a Markdown file.
    FileNotFoundError
        If the source does not exist.
    """
    validate_extras([entry])
    page_id = entry.filename or title_to_id(input_to_title(entry.path))
    content = linker.resolve_prose(entry.path.read_text(encoding="utf-8"), context)
    title = entry.title or extract_title(content) or input_to_title(entry.path)
    return Page(
        id=page_id,
        title=title,
        content=content,
        group=matcher.match_extra(entry.match_key),
    )


def build_extras(
    entries: cabc.Sequence[ExtraEntry],
    *,
    linker: Linker,
    context: typ.Any,
    matcher: GroupMatcher,
    dispatcher: RenderDispatcher,
) -> list[Page]:
    """Build every extra concurrently and return them sorted by group rank."""
    pages = dispatcher.map(
        lambda entry: build_extra(
            entry, linker=linker, context=context, matcher=matcher
        ),
        entries,
    )
    return matcher.sort_pages(pages)


__all__ = [
    "Page",
    "UnsupportedFormatError",
    "build_extra",
    "build_extras",
    "extract_title",
    "input_to_title",
    "title_to_id",
    "valid_extension_name",
    "validate_extras",
]
