"""Typed dataclasses describing markdown_docs configuration structures."""

from __future__ import annotations

import dataclasses as dc
import re
from pathlib import Path

from .._constants import BUILD_MANIFEST

GroupPattern = str | re.Pattern[str]


class ConfigError(ValueError):
    """Raised when the docs configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class ExtraEntry:
    """A prose source contributing one page, with optional overrides.

    ``source`` keeps the path as written in the configuration so group
    patterns match what users wrote rather than the resolved location.
    """

    path: Path
    filename: str | None = None
    title: str | None = None
    source: str | None = None

    @property
    def match_key(self) -> str:
        """Return the path string that group patterns are matched against."""
        return self.source or self.path.as_posix()


@dc.dataclass(frozen=True, slots=True)
class DocsConfig:
    """A fully resolved documentation build definition.

    Attributes
    ----------
    project : str
        Project name shown in page footers.
    version : str or None
        Project version shown in page footers.
    output : Path
        Output directory owned by the generator.
    extras : tuple[ExtraEntry, ...]
        Prose sources in submission order.
    groups_for_extras : dict[str, tuple[GroupPattern, ...]]
        Ordered group table; key order defines the group ordering.
    canonical : str or None
        Canonical base URL. While a single entity page renders, this holds
        the page's own canonical URL instead.
    deps : dict[str, str]
        Module prefix to base URL mapping handed to the linker.
    max_workers : int or None
        Worker bound for concurrent builds; ``None`` lets the pool decide.
    manifest_name : str
        Name of the build manifest inside ``output``.
    """

    project: str = ""
    version: str | None = None
    output: Path = Path("doc")
    extras: tuple[ExtraEntry, ...] = ()
    groups_for_extras: dict[str, tuple[GroupPattern, ...]] = dc.field(
        default_factory=dict
    )
    canonical: str | None = None
    deps: dict[str, str] = dc.field(default_factory=dict)
    max_workers: int | None = None
    manifest_name: str = BUILD_MANIFEST

    @property
    def group_ordering(self) -> list[str]:
        """Return group labels in configured order."""
        return list(self.groups_for_extras)


__all__ = ["ConfigError", "DocsConfig", "ExtraEntry", "GroupPattern"]
