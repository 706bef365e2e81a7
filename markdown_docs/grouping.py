"""Assign prose pages to configured groups and rank them for output order."""

from __future__ import annotations

import fnmatch
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import GroupPattern
    from .extras import Page


class GroupMatcher:
    """Match extra sources to group labels and rank labels by table order.

    The group table maps each label to the patterns that select its pages.
    Patterns are exact paths, ``fnmatch`` globs, or compiled regular
    expressions. The table's key order is the group ordering: a page ranks by
    the index of its group, and pages without a known group rank last.

    Examples
    --------
    >>> matcher = GroupMatcher({"Guides": ("guides/*.md",), "Reference": ()})
    >>> matcher.match_extra("guides/intro.md")
    'Guides'
    >>> matcher.group_index("Reference"), matcher.group_index(None)
    (1, 2)
    """

    def __init__(
        self, groups: cabc.Mapping[str, cabc.Sequence[GroupPattern]] | None = None
    ) -> None:
        self.groups: dict[str, tuple[GroupPattern, ...]] = {
            label: tuple(patterns) for label, patterns in (groups or {}).items()
        }
        self._ordering = list(self.groups)

    def group_index(self, label: str | None) -> int:
        """Return the rank of ``label``; unknown or absent labels rank last."""
        if label is None or label not in self.groups:
            return len(self._ordering)
        return self._ordering.index(label)

    def match_extra(self, path: str) -> str | None:
        """Return the first group whose patterns match ``path``, if any."""
        for label, patterns in self.groups.items():
            if any(_matches(pattern, path) for pattern in patterns):
                return label
        return None

    def sort_pages(self, pages: cabc.Iterable[Page]) -> list[Page]:
        """Return ``pages`` ordered by group rank, keeping submission order on ties."""
        return sorted(pages, key=lambda page: self.group_index(page.group))


def _matches(pattern: GroupPattern, path: str) -> bool:
    """Return True when ``path`` equals, globs, or regex-matches ``pattern``."""
    if isinstance(pattern, re.Pattern):
        return pattern.search(path) is not None
    return path == pattern or fnmatch.fnmatchcase(path, pattern)


__all__ = ["GroupMatcher"]
