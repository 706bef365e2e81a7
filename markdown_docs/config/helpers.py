"""Utility helpers shared by the markdown_docs configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import re
from pathlib import Path

from .models import ConfigError, ExtraEntry, GroupPattern

REGEX_PREFIX = "re:"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: str | Path, base_dir: Path) -> Path:
    """Resolve ``value`` against ``base_dir`` unless it is already absolute."""
    path = Path(value)
    if path.is_absolute():
        return path
    return base_dir / path


def _build_extra_entry(payload: object, base_dir: Path) -> ExtraEntry:
    """Build an ExtraEntry from a bare path string or an override mapping."""
    match payload:
        case str() as path:
            return ExtraEntry(path=_resolve_path(path, base_dir), source=path)
        case {"path": str() as path, **overrides}:
            return ExtraEntry(
                path=_resolve_path(path, base_dir),
                filename=_optional_str(overrides.get("filename")),
                title=_optional_str(overrides.get("title")),
                source=path,
            )
        case _:
            msg = (
                "Extra entries must be a path or a mapping with 'path', "
                f"got {payload!r}."
            )
            raise ConfigError(msg)


def _build_extras(payload: object, base_dir: Path) -> tuple[ExtraEntry, ...]:
    """Normalize the ``extras`` list into ExtraEntry records."""
    if payload is None:
        return ()
    if not isinstance(payload, list):
        msg = "'extras' must be a list."
        raise ConfigError(msg)
    return tuple(_build_extra_entry(item, base_dir) for item in payload)


def _compile_pattern(pattern: str) -> GroupPattern:
    """Compile ``re:``-prefixed patterns, leaving globs and paths as strings."""
    if not pattern.startswith(REGEX_PREFIX):
        return pattern
    try:
        return re.compile(pattern.removeprefix(REGEX_PREFIX))
    except re.error as exc:
        msg = f"Invalid group pattern {pattern!r}: {exc}"
        raise ConfigError(msg) from exc


def _build_groups(payload: object) -> dict[str, tuple[GroupPattern, ...]]:
    """Validate the group table and return it with patterns compiled.

    The table must be a mapping of label to a list of pattern strings; its
    key order is the group ordering.
    """
    if payload is None:
        return {}
    if not isinstance(payload, cabc.Mapping):
        msg = "'groups_for_extras' must be a mapping of group label to patterns."
        raise ConfigError(msg)
    groups: dict[str, tuple[GroupPattern, ...]] = {}
    for label, patterns in payload.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list) or not all(
            isinstance(pattern, str) for pattern in patterns
        ):
            msg = f"Group '{label}' must list its patterns as strings."
            raise ConfigError(msg)
        groups[str(label)] = tuple(_compile_pattern(pattern) for pattern in patterns)
    return groups


def _build_deps(payload: object) -> dict[str, str]:
    """Validate the linker dependency table of module prefix to base URL."""
    if payload is None:
        return {}
    if not isinstance(payload, cabc.Mapping):
        msg = "'deps' must be a mapping of module prefix to base URL."
        raise ConfigError(msg)
    return {str(prefix): str(url).rstrip("/") for prefix, url in payload.items()}


def _parse_max_workers(value: object) -> int | None:
    """Return a positive worker bound or None for the pool default."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"'max_workers' must be a positive integer, got {value!r}."
        raise ConfigError(msg)
    return value


__all__ = [
    "REGEX_PREFIX",
    "_build_deps",
    "_build_extras",
    "_build_groups",
    "_optional_str",
    "_parse_max_workers",
    "_resolve_path",
]
