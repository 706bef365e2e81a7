"""Load docs configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import BUILD_MANIFEST
from .helpers import (
    _build_deps,
    _build_extras,
    _build_groups,
    _optional_str,
    _parse_max_workers,
    _resolve_path,
)
from .models import ConfigError, DocsConfig


def load_docs_config(path: Path, *, output: Path | None = None) -> DocsConfig:
    """Load the YAML configuration describing a Markdown documentation build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docs.yaml``). Relative extra paths and the output directory resolve
        against the file's parent directory.
    output : Path, optional
        Override for the configured output directory.

    Returns
    -------
    DocsConfig
        Parsed configuration including extras, the group table, linker
        dependencies, and the output directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the top-level structure is not a mapping or any section is
        malformed (for example a group table that is not a mapping of labels
        to pattern lists).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from markdown_docs.config import load_docs_config
    >>> config = load_docs_config(Path("docs.yaml"))  # doctest: +SKIP
    >>> config.group_ordering  # doctest: +SKIP
    ['Guides', 'Reference']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    output_dir = output or _resolve_path(raw.get("output", "doc"), base_dir)
    return DocsConfig(
        project=str(raw.get("project", "") or ""),
        version=_optional_str(raw.get("version")),
        output=output_dir,
        extras=_build_extras(raw.get("extras"), base_dir),
        groups_for_extras=_build_groups(raw.get("groups_for_extras")),
        canonical=_optional_str(raw.get("canonical")),
        deps=_build_deps(raw.get("deps")),
        max_workers=_parse_max_workers(raw.get("max_workers")),
        manifest_name=str(raw.get("manifest_name", BUILD_MANIFEST)),
    )


__all__ = ["load_docs_config"]
