"""Load and validate docs configuration YAML for Markdown documentation builds.

This subpackage parses the project's ``docs.yaml`` file, resolves extra page
sources relative to the file, validates the group table and linker
dependencies, and produces a frozen :class:`DocsConfig` that the pipeline
consumes. The primary entry point is :func:`load_docs_config`.

Examples
--------
>>> from pathlib import Path
>>> from markdown_docs.config import load_docs_config
>>> config = load_docs_config(Path("docs.yaml"))  # doctest: +SKIP
>>> [entry.path.name for entry in config.extras]  # doctest: +SKIP
['README.md', 'getting-started.md']
"""

from .loader import load_docs_config
from .models import ConfigError, DocsConfig, ExtraEntry, GroupPattern

__all__ = [
    "ConfigError",
    "DocsConfig",
    "ExtraEntry",
    "GroupPattern",
    "load_docs_config",
]
