"""Common literal values used across markdown_docs.

These constants keep filenames and extension rules centralized so the
reconciler, the page builder, and tests can import the same values without
drifting. Intended for internal use within the markdown_docs package.

Examples
--------
>>> from markdown_docs import _constants
>>> _constants.BUILD_MANIFEST
'.build'
>>> _constants.PAGE_FILENAME_TEMPLATE.format(id="getting-started")
'getting-started.md'
"""

BUILD_MANIFEST = ".build"
PAGE_EXTENSION = ".md"
PAGE_FILENAME_TEMPLATE = "{id}" + PAGE_EXTENSION
ALLOWED_EXTRA_EXTENSIONS = (".md",)
LINK_EXTENSION = ".md"
