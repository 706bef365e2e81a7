r"""Typed documentation nodes consumed by the Markdown pipeline.

The extraction step that inspects a project hands the generator a tree of
:class:`DocNode` records: one per module, exception, or task, each carrying
its child functions, callbacks, guards, and types. This module defines that
tree, decodes it from JSON with ``msgspec``, and provides the total functions
over :class:`NodeType` that the renderer and the pipeline dispatch on.

Example
-------
>>> from markdown_docs.nodes import DocNode, NodeType, link_id, synopsis
>>> link_id("Enum.t/0", NodeType.TYPE)
't:Enum.t/0'
>>> synopsis("Maps over a list.\n\nMore detail.")
'Maps over a list'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

import msgspec

from .config import ConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class NodeType(str, enum.Enum):
    """Closed set of entity tags produced by the extraction step."""

    MODULE = "module"
    EXCEPTION = "exception"
    TASK = "task"
    FUNCTION = "function"
    MACRO = "macro"
    CALLBACK = "callback"
    MACROCALLBACK = "macrocallback"
    GUARD = "guard"
    TYPE = "type"
    OPAQUE = "opaque"
    IMPL = "impl"


@dc.dataclass(frozen=True, slots=True)
class DocNode:
    """A documented entity and its nested children.

    Attributes
    ----------
    id : str
        Unique identifier; page-level nodes use it as the output filename.
    title : str
        Display title.
    type : NodeType
        Entity tag used for bucket membership, link ids, and titles.
    doc : str or None
        Markdown documentation body.
    signature : str or None
        Call signature shown in detail headings.
    source_url : str or None
        Link to the entity's source code.
    deprecated : str or None
        Deprecation message, when the entity is deprecated.
    specs : tuple[str, ...]
        Type specifications rendered as a bullet list.
    annotations : tuple[str, ...]
        Short annotations such as ``"since 1.2"`` or ``"macro"``.
    docs : tuple[DocNode, ...]
        Child functions, macros, callbacks, and guards.
    typespecs : tuple[DocNode, ...]
        Child type nodes.
    """

    id: str
    title: str
    type: NodeType
    doc: str | None = None
    signature: str | None = None
    source_url: str | None = None
    deprecated: str | None = None
    specs: tuple[str, ...] = ()
    annotations: tuple[str, ...] = ()
    docs: tuple[DocNode, ...] = ()
    typespecs: tuple[DocNode, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class NodesMap:
    """Read-only partition of the linked tree shared by every render."""

    modules: tuple[DocNode, ...] = ()
    exceptions: tuple[DocNode, ...] = ()
    tasks: tuple[DocNode, ...] = ()


_NOT_MODULES = frozenset({NodeType.EXCEPTION, NodeType.IMPL, NodeType.TASK})


def filter_list(node_type: NodeType, nodes: cabc.Iterable[DocNode]) -> list[DocNode]:
    """Return the nodes belonging to the bucket named by ``node_type``.

    The ``module`` bucket is defined by exclusion: anything that is not an
    exception, an implementation, or a task. Every other bucket matches by
    exact type equality.
    """
    match node_type:
        case NodeType.MODULE:
            return [node for node in nodes if node.type not in _NOT_MODULES]
        case _:
            return [node for node in nodes if node.type == node_type]


def build_nodes_map(nodes: cabc.Sequence[DocNode]) -> NodesMap:
    """Partition ``nodes`` into the module, exception, and task buckets."""
    return NodesMap(
        modules=tuple(filter_list(NodeType.MODULE, nodes)),
        exceptions=tuple(filter_list(NodeType.EXCEPTION, nodes)),
        tasks=tuple(filter_list(NodeType.TASK, nodes)),
    )


def link_id(node_id: str, node_type: NodeType) -> str:
    """Return the anchor id for a child entity, prefixed by its kind."""
    match node_type:
        case NodeType.CALLBACK | NodeType.MACROCALLBACK:
            return f"c:{node_id}"
        case NodeType.TYPE | NodeType.OPAQUE:
            return f"t:{node_id}"
        case _:
            return node_id


def module_title(node: DocNode) -> str:
    """Return the page heading for a module-level node."""
    match node.type:
        case NodeType.TASK:
            return f"mix {node.title}"
        case NodeType.MODULE:
            return node.title
        case _:
            return f"{node.title} <small>{node.type.value}</small>"


_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_TRAILING_PUNCTUATION = re.compile(r"[.:\s]+$")


@typ.overload
def synopsis(doc: str) -> str: ...
@typ.overload
def synopsis(doc: None) -> None: ...
def synopsis(doc: str | None) -> str | None:
    """Return the first paragraph of ``doc`` without trailing ``.``/``:``."""
    if doc is None:
        return None
    if not doc:
        return ""
    first = _PARAGRAPH_BREAK.split(doc, maxsplit=1)[0].strip()
    return _TRAILING_PUNCTUATION.sub("", first).rstrip()


def get_specs(node: DocNode) -> list[str] | None:
    """Return the node's specs, or ``None`` when it declares none."""
    return list(node.specs) or None


def module_summary(node: DocNode) -> dict[str, list[DocNode]]:
    """Group a module's children into the summary categories."""
    callbacks = {NodeType.CALLBACK, NodeType.MACROCALLBACK}
    functions = {NodeType.FUNCTION, NodeType.MACRO}
    return {
        "callbacks": [doc for doc in node.docs if doc.type in callbacks],
        "functions": [doc for doc in node.docs if doc.type in functions],
        "guards": [doc for doc in node.docs if doc.type == NodeType.GUARD],
        "types": list(node.typespecs),
    }


def load_nodes(path: Path) -> list[DocNode]:
    """Decode a JSON array of :class:`DocNode` records from ``path``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigError
        If the payload does not match the node schema (for example an
        unknown ``type`` tag).
    """
    if not path.exists():
        msg = f"Node tree file '{path}' not found."
        raise FileNotFoundError(msg)
    try:
        return msgspec.json.decode(path.read_bytes(), type=list[DocNode])
    except msgspec.DecodeError as exc:
        msg = f"Invalid node tree in '{path}': {exc}"
        raise ConfigError(msg) from exc


__all__ = [
    "DocNode",
    "NodeType",
    "NodesMap",
    "build_nodes_map",
    "filter_list",
    "get_specs",
    "link_id",
    "load_nodes",
    "module_summary",
    "module_title",
    "synopsis",
]
