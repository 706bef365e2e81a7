"""Resolve cross references between documented entities.

The pipeline treats linking as a collaborator with three operations:
``compile`` builds a lookup context from the whole node tree once per run,
``resolve_all`` returns a linked copy of the tree, and ``resolve_prose``
links free-form Markdown such as extra pages. Any object satisfying
:class:`Linker` can be injected; :class:`AutoLinker` is the default.

:class:`AutoLinker` turns inline-code references into Markdown links when
the target is known:

- ``Mod`` links to ``Mod.md``;
- ``Mod.fun/2`` links to ``Mod.md#fun/2``;
- ``t:Mod.t/0`` and ``c:Mod.init/1`` link to type and callback anchors;
- modules under a configured dependency prefix link to that dependency's
  documentation site instead.

References inside fenced code blocks or already wrapped in a link are left
untouched.

Example
-------
>>> from markdown_docs.nodes import DocNode, NodeType
>>> linker = AutoLinker()
>>> nodes = [DocNode(id="Enum", title="Enum", type=NodeType.MODULE)]
>>> context = linker.compile(nodes, ".md", {})
>>> linker.resolve_prose("See `Enum`.", context)
'See [`Enum`](Enum.md).'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .nodes import DocNode, NodeType, link_id

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class Linker(typ.Protocol):
    """Contract for the cross-reference collaborator."""

    def compile(
        self,
        nodes: cabc.Sequence[DocNode],
        extension: str,
        deps: cabc.Mapping[str, str],
    ) -> typ.Any:
        """Build the lookup context used by the resolve operations."""
        ...

    def resolve_all(
        self, nodes: cabc.Sequence[DocNode], context: typ.Any
    ) -> list[DocNode]:
        """Return a copy of ``nodes`` with references in their docs linked."""
        ...

    def resolve_prose(self, content: str, context: typ.Any) -> str:
        """Return ``content`` with references linked."""
        ...


@dc.dataclass(frozen=True, slots=True)
class LinkContext:
    """Lookup tables compiled from the node tree."""

    extension: str
    anchors: dict[str, frozenset[str]]
    deps: dict[str, str]


INLINE_CODE_PATTERN = re.compile(r"(?<!\[)`([^`\n]+)`(?!\]\()")
FENCED_BLOCK_PATTERN = re.compile(
    r"(^[ ]{0,3}(?:```|~~~).*?^[ ]{0,3}(?:```|~~~)[^\n]*$)",
    re.MULTILINE | re.DOTALL,
)
MODULE_REF_PATTERN = re.compile(r"^[A-Z]\w*(?:\.[A-Z]\w*)*$")
MEMBER_REF_PATTERN = re.compile(
    r"^(?:(?P<kind>[tc]):)?(?P<module>[A-Z]\w*(?:\.[A-Z]\w*)*)"
    r"\.(?P<name>[a-z_]\w*[!?]?)/(?P<arity>\d+)$"
)
_KIND_TYPES = {"t": NodeType.TYPE, "c": NodeType.CALLBACK}


class AutoLinker:
    """Link inline-code entity references to generated Markdown pages."""

    def compile(
        self,
        nodes: cabc.Sequence[DocNode],
        extension: str,
        deps: cabc.Mapping[str, str],
    ) -> LinkContext:
        """Index every page-level node and the anchors of its children."""
        anchors = {
            node.id: frozenset(
                link_id(child.id, child.type)
                for child in (*node.docs, *node.typespecs)
            )
            for node in nodes
        }
        return LinkContext(extension=extension, anchors=anchors, deps=dict(deps))

    def resolve_all(
        self, nodes: cabc.Sequence[DocNode], context: LinkContext
    ) -> list[DocNode]:
        """Return a copy of ``nodes`` whose docs, at every depth, are linked."""
        return [self._link_node(node, context) for node in nodes]

    def resolve_prose(self, content: str, context: LinkContext) -> str:
        """Link references in ``content`` outside fenced code blocks."""
        parts = FENCED_BLOCK_PATTERN.split(content)
        # split() with one group alternates prose and fenced blocks
        return "".join(
            part if index % 2 else self._link_inline(part, context)
            for index, part in enumerate(parts)
        )

    def _link_node(self, node: DocNode, context: LinkContext) -> DocNode:
        return dc.replace(
            node,
            doc=self.resolve_prose(node.doc, context) if node.doc else node.doc,
            docs=tuple(self._link_node(child, context) for child in node.docs),
            typespecs=tuple(
                self._link_node(child, context) for child in node.typespecs
            ),
        )

    def _link_inline(self, text: str, context: LinkContext) -> str:
        def _repl(match: re.Match[str]) -> str:
            ref = match.group(1).strip()
            target = self._target(ref, context)
            if target is None:
                return match.group(0)
            return f"[`{ref}`]({target})"

        return INLINE_CODE_PATTERN.sub(_repl, text)

    def _target(self, ref: str, context: LinkContext) -> str | None:
        """Return the URL a reference points at, or None when unknown."""
        if MODULE_REF_PATTERN.match(ref):
            return self._module_url(ref, context)

        member = MEMBER_REF_PATTERN.match(ref)
        if member is None:
            return None
        module = member.group("module")
        node_type = _KIND_TYPES.get(member.group("kind") or "", NodeType.FUNCTION)
        anchor = link_id(f"{member.group('name')}/{member.group('arity')}", node_type)
        base = self._module_url(module, context)
        if base is None:
            return None
        if module in context.anchors and anchor not in context.anchors[module]:
            return None
        return f"{base}#{anchor}"

    @staticmethod
    def _module_url(module: str, context: LinkContext) -> str | None:
        if module in context.anchors:
            return f"{module}{context.extension}"
        for prefix, base_url in context.deps.items():
            if module == prefix or module.startswith(f"{prefix}."):
                return f"{base_url}/{module}.html"
        return None


__all__ = ["AutoLinker", "LinkContext", "Linker"]
