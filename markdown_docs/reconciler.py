"""Keep the output directory consistent across repeated documentation runs.

Every successful run records the filenames it wrote in a newline-delimited
manifest (``<output>/.build``). The next run reads that manifest before
writing anything and removes exactly the files it lists, so pages that
disappeared from the input do not linger while files the tool never wrote
are left alone. A directory without a manifest is treated as owned by this
tool: it is wiped and recreated.

The manifest is modelled as an explicit :class:`BuildManifest` value that
flows into and out of :class:`OutputReconciler`; nothing is cached between
runs except the file itself.

Examples
--------
>>> from pathlib import Path
>>> reconciler = OutputReconciler(Path("doc"))  # doctest: +SKIP
>>> previous = reconciler.prepare()  # doctest: +SKIP
>>> reconciler.write_page("readme.md", "# Readme\\n")  # doctest: +SKIP
'readme.md'
>>> reconciler.commit(["readme.md"]).filenames  # doctest: +SKIP
('readme.md',)
"""

from __future__ import annotations

import dataclasses as dc
import shutil
import sys
import typing as typ
from pathlib import Path

from ._constants import BUILD_MANIFEST

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class BuildManifest:
    """Ordered filenames written by one run, and where they are recorded."""

    path: Path
    filenames: tuple[str, ...] = ()

    @classmethod
    def read(cls, path: Path) -> BuildManifest | None:
        """Return the manifest stored at ``path``, or None when absent."""
        if not path.is_file():
            return None
        lines = path.read_text(encoding="utf-8").split("\n")
        return cls(path=path, filenames=tuple(line for line in lines if line))

    def write(self) -> None:
        """Persist the filenames one per line, each newline-terminated."""
        self.path.write_text(
            "".join(f"{name}\n" for name in self.filenames), encoding="utf-8"
        )

    def stale(self, produced: cabc.Iterable[str]) -> list[str]:
        """Return recorded filenames absent from ``produced``, in manifest order."""
        keep = set(produced)
        return [name for name in self.filenames if name not in keep]


class OutputReconciler:
    """Manage the pre-write cleanup and post-write manifest for one output dir."""

    def __init__(self, output_dir: Path, manifest_name: str = BUILD_MANIFEST) -> None:
        self.output_dir = output_dir
        self.manifest_path = output_dir / manifest_name

    def prepare(self) -> BuildManifest | None:
        """Clear the previous run's output before any page is written.

        When a manifest exists, every file it lists is removed (nothing has
        been produced yet, so all of them are stale) and the manifest itself
        is deleted. Files the manifest does not list are never touched.

        Without a manifest whatever sits at the output path is removed
        (recursively for a directory) and an empty directory is created in
        its place, on the assumption that the tool owns it exclusively.

        Returns
        -------
        BuildManifest or None
            The previous run's manifest, or ``None`` for a fresh directory.

        Raises
        ------
        OSError
            Any filesystem failure; the caller must abort the run. Files
            already deleted stay deleted.
        """
        previous = BuildManifest.read(self.manifest_path)
        if previous is None:
            if self.output_dir.is_dir():
                shutil.rmtree(self.output_dir)
            elif self.output_dir.exists():
                self.output_dir.unlink()
            self.output_dir.mkdir(parents=True, exist_ok=True)
            return None
        _remove_files(self.output_dir, previous.stale(()))
        self.manifest_path.unlink()
        return previous

    def write_page(self, filename: str, content: str) -> str:
        """Write ``content`` to ``filename``, warning when it already exists."""
        output = self.output_dir / filename
        if output.is_file():
            print(
                f"warning: file {_format_path(output)} already exists",
                file=sys.stderr,
            )
        output.write_text(content, encoding="utf-8")
        return filename

    def commit(self, filenames: cabc.Iterable[str]) -> BuildManifest:
        """Record ``filenames`` as this run's output; call once all writes succeeded."""
        manifest = BuildManifest(path=self.manifest_path, filenames=tuple(filenames))
        manifest.write()
        return manifest


def reconcile(
    output_dir: Path,
    previous_manifest_path: Path,
    produced_filenames: cabc.Sequence[str],
) -> BuildManifest:
    """Delete files a previous run wrote that ``produced_filenames`` no longer covers.

    This is the one-shot form of the reconciliation contract for output that
    some other step has already written. It computes ``previous - produced``
    from the manifest at ``previous_manifest_path``, deletes those files from
    ``output_dir``, and rewrites the manifest to list ``produced_filenames``
    in the given order. Without a previous manifest nothing is deleted: unlike
    ``OutputReconciler.prepare``, this runs after the pages exist, so a
    manifest-less directory is never wiped.

    Parameters
    ----------
    output_dir : Path
        Directory holding the generated files.
    previous_manifest_path : Path
        Manifest recorded by the previous run.
    produced_filenames : Sequence[str]
        Filenames produced by the current run, relative to ``output_dir``.

    Returns
    -------
    BuildManifest
        The manifest written for the current run.
    """
    previous = BuildManifest.read(previous_manifest_path)
    if previous is not None:
        _remove_files(output_dir, previous.stale(produced_filenames))
        previous_manifest_path.unlink()
    manifest = BuildManifest(
        path=previous_manifest_path, filenames=tuple(produced_filenames)
    )
    manifest.write()
    return manifest


def _remove_files(output_dir: Path, filenames: cabc.Iterable[str]) -> None:
    """Remove each listed file under ``output_dir``, skipping ones already gone.

    Entries that resolve outside ``output_dir`` (``..`` segments or absolute
    paths) are reported on stderr and left in place.
    """
    root = output_dir.resolve()
    for name in filenames:
        target = (output_dir / name).resolve()
        if not target.is_relative_to(root) or target == root:
            print(
                f"warning: skipping {name!r}, "
                f"not a file inside {_format_path(output_dir)}",
                file=sys.stderr,
            )
            continue
        target.unlink(missing_ok=True)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def relative_to_cwd(path: Path) -> Path:
    """Return ``path`` relative to the working directory when it lies beneath it."""
    return Path(_format_path(path))


__all__ = ["BuildManifest", "OutputReconciler", "reconcile", "relative_to_cwd"]
