"""Run independent page work items concurrently and collect results in order.

Both fan-out points of the pipeline (building prose pages and rendering
entity pages) hand :class:`RenderDispatcher` a flat list of thunks. Each
thunk reads shared immutable context and writes its own output, so no item
waits on another. Results come back indexed by submission position, never
by completion order, which keeps page sorting and the build manifest
deterministic across runs.

Example
-------
>>> dispatcher = RenderDispatcher(max_workers=2)
>>> dispatcher.map(str.upper, ["a", "b", "c"])
['A', 'B', 'C']
"""

from __future__ import annotations

import typing as typ
from concurrent.futures import Future, ThreadPoolExecutor, wait

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")
U = typ.TypeVar("U")


class RenderDispatcher:
    """Execute work items on a thread pool with index-ordered results."""

    def __init__(self, max_workers: int | None = None) -> None:
        """Initialize the dispatcher.

        Parameters
        ----------
        max_workers : int, optional
            Upper bound on concurrently running items. ``None`` uses the
            ``ThreadPoolExecutor`` default.
        """
        self.max_workers = max_workers

    def run(self, work_items: cabc.Sequence[cabc.Callable[[], T]]) -> list[T]:
        """Execute every item and return their results in submission order.

        Parameters
        ----------
        work_items : Sequence[Callable[[], T]]
            Independent thunks; ``work_items[i]`` produces ``result[i]``.

        Returns
        -------
        list[T]
            Results aligned with ``work_items`` regardless of which item
            finished first.

        Raises
        ------
        Exception
            The first failure in submission order, re-raised only after every
            item has finished. There is no timeout: long renders are waited
            for indefinitely.
        """
        if not work_items:
            return []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: dict[int, Future[T]] = {
                index: executor.submit(item) for index, item in enumerate(work_items)
            }
            wait(futures.values())
        for index in range(len(work_items)):
            exc = futures[index].exception()
            if exc is not None:
                raise exc
        return [futures[index].result() for index in range(len(work_items))]

    def map(self, func: cabc.Callable[[U], T], items: cabc.Iterable[U]) -> list[T]:
        """Apply ``func`` to each of ``items`` concurrently, preserving order."""
        return self.run([_bind(func, item) for item in items])


def _bind(func: cabc.Callable[[U], T], item: U) -> cabc.Callable[[], T]:
    """Return a thunk calling ``func(item)``."""

    def _thunk() -> T:
        return func(item)

    return _thunk


__all__ = ["RenderDispatcher"]
