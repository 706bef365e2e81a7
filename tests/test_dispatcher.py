"""Tests for the concurrent, order-preserving work dispatcher."""

from __future__ import annotations

import threading

import pytest

from markdown_docs.dispatcher import RenderDispatcher


def test_results_follow_submission_order_not_completion_order() -> None:
    """Item 1 finishes first and item 0 last, yet results stay indexed."""
    first_done = threading.Event()
    middle_done = threading.Event()
    finished: list[int] = []
    lock = threading.Lock()

    def _record(index: int) -> None:
        with lock:
            finished.append(index)

    def item0() -> str:
        middle_done.wait(timeout=5)
        _record(0)
        return "r0"

    def item1() -> str:
        _record(1)
        first_done.set()
        return "r1"

    def item2() -> str:
        first_done.wait(timeout=5)
        _record(2)
        middle_done.set()
        return "r2"

    results = RenderDispatcher(max_workers=3).run([item0, item1, item2])

    assert finished == [1, 2, 0], "items should have completed out of order"
    assert results == ["r0", "r1", "r2"]


def test_failure_is_raised_after_all_items_finish() -> None:
    """A failing item does not cut the remaining items short."""
    completed: list[int] = []

    def _work(index: int) -> int:
        if index == 1:
            msg = "render failed"
            raise RuntimeError(msg)
        completed.append(index)
        return index

    with pytest.raises(RuntimeError, match="render failed"):
        RenderDispatcher(max_workers=2).map(_work, range(5))

    assert sorted(completed) == [0, 2, 3, 4]


def test_first_failure_in_submission_order_wins() -> None:
    """When several items fail, the lowest index determines the error."""

    def _work(index: int) -> int:
        msg = f"item {index}"
        raise ValueError(msg)

    with pytest.raises(ValueError, match="item 0"):
        RenderDispatcher().map(_work, [0, 1, 2])


def test_empty_input_returns_empty_list() -> None:
    """No items means no pool and an empty result."""
    assert RenderDispatcher().run([]) == []
    assert RenderDispatcher().map(str, []) == []


def test_single_worker_runs_everything() -> None:
    """A worker bound of one still completes every item in order."""
    assert RenderDispatcher(max_workers=1).map(lambda n: n * n, [3, 1, 2]) == [9, 1, 4]
