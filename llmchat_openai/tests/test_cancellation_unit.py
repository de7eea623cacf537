"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late linking, and racing a
pending await against the token (same thread and cross-thread).
"""
from __future__ import annotations

import asyncio
import threading

import pytest

from llmchat_openai.base.cancellation import CancellationToken, ChatCancelledError


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101 - pytest assert in tests


def test_child_cancel_does_not_affect_parent():
    parent = CancellationToken()
    child = parent.child()
    child.cancel("local")
    assert parent.cancelled is False  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_raises_chat_cancelled_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(ChatCancelledError) as info:
        token.raise_if_cancelled()
    assert info.value.reason == "terminate"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_race_returns_result_when_not_cancelled():
    token = CancellationToken()

    async def work() -> int:
        await asyncio.sleep(0)
        return 42

    assert await token.race(work()) == 42  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_race_propagates_inner_exception():
    token = CancellationToken()

    async def broken() -> None:
        raise KeyError("inner")

    with pytest.raises(KeyError):
        await token.race(broken())


@pytest.mark.asyncio
async def test_race_interrupts_pending_await_on_cancel():
    token = CancellationToken()
    inner_cancelled = asyncio.Event()

    async def forever() -> None:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            inner_cancelled.set()
            raise

    loop = asyncio.get_running_loop()
    loop.call_later(0.01, token.cancel, "user")
    with pytest.raises(ChatCancelledError) as info:
        await asyncio.wait_for(token.race(forever()), timeout=2)
    assert info.value.reason == "user"  # nosec B101 - pytest assert in tests
    assert inner_cancelled.is_set()  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_race_on_already_cancelled_token_does_not_start_work():
    token = CancellationToken()
    token.cancel()
    started = False

    async def work() -> None:
        nonlocal started
        started = True

    with pytest.raises(ChatCancelledError):
        await token.race(work())
    assert started is False  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cancel_from_another_thread_wakes_the_loop():
    token = CancellationToken()
    timer = threading.Timer(0.02, token.cancel, args=("thread",))
    timer.start()
    try:
        with pytest.raises(ChatCancelledError):
            await asyncio.wait_for(token.race(asyncio.sleep(30)), timeout=2)
    finally:
        timer.cancel()


@pytest.mark.asyncio
async def test_race_discards_result_completed_alongside_cancellation():
    token = CancellationToken()
    discarded = []

    async def work() -> str:
        token.cancel("late")
        return "resource"

    async def discard(value: str) -> None:
        discarded.append(value)

    with pytest.raises(ChatCancelledError):
        await token.race(work(), discard=discard)
    assert discarded == ["resource"]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_native_task_cancellation_propagates_unchanged():
    token = CancellationToken()
    task = asyncio.ensure_future(token.race(asyncio.sleep(30)))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
