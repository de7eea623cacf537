"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the client to terminate
in-flight requests and streams early. Cancellation is signalled from any
thread; awaiting coroutines are woken through their event loop with
``call_soon_threadsafe`` so a pending network read is interrupted instead of
waiting for the next chunk to arrive.
"""

from __future__ import annotations

import asyncio
from threading import Lock
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from ..errors import ChatCancelledError
from .state import State

T = TypeVar("T")

_Waiter = Tuple[asyncio.AbstractEventLoop, "asyncio.Future[None]"]


def _release(fut: "asyncio.Future[None]") -> None:
    if not fut.done():
        fut.set_result(None)


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` from any thread. Child tokens inherit
    cancellation when the parent is cancelled, which lets a stream own a
    private token while still honouring one supplied by the caller.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._waiters: List[_Waiter] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, wake waiters and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            waiters = list(self._waiters)
            self._waiters.clear()
        for loop, fut in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(_release, fut)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``ChatCancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise ChatCancelledError(self._state.reason)

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        loop = asyncio.get_running_loop()
        fut: "asyncio.Future[None]" = loop.create_future()
        entry = (loop, fut)
        with self._lock:
            if self._state.cancelled:
                return
            self._waiters.append(entry)
        try:
            await fut
        finally:
            with self._lock:
                if entry in self._waiters:
                    self._waiters.remove(entry)

    async def race(
        self,
        awaitable: Awaitable[T],
        *,
        discard: Optional[Callable[[T], Awaitable[None]]] = None,
    ) -> T:
        """Await ``awaitable`` unless the token is cancelled first.

        When cancellation wins, the pending awaitable is cancelled and
        ``ChatCancelledError`` is raised. A result that completed in the same
        loop iteration is handed to ``discard`` (e.g. to close a response)
        instead of being returned. Native task cancellation of the caller
        cancels the inner awaitable the same way and propagates unchanged.
        """
        if self._state.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise ChatCancelledError(self._state.reason)
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self.wait())
        won = False
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
            won = task.done() and not self._state.cancelled
        finally:
            if not won:
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
                if discard is not None and not task.cancelled() and task.exception() is None:
                    await discard(task.result())
            waiter.cancel()
            await asyncio.gather(waiter, return_exceptions=True)
        if not won:
            raise ChatCancelledError(self._state.reason)
        return task.result()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
