# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Single-delivery result handle.

A ResultHandle receives exactly one Result. It can be awaited from asyncio
code, blocked on from a plain thread, or observed with a callback. The
handle also carries the invocation's diagnostics (the signed wire request
and the raw wire response) so they never leak into the Result itself.

Cancellation:
    Abandoning a handle does not abort the invocation. Awaiting a handle from
    a task that is later cancelled leaves the handle intact, and in-flight
    network work runs to completion in the transport.
"""

import asyncio
import logging
import threading
import uuid
from collections.abc import Callable, Generator
from concurrent.futures import Future
from typing import Any

from ..exceptions import HandleAlreadyDeliveredError
from ..types.result import Result
from ..types.wire import Diagnostics

logger = logging.getLogger(__name__)


class ResultHandle:
    """
    A slot that is filled exactly once with a Result.

    Thread Safety:
        ``deliver`` may be called from any thread; waiters in other threads or
        event loops are woken safely.

    Example:
        >>> handle = client.send(OperationRequest("ListBuckets"))
        >>> result = await handle
        >>> handle.diagnostics.wire_response.status
        200
    """

    def __init__(self, invocation_id: str | None = None) -> None:
        self.invocation_id = invocation_id or uuid.uuid4().hex
        self._future: Future[Result] = Future()
        self._diagnostics = Diagnostics()
        self._lock = threading.Lock()

    @classmethod
    def delivered(
        cls, result: Result, diagnostics: Diagnostics | None = None
    ) -> "ResultHandle":
        """Create a handle that already holds ``result``."""
        handle = cls()
        handle.deliver(result, diagnostics)
        return handle

    def deliver(self, result: Result, diagnostics: Diagnostics | None = None) -> None:
        """
        Publish the result (and its diagnostics).

        Raises:
            HandleAlreadyDeliveredError: If a result was already delivered
        """
        with self._lock:
            if self._future.done():
                raise HandleAlreadyDeliveredError(
                    f"Result handle {self.invocation_id} already delivered"
                )
            if diagnostics is not None:
                self._diagnostics = diagnostics
            self._future.set_result(result)

    def deliver_once(
        self, result: Result, diagnostics: Diagnostics | None = None
    ) -> bool:
        """Deliver unless already delivered. Returns True if this call delivered."""
        try:
            self.deliver(result, diagnostics)
        except HandleAlreadyDeliveredError:
            logger.warning(
                f"Dropping duplicate result for invocation {self.invocation_id}: {result!r}"
            )
            return False
        return True

    def done(self) -> bool:
        return self._future.done()

    @property
    def diagnostics(self) -> Diagnostics:
        """Diagnostics recorded for this invocation (empty until delivered)."""
        return self._diagnostics

    def result(self, timeout: float | None = None) -> Result:
        """
        Block the calling thread until the result arrives.

        Do not call this from the event loop thread that runs the invocation.

        Raises:
            concurrent.futures.TimeoutError: If ``timeout`` elapses first
        """
        return self._future.result(timeout)

    async def get(self, timeout: float | None = None) -> Result:
        """
        Wait for the result from asyncio code.

        Raises:
            asyncio.TimeoutError: If ``timeout`` elapses first. The handle
                stays valid and can be awaited again.
        """
        waiter = asyncio.shield(asyncio.wrap_future(self._future))
        if timeout is None:
            return await waiter
        return await asyncio.wait_for(waiter, timeout)

    def add_done_callback(self, fn: Callable[["ResultHandle"], Any]) -> None:
        """Call ``fn(handle)`` once the result is delivered (possibly in another thread)."""
        self._future.add_done_callback(lambda _: fn(self))

    def __await__(self) -> Generator[Any, None, Result]:
        return self.get().__await__()

    def __repr__(self) -> str:
        state = "delivered" if self.done() else "pending"
        return f"<ResultHandle {self.invocation_id} {state}>"


__all__ = ["ResultHandle"]
