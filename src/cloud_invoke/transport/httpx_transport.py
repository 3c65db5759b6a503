# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP transport built on httpx.

Each submission runs as its own asyncio task. Network failures are reported
to the sink as a WireResponse carrying an anomaly category and the httpx
exception as cause; they are never raised.

Failure mapping:
    httpx.ConnectTimeout    -> unavailable
    httpx.TimeoutException  -> busy
    httpx.ConnectError      -> unavailable
    other httpx.HTTPError   -> fault
    any other exception     -> fault
    task cancelled          -> interrupted
"""

import asyncio
import logging
from typing import Any

import httpx

from ..exceptions import TransportError
from ..protocols.transport import ResponseSink
from ..types.anomaly import BUSY, FAULT, INTERRUPTED, UNAVAILABLE
from ..types.wire import WireRequest, WireResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _category_for_error(error: httpx.HTTPError) -> str:
    if isinstance(error, httpx.ConnectTimeout):
        return UNAVAILABLE
    if isinstance(error, httpx.TimeoutException):
        return BUSY
    if isinstance(error, httpx.ConnectError):
        return UNAVAILABLE
    return FAULT


class HttpxTransport:
    """
    Transport that performs requests with an ``httpx.AsyncClient``.

    Attributes:
        timeout: Per-request timeout in seconds, applied by httpx

    Example:
        >>> async with HttpxTransport(timeout=10.0) as transport:
        ...     client = create_client(service, creds, transport)
        ...     result = await client.invoke("ListBuckets")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds (ignored when ``client`` is given)
            client: Pre-configured AsyncClient; the transport does not close it
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def submit(self, request: WireRequest, sink: ResponseSink) -> None:
        """
        Schedule ``request`` on the running loop; ``sink`` gets one response.

        Raises:
            TransportError: If the transport is closed or no loop is running
        """
        if self._closed:
            raise TransportError("Transport is closed")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise TransportError("HttpxTransport.submit requires a running event loop") from None

        task = loop.create_task(self._perform(request, sink))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _perform(self, request: WireRequest, sink: ResponseSink) -> None:
        try:
            response = await self._get_client().request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as e:
            category = _category_for_error(e)
            logger.debug(f"{request.method} {request.url} failed ({category}): {e!r}")
            sink(WireResponse(anomaly_category=category, cause=e))
            return
        except asyncio.CancelledError as e:
            sink(WireResponse(anomaly_category=INTERRUPTED, cause=e))
            raise
        except Exception as e:
            logger.warning(f"{request.method} {request.url} failed unexpectedly: {e!r}")
            sink(WireResponse(anomaly_category=FAULT, cause=e))
            return

        sink(
            WireResponse(
                status=response.status_code,
                headers=dict(response.headers),
                body=response.content,
            )
        )

    @property
    def pending(self) -> int:
        """Number of submissions still in flight."""
        return len(self._tasks)

    async def aclose(self) -> None:
        """Wait for in-flight submissions, then close an owned client."""
        self._closed = True
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["DEFAULT_TIMEOUT", "HttpxTransport"]
