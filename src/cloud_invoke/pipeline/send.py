# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Transport submission and result delivery.

``send_request`` runs one invocation through the pipeline:

    resolve strategies -> build -> endpoint -> interceptors   (synchronous)
    fetch credentials -> sign -> submit to transport          (asynchronous)
    interpret the raw response -> deliver                     (transport sink)

It never raises. Whatever goes wrong, and wherever, the returned handle
receives exactly one Result: setup failures, transport failures and decode
failures all arrive as anomalies through the same handle.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from ..exceptions import ConfigurationError
from ..observability.constants import (
    ANOMALIES_TOTAL,
    INFLIGHT_INVOCATIONS,
    INVOCATION_DURATION_SECONDS,
    INVOCATIONS_TOTAL,
    SETUP_FAULTS_TOTAL,
)
from ..registry import ResolvedStrategies
from ..types.anomaly import INTERRUPTED, Anomaly
from ..types.request import OperationRequest
from ..types.result import Result
from ..types.wire import Diagnostics, WireRequest, WireResponse
from .builder import build_wire_request
from .handle import ResultHandle
from .interpreter import interpret_response
from .signer import sign_wire_request

if TYPE_CHECKING:
    from ..client.client import Client

logger = logging.getLogger(__name__)

# Strong references to in-flight sign-and-submit tasks
_background_tasks: set[asyncio.Task] = set()


class _Invocation:
    """Per-invocation state: the handle, the diagnostic accumulator and timing."""

    def __init__(self, client: Client, op_request: OperationRequest) -> None:
        self.client = client
        self.op_request = op_request
        self.handle = ResultHandle()
        self.diagnostics = Diagnostics()
        self.started = time.monotonic()
        self.stage = "resolve"
        self.inflight = False

    @property
    def _service_name(self) -> str:
        return self.client.info.service.name

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "operation": self.op_request.operation}

    def mark_inflight(self) -> None:
        metrics = self.client.metrics
        if metrics is not None:
            metrics.inc_gauge(INFLIGHT_INVOCATIONS, labels={"service": self._service_name})
        self.inflight = True

    def complete(self, result: Result, response: WireResponse | None = None) -> None:
        """Attach diagnostics, deliver ``result`` and record metrics."""
        diagnostics = Diagnostics(
            wire_request=self.diagnostics.wire_request,
            wire_response=response,
        )
        if not self.handle.deliver_once(result, diagnostics):
            return
        self._record(result)

    def fail(self, error: BaseException) -> None:
        """Deliver a fault anomaly for an exception raised before a response."""
        logger.debug(
            f"Invocation {self.handle.invocation_id} "
            f"({self._service_name}.{self.op_request.operation}) failed at "
            f"stage {self.stage}: {error!r}"
        )
        metrics = self.client.metrics
        if metrics is not None and not self.handle.done():
            metrics.inc_counter(
                SETUP_FAULTS_TOTAL,
                labels={"service": self._service_name, "stage": self.stage},
            )
        self.complete(Anomaly.fault(error))

    def _record(self, result: Result) -> None:
        metrics = self.client.metrics
        if metrics is None:
            return
        labels = self._labels()
        if self.inflight:
            metrics.dec_gauge(INFLIGHT_INVOCATIONS, labels={"service": self._service_name})
        if isinstance(result, Anomaly):
            metrics.inc_counter(INVOCATIONS_TOTAL, labels={**labels, "outcome": "anomaly"})
            metrics.inc_counter(ANOMALIES_TOTAL, labels={**labels, "category": result.category})
        else:
            metrics.inc_counter(INVOCATIONS_TOTAL, labels={**labels, "outcome": "success"})
        metrics.observe_histogram(
            INVOCATION_DURATION_SECONDS, time.monotonic() - self.started, labels=labels
        )


def send_request(client: Client, op_request: OperationRequest) -> ResultHandle:
    """
    Send ``op_request`` through ``client`` and return its result handle.

    Must be called with a running event loop for the asynchronous stage;
    without one the handle receives a fault anomaly.

    Returns:
        A ResultHandle that will receive exactly one Result
    """
    invocation = _Invocation(client, op_request)

    try:
        info = client.info
        strategies = info.registry.resolve(info.service)

        invocation.stage = "build"
        if client.config.validate_operations:
            info.service.get_operation(op_request.operation)
        request = build_wire_request(
            info.service,
            op_request,
            strategies.builder,
            info.endpoint,
            info.interceptors,
        )

        invocation.stage = "schedule"
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise ConfigurationError(
                "send_request requires a running asyncio event loop"
            ) from None

        task = loop.create_task(_sign_and_submit(invocation, strategies, request))
    except Exception as e:
        invocation.fail(e)
        return invocation.handle

    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return invocation.handle


async def _sign_and_submit(
    invocation: _Invocation,
    strategies: ResolvedStrategies,
    request: WireRequest,
) -> None:
    """Asynchronous stage: credentials, signing and transport submission."""
    info = invocation.client.info
    invocation.stage = "sign"
    try:
        signed = await sign_wire_request(
            info.service,
            info.region,
            info.credentials_provider,
            request,
            strategies.signer,
        )
        invocation.diagnostics.wire_request = signed

        invocation.stage = "submit"
        invocation.mark_inflight()

        def sink(response: WireResponse) -> None:
            result = interpret_response(
                info.service, invocation.op_request, response, strategies.parser
            )
            invocation.complete(result, response)

        info.transport.submit(signed.copy(), sink)
    except asyncio.CancelledError as e:
        invocation.complete(Anomaly(category=INTERRUPTED, cause=e))
        raise
    except Exception as e:
        invocation.fail(e)


__all__ = ["send_request"]
