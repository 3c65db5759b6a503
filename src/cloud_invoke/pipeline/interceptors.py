# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Ordered, service- and operation-aware interceptor chain.

Interceptors run after the endpoint has been attached and before signing.
Each one is a synchronous, total function of (service, op_request, request)
that returns the request to hand to the next interceptor.
"""

import logging
import threading
from dataclasses import dataclass

from ..protocols.strategies import Interceptor
from ..types.request import OperationRequest
from ..types.service import ServiceDescriptor
from ..types.wire import WireRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    interceptor: Interceptor
    service: str | None = None
    operation: str | None = None

    def matches(self, service: ServiceDescriptor, op_request: OperationRequest) -> bool:
        if self.service is not None and self.service != service.name:
            return False
        if self.operation is not None and self.operation != op_request.operation:
            return False
        return True


class InterceptorChain:
    """
    An ordered list of request interceptors.

    Interceptors run in the order they were added. Scoping an interceptor to a
    service and/or operation restricts it to matching invocations.

    Example:
        >>> chain = InterceptorChain()
        >>> chain.add(add_accept_json, service="apigateway")
        >>> chain.add(add_content_md5, service="s3", operation="PutBucketCors")
        >>> request = chain.apply(service, op_request, request)
    """

    def __init__(self, interceptors: list[Interceptor] | None = None) -> None:
        self._entries: list[_Entry] = []
        self._lock = threading.Lock()
        for interceptor in interceptors or []:
            self.add(interceptor)

    def add(
        self,
        interceptor: Interceptor,
        service: str | None = None,
        operation: str | None = None,
    ) -> "InterceptorChain":
        """
        Append an interceptor, optionally scoped to a service and operation.

        Raises:
            ValueError: If ``interceptor`` is not callable
        """
        if not callable(interceptor):
            raise ValueError(f"interceptor must be callable, got {interceptor!r}")
        with self._lock:
            self._entries.append(_Entry(interceptor, service, operation))
        return self

    def apply(
        self,
        service: ServiceDescriptor,
        op_request: OperationRequest,
        request: WireRequest,
    ) -> WireRequest:
        """
        Run every matching interceptor over ``request`` in order.

        Raises:
            TypeError: If an interceptor returns something other than a WireRequest
        """
        with self._lock:
            entries = list(self._entries)

        for entry in entries:
            if not entry.matches(service, op_request):
                continue
            request = entry.interceptor(service, op_request, request)
            if not isinstance(request, WireRequest):
                raise TypeError(
                    f"Interceptor {entry.interceptor!r} returned "
                    f"{type(request).__name__}, expected WireRequest"
                )
        return request

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["InterceptorChain"]
