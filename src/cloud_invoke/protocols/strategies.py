# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocols for the pluggable build, sign and parse strategies.

Strategies are selected by a service's declared protocol and signature
identifiers through the StrategyRegistry, never hard-coded per service.
"""

from typing import Protocol, runtime_checkable

from ..types.credentials import Credentials
from ..types.request import OperationRequest
from ..types.result import Result
from ..types.service import ServiceDescriptor
from ..types.wire import WireRequest, WireResponse


@runtime_checkable
class BuildStrategy(Protocol):
    """Encodes an operation request into a base wire request."""

    def __call__(
        self, service: ServiceDescriptor, op_request: OperationRequest
    ) -> WireRequest: ...


@runtime_checkable
class SignStrategy(Protocol):
    """
    Signs a wire request.

    Must be deterministic given the request, credentials and region, and must
    not touch the operation request.
    """

    def __call__(
        self,
        service: ServiceDescriptor,
        region: str,
        credentials: Credentials,
        request: WireRequest,
    ) -> WireRequest: ...


@runtime_checkable
class ParseStrategy(Protocol):
    """
    Decodes a transported response.

    Responsible for turning status codes >= 400 into an Anomaly (see
    ``category_for_status``) and otherwise decoding the body into the
    operation's output dict. May raise; the interpreter converts exceptions
    into fault anomalies.
    """

    def __call__(
        self,
        service: ServiceDescriptor,
        op_request: OperationRequest,
        response: WireResponse,
    ) -> Result: ...


@runtime_checkable
class Interceptor(Protocol):
    """
    Synchronous, total request rewrite applied after the endpoint is attached.

    Interceptors may change headers, body or URI and must return the request
    to pass on.
    """

    def __call__(
        self,
        service: ServiceDescriptor,
        op_request: OperationRequest,
        request: WireRequest,
    ) -> WireRequest: ...


__all__ = [
    "BuildStrategy",
    "Interceptor",
    "ParseStrategy",
    "SignStrategy",
]
