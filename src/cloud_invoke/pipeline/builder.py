# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request builder: operation request -> wire request.

Building is synchronous and never suspends. Errors raised here propagate to
``send_request``, which turns them into fault anomalies.
"""

import logging

from ..exceptions import ConfigurationError
from ..protocols.strategies import BuildStrategy
from ..types.endpoint import Endpoint
from ..types.request import OperationRequest
from ..types.service import ServiceDescriptor
from ..types.wire import WireRequest
from .interceptors import InterceptorChain

logger = logging.getLogger(__name__)


def with_endpoint(request: WireRequest, endpoint: Endpoint) -> WireRequest:
    """
    Attach ``endpoint`` to ``request``.

    The host (and ``host`` header) always come from the endpoint hostname.
    Scheme, port and path replace the builder's values only when the
    endpoint supplies them.

    Raises:
        ConfigurationError: If the endpoint has no hostname
    """
    if not endpoint.hostname:
        raise ConfigurationError(f"Endpoint has no hostname: {endpoint!r}")

    headers = dict(request.headers)
    headers["host"] = endpoint.hostname
    changes: dict = {"host": endpoint.hostname, "headers": headers}
    if endpoint.scheme is not None:
        changes["scheme"] = endpoint.scheme
    if endpoint.port is not None:
        changes["port"] = endpoint.port
    if endpoint.path is not None:
        changes["uri"] = endpoint.path
    return request.copy(**changes)


def build_wire_request(
    service: ServiceDescriptor,
    op_request: OperationRequest,
    builder: BuildStrategy,
    endpoint: Endpoint,
    interceptors: InterceptorChain | None = None,
) -> WireRequest:
    """
    Build the unsigned wire request for one invocation.

    Steps: protocol builder -> endpoint merge -> interceptor chain.

    Raises:
        TypeError: If the builder returns something other than a WireRequest
        ConfigurationError: If the endpoint is unusable
        Exception: Anything the builder or an interceptor raises
    """
    request = builder(service, op_request)
    if not isinstance(request, WireRequest):
        raise TypeError(
            f"Builder for protocol {service.protocol!r} returned "
            f"{type(request).__name__}, expected WireRequest"
        )

    request = with_endpoint(request, endpoint)
    if interceptors is not None:
        request = interceptors.apply(service, op_request, request)

    logger.debug(
        f"Built {request.method} {request.url} for {service.name}.{op_request.operation}"
    )
    return request


__all__ = ["build_wire_request", "with_endpoint"]
