# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for network transports."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ..types.wire import WireRequest, WireResponse

ResponseSink = Callable[[WireResponse], None]


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for network transport integration.

    The core library does not perform I/O itself. A transport accepts a signed
    request and later hands exactly one WireResponse to ``sink``: either a
    completed response or one whose ``anomaly_category`` describes a
    network-level failure. Transports deliver at most once and should not
    raise from ``submit`` for network failures.

    Timeouts belong to the transport; the core applies none.
    """

    def submit(self, request: WireRequest, sink: ResponseSink) -> None:
        """Submit ``request`` and arrange for its response to reach ``sink``."""
        ...
