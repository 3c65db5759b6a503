# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Network transports.

Exported classes:
    HttpxTransport: httpx-based transport used when a client is created
        without one.
"""

from ..protocols.transport import ResponseSink, TransportProtocol
from .httpx_transport import DEFAULT_TIMEOUT, HttpxTransport

__all__ = [
    "DEFAULT_TIMEOUT",
    "HttpxTransport",
    "ResponseSink",
    "TransportProtocol",
]
