# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
The build -> sign -> submit -> interpret pipeline.

This package provides:
- send_request: Runs one invocation and returns its ResultHandle
- ResultHandle: Single-delivery asynchronous result slot
- build_wire_request / with_endpoint: Request building
- InterceptorChain: Ordered request interceptors
- sign_wire_request: Credentials fetch and signing
- interpret_response: Transport response classification and decoding
"""

from .builder import build_wire_request, with_endpoint
from .handle import ResultHandle
from .interceptors import InterceptorChain
from .interpreter import interpret_response
from .send import send_request
from .signer import sign_wire_request

__all__ = [
    "InterceptorChain",
    "ResultHandle",
    "build_wire_request",
    "interpret_response",
    "send_request",
    "sign_wire_request",
    "with_endpoint",
]
