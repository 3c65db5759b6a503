# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pipeline collaborators.

This module provides Protocol classes that define the interfaces for
pluggable components consumed by the request-execution core.

Available protocols:
- TransportProtocol: Submits a signed request and delivers one raw response
- CredentialsProviderProtocol: Fetches current credentials (may suspend)
- BuildStrategy / SignStrategy / ParseStrategy: Per-protocol strategies
- Interceptor: Synchronous request rewrite
"""

from .credentials import CredentialsProviderProtocol
from .strategies import BuildStrategy, Interceptor, ParseStrategy, SignStrategy
from .transport import ResponseSink, TransportProtocol

__all__ = [
    "BuildStrategy",
    "CredentialsProviderProtocol",
    "Interceptor",
    "ParseStrategy",
    "ResponseSink",
    "SignStrategy",
    "TransportProtocol",
]
