# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client construction and configuration.

This module provides:
- Client: Long-lived owner of a service's invocation context
- ClientInfo: Immutable invocation context
- ClientConfig: Client configuration
- create_client: Factory with dependency injection
- resolve_endpoint: Default endpoint resolution
"""

from .client import Client, ClientInfo, create_client
from .config import DEFAULT_HOSTNAME_TEMPLATE, DEFAULT_REGION, ClientConfig
from .endpoints import resolve_endpoint

__all__ = [
    "DEFAULT_HOSTNAME_TEMPLATE",
    "DEFAULT_REGION",
    "Client",
    "ClientConfig",
    "ClientInfo",
    "create_client",
    "resolve_endpoint",
]
