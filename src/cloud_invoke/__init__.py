# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""cloud-invoke - Request-execution core for data-driven cloud-service clients.

Given a service descriptor and an operation request, this library builds a
protocol-correct wire request, signs it, submits it over a transport and
delivers a normalized result through a single-delivery asynchronous handle.

Key Features:
    - Strategy registry keyed by protocol and signature scheme
    - Ordered, service/operation-scoped request interceptors
    - Exactly one result per invocation, never a raised exception
    - Uniform anomaly shape for setup, transport, service and decode failures
    - Diagnostics (raw wire request/response) kept beside the result
    - Prometheus metrics through a unified collector

Quick Start:
    >>> from cloud_invoke import (
    ...     Credentials, OperationRequest, ServiceDescriptor,
    ...     create_client, get_default_registry, is_anomaly,
    ... )
    >>>
    >>> get_default_registry().register("json", "v4", build_json, sign_v4, parse_json)
    >>> client = create_client(service, Credentials("AKID", "secret"), region="us-west-2")
    >>> async with client:
    ...     result = await client.invoke(OperationRequest("ListTables"))
    ...     if is_anomaly(result):
    ...         print(result.category, result.cause)

Main Exports:
    - Client, create_client, ClientConfig: Client construction
    - StrategyRegistry, get_default_registry: Strategy registration
    - ResultHandle, send_request: Invocation and delivery
    - InterceptorChain: Request interceptors
    - HttpxTransport: Default network transport
    - Anomaly, is_anomaly, category constants: Result classification

Note: Retry and backoff are the caller's responsibility; one attempt is made
per invocation.

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import (
    Client,
    ClientConfig,
    ClientInfo,
    create_client,
    resolve_endpoint,
)
from .credentials import (
    CachedCredentialsProvider,
    StaticCredentialsProvider,
)
from .exceptions import (
    CloudInvokeError,
    ConfigurationError,
    CredentialsError,
    DecodeError,
    HandleAlreadyDeliveredError,
    SigningError,
    TransportError,
    UnknownOperationError,
    UnsupportedStrategyError,
)
from .pipeline import (
    InterceptorChain,
    ResultHandle,
    interpret_response,
    send_request,
)
from .protocols import (
    BuildStrategy,
    CredentialsProviderProtocol,
    Interceptor,
    ParseStrategy,
    SignStrategy,
    TransportProtocol,
)
from .registry import (
    ProtocolId,
    ResolvedStrategies,
    SignatureVersion,
    StrategyRegistry,
    get_default_registry,
    reset_default_registry,
)
from .transport import HttpxTransport
from .types import (
    ANOMALY_CATEGORIES,
    BUSY,
    CONFLICT,
    FAULT,
    FORBIDDEN,
    INCORRECT,
    INTERRUPTED,
    NOT_FOUND,
    UNAVAILABLE,
    UNSUPPORTED,
    Anomaly,
    Credentials,
    Diagnostics,
    Endpoint,
    OperationRequest,
    OperationShape,
    Result,
    ServiceDescriptor,
    WireRequest,
    WireResponse,
    category_for_status,
    is_anomaly,
)

__all__ = [
    # Anomaly categories
    "ANOMALY_CATEGORIES",
    "BUSY",
    "CONFLICT",
    "FAULT",
    "FORBIDDEN",
    "INCORRECT",
    "INTERRUPTED",
    "NOT_FOUND",
    "UNAVAILABLE",
    "UNSUPPORTED",
    "Anomaly",
    # Protocols
    "BuildStrategy",
    "CachedCredentialsProvider",
    # Client
    "Client",
    "ClientConfig",
    "ClientInfo",
    # Exceptions
    "CloudInvokeError",
    "ConfigurationError",
    # Types
    "Credentials",
    "CredentialsError",
    "CredentialsProviderProtocol",
    "DecodeError",
    "Diagnostics",
    "Endpoint",
    "HandleAlreadyDeliveredError",
    "HttpxTransport",
    "Interceptor",
    # Pipeline
    "InterceptorChain",
    "OperationRequest",
    "OperationShape",
    "ParseStrategy",
    # Registry
    "ProtocolId",
    "ResolvedStrategies",
    "Result",
    "ResultHandle",
    "ServiceDescriptor",
    "SignStrategy",
    "SignatureVersion",
    "SigningError",
    "StaticCredentialsProvider",
    "StrategyRegistry",
    "TransportError",
    "TransportProtocol",
    "UnknownOperationError",
    "UnsupportedStrategyError",
    "WireRequest",
    "WireResponse",
    "category_for_status",
    "create_client",
    "get_default_registry",
    "interpret_response",
    "is_anomaly",
    "reset_default_registry",
    "resolve_endpoint",
    "send_request",
]
