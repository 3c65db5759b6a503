# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Service descriptor types.

A ServiceDescriptor is static data describing how to talk to a service: the
wire protocol it speaks, the signature scheme it expects and the catalog of
operations it supports. Descriptors are immutable and shared by every
invocation made against a client.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..exceptions import UnknownOperationError


@dataclass(frozen=True)
class OperationShape:
    """
    Declared shape of a single operation.

    Attributes:
        name: Operation name (e.g. "ListBuckets")
        input_shape: Name or description of the input shape, if any
        output_shape: Name or description of the output shape, if any
        http_method: HTTP method used by REST-style protocols
        request_uri: URI template used by REST-style protocols
    """

    name: str
    input_shape: Any = None
    output_shape: Any = None
    http_method: str = "POST"
    request_uri: str = "/"


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    Static description of a cloud service.

    Attributes:
        name: Service name used for logging, metrics and interceptor scoping
        protocol: Protocol identifier (e.g. "json", "rest-xml")
        signature_version: Signature-scheme identifier (e.g. "v4")
        operations: Operation name to OperationShape
        endpoint_prefix: Prefix used to derive the default hostname
        signing_name: Name used in the signature scope (defaults to endpoint_prefix)
        api_version: Service API version string
        target_prefix: Target prefix for JSON-style protocols
    """

    name: str
    protocol: str
    signature_version: str
    operations: Mapping[str, OperationShape] = field(default_factory=dict)
    endpoint_prefix: str | None = None
    signing_name: str | None = None
    api_version: str | None = None
    target_prefix: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("service name must be a non-empty string")
        object.__setattr__(
            self, "operations", MappingProxyType(dict(self.operations))
        )

    def get_operation(self, name: str) -> OperationShape:
        """Return the declared shape for ``name``."""
        try:
            return self.operations[name]
        except KeyError:
            raise UnknownOperationError(self.name, name) from None

    def has_operation(self, name: str) -> bool:
        return name in self.operations

    @property
    def effective_signing_name(self) -> str:
        return self.signing_name or self.endpoint_prefix or self.name


__all__ = ["OperationShape", "ServiceDescriptor"]
