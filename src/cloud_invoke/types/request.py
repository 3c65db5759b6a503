# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Operation request type.

An OperationRequest is constructed fresh for each call and is never mutated
after submission begins. Strategies and interceptors receive it read-only.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class OperationRequest:
    """
    An abstract operation invocation.

    Attributes:
        operation: Operation name as declared by the service (e.g. "ListBuckets")
        params: Operation parameters, exposed as a read-only mapping
    """

    operation: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.operation:
            raise ValueError("operation must be a non-empty string")
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


__all__ = ["OperationRequest"]
