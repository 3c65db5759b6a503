# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .anomaly import (
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
    AnomalyCategory,
    category_for_status,
    is_anomaly,
)
from .credentials import Credentials
from .endpoint import Endpoint
from .request import OperationRequest
from .result import Result
from .service import OperationShape, ServiceDescriptor
from .wire import DEFAULT_PORTS, Diagnostics, WireRequest, WireResponse

__all__ = [
    # Anomaly categories
    "ANOMALY_CATEGORIES",
    "BUSY",
    "CONFLICT",
    "DEFAULT_PORTS",
    "FAULT",
    "FORBIDDEN",
    "INCORRECT",
    "INTERRUPTED",
    "NOT_FOUND",
    "UNAVAILABLE",
    "UNSUPPORTED",
    "Anomaly",
    "AnomalyCategory",
    "Credentials",
    "Diagnostics",
    "Endpoint",
    # Requests
    "OperationRequest",
    "OperationShape",
    "Result",
    "ServiceDescriptor",
    # Wire envelopes
    "WireRequest",
    "WireResponse",
    "category_for_status",
    "is_anomaly",
]
