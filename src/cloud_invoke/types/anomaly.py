# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
# cloud_invoke/types/anomaly.py
"""
Anomaly categories and the anomaly result shape.

Every failure outcome of an invocation is reported as an ``Anomaly`` carrying
one of the category constants below. Success outcomes are plain dicts holding
the operation's decoded output, so the two shapes never overlap.

Constants:
    UNAVAILABLE: Service or network unreachable (connection refused, DNS)
    INTERRUPTED: Request interrupted before completion
    INCORRECT: Caller error (malformed or invalid request)
    FORBIDDEN: Caller not authorized
    UNSUPPORTED: Operation or feature not supported
    NOT_FOUND: Addressed resource does not exist
    CONFLICT: Request conflicts with current resource state
    FAULT: Failure inside the client or the service
    BUSY: Service throttling or temporarily overloaded
    ANOMALY_CATEGORIES: Frozenset of all standard categories

Example:
    >>> from cloud_invoke import NOT_FOUND, is_anomaly
    >>> if is_anomaly(result) and result.category == NOT_FOUND:
    ...     return None
"""

from dataclasses import dataclass
from typing import Any

# Categories are plain strings so parser strategies can extend them
AnomalyCategory = str

UNAVAILABLE = "unavailable"
INTERRUPTED = "interrupted"
INCORRECT = "incorrect"
FORBIDDEN = "forbidden"
UNSUPPORTED = "unsupported"
NOT_FOUND = "not-found"
CONFLICT = "conflict"
FAULT = "fault"
BUSY = "busy"

ANOMALY_CATEGORIES = frozenset(
    {
        UNAVAILABLE,
        INTERRUPTED,
        INCORRECT,
        FORBIDDEN,
        UNSUPPORTED,
        NOT_FOUND,
        CONFLICT,
        FAULT,
        BUSY,
    }
)

_STATUS_CATEGORIES: dict[int, AnomalyCategory] = {
    403: FORBIDDEN,
    404: NOT_FOUND,
    409: CONFLICT,
    429: BUSY,
    501: UNSUPPORTED,
    503: BUSY,
    504: UNAVAILABLE,
}


@dataclass(frozen=True)
class Anomaly:
    """
    A classified failure outcome.

    Attributes:
        category: One of the anomaly category strings
        cause: The underlying exception, when one exists
        message: Optional human-readable detail (e.g. a service error message)
        code: Optional service error code reported by the parser
    """

    category: AnomalyCategory
    cause: BaseException | None = None
    message: str | None = None
    code: str | None = None

    @classmethod
    def fault(cls, cause: BaseException) -> "Anomaly":
        """Build a fault anomaly for an exception raised inside the pipeline."""
        return cls(category=FAULT, cause=cause, message=str(cause) or None)


def is_anomaly(result: Any) -> bool:
    """Return True if ``result`` is an anomaly rather than a success value."""
    return isinstance(result, Anomaly)


def category_for_status(status: int | None) -> AnomalyCategory | None:
    """
    Map an HTTP status code to an anomaly category.

    Returns None for statuses below 400, which denote success. Intended for
    parser strategies; the pipeline itself never inspects status codes.
    """
    if status is None or status < 400:
        return None
    if status in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status]
    if status < 500:
        return INCORRECT
    return FAULT


__all__ = [
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
    "AnomalyCategory",
    "category_for_status",
    "is_anomaly",
]
