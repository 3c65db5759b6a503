# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol strategy registry.

Maps a service's declared protocol and signature-scheme identifiers to the
concrete build, sign and parse strategies used to execute its operations.
Resolution is a pure lookup; a missing registration is a configuration
fault and is never retried.

Usage:
    >>> registry = StrategyRegistry()
    >>> registry.register(ProtocolId.JSON, SignatureVersion.V4,
    ...                   build_json, sign_v4, parse_json)
    >>> strategies = registry.resolve(service)
    >>> request = strategies.builder(service, op_request)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum

from .exceptions import UnsupportedStrategyError
from .protocols.strategies import BuildStrategy, ParseStrategy, SignStrategy
from .types.service import ServiceDescriptor

logger = logging.getLogger(__name__)


class ProtocolId(str, Enum):
    """Well-known wire protocol identifiers."""

    JSON = "json"
    REST_JSON = "rest-json"
    REST_XML = "rest-xml"
    QUERY = "query"
    EC2 = "ec2"


class SignatureVersion(str, Enum):
    """Well-known signature-scheme identifiers."""

    V4 = "v4"
    S3 = "s3"
    S3V4 = "s3v4"
    V2 = "v2"
    BEARER = "bearer"
    ANONYMOUS = "anonymous"


def _normalize(value: str | Enum, known: type[Enum]) -> str:
    """Lower-case an identifier and map it onto a known enum value if possible."""
    raw = value.value if isinstance(value, Enum) else str(value)
    raw = raw.strip().lower()
    try:
        return str(known(raw).value)
    except ValueError:
        # Unknown identifiers are allowed so third parties can add schemes
        return raw


@dataclass(frozen=True)
class ResolvedStrategies:
    """The build, sign and parse strategies selected for one service."""

    builder: BuildStrategy
    signer: SignStrategy
    parser: ParseStrategy


class StrategyRegistry:
    """
    Registry of strategies keyed by (protocol, signature version).

    Thread Safety:
        Registration and resolution take a lock; resolved strategy tuples are
        immutable and safe to share between concurrent invocations.

    Example:
        >>> registry = StrategyRegistry()
        >>> registry.register("json", "v4", builder, signer, parser)
        >>> registry.is_registered("JSON", "v4")
        True
    """

    def __init__(self) -> None:
        self._strategies: dict[tuple[str, str], ResolvedStrategies] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(protocol: str | Enum, signature_version: str | Enum) -> tuple[str, str]:
        return (
            _normalize(protocol, ProtocolId),
            _normalize(signature_version, SignatureVersion),
        )

    def register(
        self,
        protocol: str | ProtocolId,
        signature_version: str | SignatureVersion,
        builder: BuildStrategy,
        signer: SignStrategy,
        parser: ParseStrategy,
    ) -> None:
        """
        Register strategies for a protocol / signature-version pair.

        Registering an already-registered pair replaces the previous entry.

        Raises:
            ValueError: If any strategy is not callable
        """
        for label, fn in (("builder", builder), ("signer", signer), ("parser", parser)):
            if not callable(fn):
                raise ValueError(f"{label} strategy must be callable, got {fn!r}")

        key = self._key(protocol, signature_version)
        with self._lock:
            if key in self._strategies:
                logger.debug(f"Replacing strategies for protocol={key[0]} sig={key[1]}")
            self._strategies[key] = ResolvedStrategies(builder, signer, parser)

    def unregister(
        self, protocol: str | ProtocolId, signature_version: str | SignatureVersion
    ) -> bool:
        """Remove a registration. Returns True if one existed."""
        key = self._key(protocol, signature_version)
        with self._lock:
            return self._strategies.pop(key, None) is not None

    def is_registered(
        self, protocol: str | ProtocolId, signature_version: str | SignatureVersion
    ) -> bool:
        key = self._key(protocol, signature_version)
        with self._lock:
            return key in self._strategies

    def registered_keys(self) -> list[tuple[str, str]]:
        """Sorted list of registered (protocol, signature_version) pairs."""
        with self._lock:
            return sorted(self._strategies)

    def resolve(self, service: ServiceDescriptor) -> ResolvedStrategies:
        """
        Look up the strategies for ``service``.

        Raises:
            UnsupportedStrategyError: If no registration matches the service's
                protocol and signature version
        """
        key = self._key(service.protocol, service.signature_version)
        with self._lock:
            strategies = self._strategies.get(key)
        if strategies is None:
            raise UnsupportedStrategyError(key[0], key[1])
        return strategies

    def __len__(self) -> int:
        with self._lock:
            return len(self._strategies)


# =============================================================================
# Singleton Pattern
# =============================================================================

_default_registry: StrategyRegistry | None = None
_registry_lock = threading.Lock()


def get_default_registry() -> StrategyRegistry:
    """
    Get or create the process-wide default registry.

    Clients created without an explicit registry resolve strategies here.
    """
    global _default_registry

    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = StrategyRegistry()

    return _default_registry


def reset_default_registry() -> None:
    """Drop the default registry (mainly for testing)."""
    global _default_registry
    with _registry_lock:
        _default_registry = None


__all__ = [
    "ProtocolId",
    "ResolvedStrategies",
    "SignatureVersion",
    "StrategyRegistry",
    "get_default_registry",
    "reset_default_registry",
]
