# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client: long-lived owner of a service's invocation context.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..credentials import StaticCredentialsProvider
from ..observability.collector import UnifiedMetricsCollector, get_metrics_collector
from ..pipeline.handle import ResultHandle
from ..pipeline.interceptors import InterceptorChain
from ..pipeline.send import send_request
from ..protocols.credentials import CredentialsProviderProtocol
from ..protocols.transport import TransportProtocol
from ..registry import StrategyRegistry, get_default_registry
from ..transport.httpx_transport import HttpxTransport
from ..types.anomaly import Anomaly
from ..types.credentials import Credentials
from ..types.endpoint import Endpoint
from ..types.request import OperationRequest
from ..types.result import Result
from ..types.service import ServiceDescriptor
from .config import ClientConfig
from .endpoints import resolve_endpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientInfo:
    """
    Immutable invocation context owned by a Client.

    Attributes:
        service: Service descriptor shared by every invocation
        region: Region used for endpoint resolution and signing
        credentials_provider: Source of signing credentials
        endpoint: Resolved endpoint with overrides applied
        transport: Network transport
        registry: Strategy registry used to resolve build/sign/parse
        interceptors: Request interceptors applied before signing
    """

    service: ServiceDescriptor
    region: str
    credentials_provider: CredentialsProviderProtocol
    endpoint: Endpoint
    transport: TransportProtocol
    registry: StrategyRegistry
    interceptors: InterceptorChain = field(default_factory=InterceptorChain)


class Client:
    """
    A client for one service.

    The Client owns an immutable ClientInfo and a separate, merge-only
    metadata map for advisory annotations. Invocations are independent and
    may run concurrently against the same client.

    Example:
        >>> client = create_client(s3_service, credentials, transport, region="eu-west-1")
        >>> result = await client.invoke(OperationRequest("ListBuckets"))
        >>> if is_anomaly(result):
        ...     print(result.category)
    """

    def __init__(
        self,
        info: ClientInfo,
        config: ClientConfig | None = None,
        metrics: UnifiedMetricsCollector | None = None,
        owns_transport: bool = False,
    ) -> None:
        """
        Initialize the client.

        Args:
            info: Invocation context
            config: Client configuration (defaults to ClientConfig())
            metrics: Metrics collector; defaults to the global collector when
                metrics are enabled in the config
            owns_transport: Close the transport in ``aclose``
        """
        self._info = info
        self._config = config or ClientConfig()
        if metrics is None and self._config.metrics_enabled:
            metrics = get_metrics_collector()
        self._metrics = metrics if self._config.metrics_enabled else None
        self._owns_transport = owns_transport

        self._metadata: Mapping[str, Any] = MappingProxyType({})
        self._metadata_lock = threading.Lock()

    @property
    def info(self) -> ClientInfo:
        return self._info

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def metrics(self) -> UnifiedMetricsCollector | None:
        return self._metrics

    # === Metadata ===

    @property
    def metadata(self) -> Mapping[str, Any]:
        """
        Read-only snapshot of the advisory metadata.

        Concurrent merges are never lost, but the order in which they were
        applied is not observable.
        """
        return self._metadata

    def merge_metadata(self, updates: Mapping[str, Any]) -> "Client":
        """
        Merge ``updates`` into the metadata map and return the client.

        The map is replaced by a new snapshot under a short lock, so readers
        always see a complete snapshot and no concurrent update is lost.
        """
        updates = dict(updates)
        with self._metadata_lock:
            self._metadata = MappingProxyType({**self._metadata, **updates})
        return self

    # === Invocation ===

    def send(
        self,
        op_request: OperationRequest | str,
        params: Mapping[str, Any] | None = None,
    ) -> ResultHandle:
        """
        Start an invocation and return its result handle.

        Never raises: invalid arguments are delivered as a fault anomaly.
        """
        if not isinstance(op_request, OperationRequest):
            try:
                op_request = OperationRequest(op_request, params or {})
            except (TypeError, ValueError) as e:
                return ResultHandle.delivered(Anomaly.fault(e))
        elif params:
            return ResultHandle.delivered(
                Anomaly.fault(ValueError("params given with an OperationRequest"))
            )
        return send_request(self, op_request)

    async def invoke(
        self,
        op_request: OperationRequest | str,
        params: Mapping[str, Any] | None = None,
    ) -> Result:
        """Start an invocation and wait for its result."""
        return await self.send(op_request, params)

    # === Lifecycle ===

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            close = getattr(self._info.transport, "aclose", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"<Client service={self._info.service.name} region={self._info.region} "
            f"endpoint={self._info.endpoint.hostname}>"
        )


# Factory function for easy creation with dependency injection
def create_client(
    service: ServiceDescriptor,
    credentials_provider: CredentialsProviderProtocol | Credentials,
    transport: TransportProtocol | None = None,
    region: str | None = None,
    config: ClientConfig | None = None,
    registry: StrategyRegistry | None = None,
    interceptors: InterceptorChain | None = None,
    metrics: UnifiedMetricsCollector | None = None,
) -> Client:
    """
    Factory function to create a Client with proper dependency injection.

    Args:
        service: Service descriptor
        credentials_provider: Credentials source, or fixed Credentials
        transport: Network transport; an HttpxTransport owned by the client
            is created when omitted
        region: Region (defaults to config.default_region)
        config: Client config (will create default if not provided)
        registry: Strategy registry (defaults to the global registry)
        interceptors: Interceptor chain
        metrics: Metrics collector

    Returns:
        Configured Client instance

    Raises:
        ValueError: If the credentials provider or transport is unusable
    """
    if config is None:
        config = ClientConfig()

    if isinstance(credentials_provider, Credentials):
        credentials_provider = StaticCredentialsProvider(credentials_provider)
    if not isinstance(credentials_provider, CredentialsProviderProtocol):
        raise ValueError(
            f"credentials_provider must provide an async fetch(), got {credentials_provider!r}"
        )

    owns_transport = transport is None
    if transport is None:
        transport = HttpxTransport()
    elif not isinstance(transport, TransportProtocol):
        raise ValueError(f"transport must provide submit(request, sink), got {transport!r}")

    region = region or config.default_region
    endpoint = resolve_endpoint(
        service, region, config.hostname_template, config.endpoint_override
    )
    logger.debug(f"Creating client for {service.name} in {region} at {endpoint.hostname}")

    info = ClientInfo(
        service=service,
        region=region,
        credentials_provider=credentials_provider,
        endpoint=endpoint,
        transport=transport,
        registry=registry if registry is not None else get_default_registry(),
        interceptors=interceptors if interceptors is not None else InterceptorChain(),
    )
    return Client(info, config=config, metrics=metrics, owns_transport=owns_transport)


__all__ = ["Client", "ClientInfo", "create_client"]
