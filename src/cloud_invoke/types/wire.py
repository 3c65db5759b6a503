# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol-agnostic wire envelopes.

WireRequest and WireResponse are the lingua franca between the request
builder, the signer and the network transport. They carry no protocol
knowledge of their own.
"""

from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass
class WireRequest:
    """
    An outgoing request ready for (or after) signing.

    Attributes:
        method: HTTP method
        scheme: "http" or "https"
        host: Target host name
        port: Target port
        uri: Request path including any query string
        headers: Header name to value
        body: Request body bytes
    """

    method: str = "POST"
    scheme: str = "https"
    host: str = ""
    port: int = 443
    uri: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def url(self) -> str:
        """Compose the absolute URL, omitting the port when it is the default."""
        netloc = self.host
        if DEFAULT_PORTS.get(self.scheme) != self.port:
            netloc = f"{self.host}:{self.port}"
        uri = self.uri if self.uri.startswith("/") else f"/{self.uri}"
        return f"{self.scheme}://{netloc}{uri}"

    def copy(self, **changes: Any) -> "WireRequest":
        """Return a copy with its own headers dict and ``changes`` applied."""
        changes.setdefault("headers", dict(self.headers))
        return replace(self, **changes)


@dataclass
class WireResponse:
    """
    A raw response delivered by a transport.

    Transports report network-level failures by setting ``anomaly_category``
    (and ``cause``) instead of raising. Such a response is never parsed.

    Attributes:
        status: HTTP status code (None when the request never completed)
        headers: Response headers
        body: Fully materialized response body
        anomaly_category: Transport-reported anomaly category, if any
        cause: The exception that produced the transport anomaly, if any
    """

    status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    anomaly_category: str | None = None
    cause: BaseException | None = None

    @property
    def is_anomaly(self) -> bool:
        return self.anomaly_category is not None


@dataclass
class Diagnostics:
    """
    Side-channel data recorded for one invocation.

    Diagnostics are kept on the result handle, never inside the result, so
    callers matching on success or anomaly values never see them.

    Attributes:
        wire_request: The built and signed request, once signing succeeded
        wire_response: The raw transport response, once one arrived
    """

    wire_request: WireRequest | None = None
    wire_response: WireResponse | None = None


__all__ = ["DEFAULT_PORTS", "Diagnostics", "WireRequest", "WireResponse"]
