# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for credentials sources."""

from typing import Protocol, runtime_checkable

from ..types.credentials import Credentials


@runtime_checkable
class CredentialsProviderProtocol(Protocol):
    """
    Opaque "fetch current credentials" capability.

    ``fetch`` may suspend (e.g. a network round trip to a token endpoint) and
    may raise. The pipeline treats a failure here exactly like a build
    failure: it is delivered as a fault anomaly, never raised to the caller.
    """

    async def fetch(self) -> Credentials:
        """Return the credentials to sign the next request with."""
        ...
