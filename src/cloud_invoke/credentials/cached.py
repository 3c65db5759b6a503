# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Caching wrapper around another credentials provider.

Temporary credentials (assumed roles, instance profiles) are fetched over the
network and expire. CachedCredentialsProvider keeps the last credentials and
only goes back to the wrapped provider when they are missing or about to
expire. Concurrent callers share a single in-flight fetch.
"""

import asyncio
import logging
from datetime import timedelta

from ..exceptions import CredentialsError
from ..protocols.credentials import CredentialsProviderProtocol
from ..types.credentials import Credentials

logger = logging.getLogger(__name__)

# Refresh this long before the reported expiration
DEFAULT_REFRESH_WINDOW = timedelta(minutes=5)


class CachedCredentialsProvider:
    """
    Caches credentials from ``provider`` until they near expiration.

    Attributes:
        refresh_window: How long before expiration credentials are refreshed

    Example:
        >>> provider = CachedCredentialsProvider(AssumeRoleProvider(...))
        >>> creds = await provider.fetch()  # network call
        >>> creds = await provider.fetch()  # cached
    """

    def __init__(
        self,
        provider: CredentialsProviderProtocol,
        refresh_window: timedelta = DEFAULT_REFRESH_WINDOW,
    ) -> None:
        if refresh_window < timedelta(0):
            raise ValueError("refresh_window must not be negative")
        self._provider = provider
        self.refresh_window = refresh_window
        self._cached: Credentials | None = None
        self._lock: asyncio.Lock | None = None

    def _needs_refresh(self) -> bool:
        return self._cached is None or self._cached.is_expired(skew=self.refresh_window)

    async def fetch(self) -> Credentials:
        """
        Return cached credentials, refreshing them first when needed.

        Raises:
            CredentialsError: If the wrapped provider returns nothing
        """
        if not self._needs_refresh():
            return self._cached  # type: ignore[return-value]

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self._needs_refresh():
                logger.debug(f"Refreshing credentials from {type(self._provider).__name__}")
                credentials = await self._provider.fetch()
                if credentials is None:
                    raise CredentialsError(
                        f"{type(self._provider).__name__} returned no credentials"
                    )
                self._cached = credentials
            return self._cached  # type: ignore[return-value]

    def invalidate(self) -> None:
        """Forget the cached credentials so the next fetch refreshes."""
        self._cached = None
