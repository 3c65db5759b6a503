# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Credentials providers.

Provider chains and their ordering are left to the application; this package
only ships the building blocks a chain is assembled from.

Exported classes:
    StaticCredentialsProvider: Fixed credentials.
    CachedCredentialsProvider: Caches another provider's credentials until
        they near expiration.
"""

from .cached import DEFAULT_REFRESH_WINDOW, CachedCredentialsProvider
from .static import StaticCredentialsProvider

__all__ = [
    "DEFAULT_REFRESH_WINDOW",
    "CachedCredentialsProvider",
    "StaticCredentialsProvider",
]
