# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Credentials provider that always returns the same credentials."""

from ..types.credentials import Credentials


class StaticCredentialsProvider:
    """
    Returns a fixed set of credentials.

    Example:
        >>> provider = StaticCredentialsProvider(Credentials("AKID", "secret"))
        >>> creds = await provider.fetch()
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @classmethod
    def from_keys(
        cls,
        access_key_id: str,
        secret_access_key: str,
        session_token: str | None = None,
    ) -> "StaticCredentialsProvider":
        return cls(Credentials(access_key_id, secret_access_key, session_token))

    async def fetch(self) -> Credentials:
        return self._credentials
