# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Credentials value type."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class Credentials:
    """
    A set of credentials handed to signature strategies.

    Attributes:
        access_key_id: Access key identifier
        secret_access_key: Secret key (excluded from repr)
        session_token: Optional session token for temporary credentials
        expiration: UTC expiry time, None for long-lived credentials
    """

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)
    expiration: datetime | None = None

    def is_expired(
        self, now: datetime | None = None, skew: timedelta = timedelta(0)
    ) -> bool:
        """True if the credentials expire within ``skew`` of ``now``."""
        if self.expiration is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expiration - skew <= now


__all__ = ["Credentials"]
