# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Endpoint description and field-by-field override merging."""

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Endpoint:
    """
    Network location of a service.

    Every field is optional. A resolved endpoint usually only carries a
    hostname; the builder's defaults apply to whatever is left unset.

    Attributes:
        hostname: Host name placed in the ``host`` header and request host
        scheme: "http" or "https"
        port: TCP port
        path: Request URI path, replaces the builder's URI when set
    """

    hostname: str | None = None
    scheme: str | None = None
    port: int | None = None
    path: str | None = None

    def merge(self, override: "Endpoint | None") -> "Endpoint":
        """Return a new endpoint where every set field of ``override`` wins."""
        if override is None:
            return self
        changes = {
            f.name: getattr(override, f.name)
            for f in fields(override)
            if getattr(override, f.name) is not None
        }
        return replace(self, **changes)


__all__ = ["Endpoint"]
