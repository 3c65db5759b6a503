# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Default endpoint resolution from service descriptor and region."""

from ..types.endpoint import Endpoint
from ..types.service import ServiceDescriptor
from .config import DEFAULT_HOSTNAME_TEMPLATE


def resolve_endpoint(
    service: ServiceDescriptor,
    region: str,
    template: str = DEFAULT_HOSTNAME_TEMPLATE,
    override: Endpoint | None = None,
) -> Endpoint:
    """
    Resolve the endpoint for ``service`` in ``region``.

    The resolved endpoint only carries a hostname, leaving scheme, port and
    path to the protocol builder unless ``override`` supplies them.
    """
    prefix = service.endpoint_prefix or service.name
    hostname = template.format(prefix=prefix, region=region, service=service.name)
    return Endpoint(hostname=hostname).merge(override)


__all__ = ["resolve_endpoint"]
