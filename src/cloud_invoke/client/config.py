# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration for cloud-invoke.

This module provides the configuration dataclass for clients, including
endpoint resolution, validation and metrics settings.
"""

from dataclasses import dataclass

from ..types.endpoint import Endpoint

DEFAULT_REGION = "us-east-1"
DEFAULT_HOSTNAME_TEMPLATE = "{prefix}.{region}.amazonaws.com"


@dataclass
class ClientConfig:
    """
    Configuration for a client.

    Endpoint overrides win field by field over the endpoint resolved from
    the service descriptor and region.
    """

    # === Endpoint Resolution ===

    default_region: str = DEFAULT_REGION
    """Region used when none is passed to create_client."""

    hostname_template: str = DEFAULT_HOSTNAME_TEMPLATE
    """Template for the default hostname. Placeholders: prefix, region, service."""

    endpoint_override: Endpoint | None = None
    """Caller-supplied endpoint fields (e.g. a local emulator)."""

    # === Request Processing ===

    validate_operations: bool = True
    """Reject operations the service descriptor does not declare."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Record invocation metrics in the global metrics collector."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.default_region:
            raise ValueError("default_region must be a non-empty string")
        try:
            self.hostname_template.format(prefix="p", region="r", service="s")
        except (KeyError, IndexError) as e:
            raise ValueError(
                f"hostname_template has an unknown placeholder: {e}"
            ) from e
        if self.endpoint_override is not None and not isinstance(
            self.endpoint_override, Endpoint
        ):
            raise ValueError("endpoint_override must be an Endpoint")


__all__ = [
    "DEFAULT_HOSTNAME_TEMPLATE",
    "DEFAULT_REGION",
    "ClientConfig",
]
