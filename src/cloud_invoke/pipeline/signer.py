# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Signer invocation: fetch credentials, then sign exactly once."""

import logging

from ..exceptions import CloudInvokeError, CredentialsError, SigningError
from ..protocols.credentials import CredentialsProviderProtocol
from ..protocols.strategies import SignStrategy
from ..types.service import ServiceDescriptor
from ..types.wire import WireRequest

logger = logging.getLogger(__name__)


async def sign_wire_request(
    service: ServiceDescriptor,
    region: str,
    credentials_provider: CredentialsProviderProtocol,
    request: WireRequest,
    signer: SignStrategy,
) -> WireRequest:
    """
    Fetch current credentials and apply the signature strategy.

    The credentials fetch is the only suspension point. The signer gets its
    own copy of the request, so the built request stays untouched.

    Raises:
        CredentialsError: If the credentials source fails or returns nothing
        SigningError: If the signer returns something other than a WireRequest
        Exception: Anything the signer raises
    """
    try:
        credentials = await credentials_provider.fetch()
    except CloudInvokeError:
        raise
    except Exception as e:
        raise CredentialsError(
            f"Failed to fetch credentials from {type(credentials_provider).__name__}: {e}"
        ) from e

    if credentials is None:
        raise CredentialsError(
            f"{type(credentials_provider).__name__} returned no credentials"
        )

    signed = signer(service, region, credentials, request.copy())
    if not isinstance(signed, WireRequest):
        raise SigningError(
            f"Signer for {service.signature_version!r} returned "
            f"{type(signed).__name__}, expected WireRequest"
        )

    logger.debug(f"Signed request for {service.name} ({service.signature_version})")
    return signed


__all__ = ["sign_wire_request"]
