# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the cloud-invoke library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from CloudInvokeError. None of them escape
``send_request``: the pipeline converts them into fault anomalies that are
delivered through the result handle, with the exception kept as the cause.
"""


class CloudInvokeError(Exception):
    """Base exception for all cloud-invoke errors.

    Example:
        result = await client.invoke(op)
        if is_anomaly(result) and isinstance(result.cause, CloudInvokeError):
            logger.error(f"Pipeline error: {result.cause}")
    """

    pass


class ConfigurationError(CloudInvokeError):
    """Raised when client or registry configuration is invalid.

    Configuration faults are surfaced immediately as fault anomalies and are
    never retried.
    """

    pass


class UnsupportedStrategyError(ConfigurationError):
    """Raised when no strategy is registered for a service's protocol pair.

    Attributes:
        protocol: The protocol identifier declared by the service.
        signature_version: The signature-scheme identifier declared by the
            service.

    Example:
        try:
            strategies = registry.resolve(service)
        except UnsupportedStrategyError as e:
            logger.error(f"No strategy for {e.protocol}/{e.signature_version}")
    """

    def __init__(self, protocol: str, signature_version: str):
        super().__init__(
            f"No strategy registered for protocol={protocol!r} "
            f"signature_version={signature_version!r}"
        )
        self.protocol = protocol
        self.signature_version = signature_version


class UnknownOperationError(CloudInvokeError):
    """Raised when a service descriptor does not declare an operation.

    Attributes:
        service: Name of the service that was asked.
        operation: The operation name that was not found.
    """

    def __init__(self, service: str, operation: str):
        super().__init__(f"Operation {operation!r} not found in service {service!r}")
        self.service = service
        self.operation = operation


class CredentialsError(CloudInvokeError):
    """Raised when credentials cannot be fetched from the credentials source."""

    pass


class SigningError(CloudInvokeError):
    """Raised when a signature strategy fails or returns no request."""

    pass


class TransportError(CloudInvokeError):
    """Raised when a transport cannot accept a request for submission."""

    pass


class DecodeError(CloudInvokeError):
    """Raised by parser strategies when a response body cannot be decoded.

    Attributes:
        status: HTTP status of the response being decoded, if known.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class HandleAlreadyDeliveredError(CloudInvokeError):
    """Raised when a second result is delivered into a result handle."""

    pass
