# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response interpreter: raw transport response -> Result.

This function never raises. Transport anomalies pass through without
touching the body; parser failures become fault anomalies.
"""

import logging

from ..exceptions import DecodeError
from ..protocols.strategies import ParseStrategy
from ..types.anomaly import Anomaly
from ..types.request import OperationRequest
from ..types.result import Result
from ..types.service import ServiceDescriptor
from ..types.wire import WireResponse

logger = logging.getLogger(__name__)


def interpret_response(
    service: ServiceDescriptor,
    op_request: OperationRequest,
    response: WireResponse,
    parser: ParseStrategy,
) -> Result:
    """
    Classify or decode ``response``.

    Returns:
        - Anomaly(transport category, cause) when the transport reported one;
          the parser is not called
        - whatever the parser returns (decoded output dict or service anomaly)
        - Anomaly(FAULT, cause=exc) when the parser raises or returns an
          unusable value
    """
    try:
        if response.is_anomaly:
            cause = response.cause
            return Anomaly(
                category=response.anomaly_category,  # type: ignore[arg-type]
                cause=cause,
                message=str(cause) if cause is not None else None,
            )

        result = parser(service, op_request, response)
        if not isinstance(result, (dict, Anomaly)):
            raise DecodeError(
                f"Parser for {service.protocol!r} returned "
                f"{type(result).__name__}, expected dict or Anomaly",
                status=response.status,
            )
        return result
    except Exception as e:
        logger.debug(
            f"Failed to interpret response for {service.name}.{op_request.operation}: {e}"
        )
        return Anomaly.fault(e)


__all__ = ["interpret_response"]
