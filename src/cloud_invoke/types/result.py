# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Result type alias: decoded output dict on success, Anomaly on failure."""

from typing import Any, Union

from .anomaly import Anomaly

Result = Union[dict[str, Any], Anomaly]

__all__ = ["Result"]
