# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Core utilities shared by the engine, gateways and API.

This package contains:
- config: Configuration management
- errors: Custom exceptions
- logging: Structured logging
"""

from flowengine.core.config import get_config, Config
from flowengine.core.errors import FlowEngineError, NotFoundError, ValidationError, PersistenceError
from flowengine.core.logging import get_logger

__all__ = [
    "get_config",
    "Config",
    "FlowEngineError",
    "NotFoundError",
    "ValidationError",
    "PersistenceError",
    "get_logger",
]
