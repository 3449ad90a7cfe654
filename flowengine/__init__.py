# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
flowengine - sequential execution engine for user-authored workflow graphs.
"""

from flowengine.workflow import (
    ExecutionContext,
    ExecutionRecord,
    ExecutionStatus,
    ExecutorRegistry,
    NodeExecutor,
    WorkflowRunner,
)
from flowengine.executors import build_default_registry
from flowengine.persistence import create_gateway

__version__ = "0.1.0"

__all__ = [
    "ExecutionContext",
    "ExecutionRecord",
    "ExecutionStatus",
    "ExecutorRegistry",
    "NodeExecutor",
    "WorkflowRunner",
    "build_default_registry",
    "create_gateway",
]
