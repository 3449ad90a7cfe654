# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow execution engine: graph model, scheduler, registry, context, runner.
"""

from .models import (
    WorkflowNode,
    WorkflowEdge,
    WorkflowGraph,
    WorkflowDefinition,
    ExecutionLog,
    ExecutionRecord,
    ExecutionStatus,
    LogType,
)
from .exceptions import (
    WorkflowEngineException,
    WorkflowValidationError,
    CyclicGraphError,
    ExecutionTimeoutError,
    ExecutionCancelledError,
)
from .context import ExecutionContext
from .registry import ExecutorRegistry, NodeExecutor, executor_key
from .validation import topological_sort, execution_order
from .runner import WorkflowRunner, ExecutionHandle

__all__ = [
    "WorkflowNode",
    "WorkflowEdge",
    "WorkflowGraph",
    "WorkflowDefinition",
    "ExecutionLog",
    "ExecutionRecord",
    "ExecutionStatus",
    "LogType",
    "WorkflowEngineException",
    "WorkflowValidationError",
    "CyclicGraphError",
    "ExecutionTimeoutError",
    "ExecutionCancelledError",
    "ExecutionContext",
    "ExecutorRegistry",
    "NodeExecutor",
    "executor_key",
    "topological_sort",
    "execution_order",
    "WorkflowRunner",
    "ExecutionHandle",
]
