# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Exceptions

Custom exceptions for the workflow execution engine.
"""

from typing import Iterable, Optional

from flowengine.core.errors import ValidationError


class WorkflowEngineException(Exception):
    """Base exception for the execution engine"""
    pass


class WorkflowValidationError(WorkflowEngineException, ValidationError):
    """Workflow graph is malformed"""
    def __init__(self, message: str, field: Optional[str] = None):
        ValidationError.__init__(self, message, field=field)


class CyclicGraphError(WorkflowValidationError):
    """Some nodes can never be scheduled (cycle or cycle-only reachability)"""
    def __init__(self, node_ids: Iterable[str]):
        self.node_ids = list(node_ids)
        super().__init__(
            f"Cycle detected in workflow graph involving nodes: {self.node_ids}",
            field="edges"
        )


class WorkflowExecutionError(WorkflowEngineException):
    """Workflow execution ended early"""
    pass


class ExecutionTimeoutError(WorkflowExecutionError):
    """Run exceeded the configured timeout"""
    def __init__(self, execution_id: str, timeout: float):
        self.execution_id = execution_id
        self.timeout = timeout
        super().__init__(f"Execution timed out after {timeout:g}s")


class ExecutionCancelledError(WorkflowExecutionError):
    """Run was cancelled through its handle"""
    def __init__(self, execution_id: str):
        self.execution_id = execution_id
        super().__init__("Execution cancelled")
