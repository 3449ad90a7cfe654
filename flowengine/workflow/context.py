# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Execution Context

Variable bag and audit log threaded through one run.
"""

from collections.abc import Mapping
from typing import Dict, Any, List, Optional

from .models import ExecutionLog, LogType

NODE_OUTPUTS_KEY = "$nodes"


class ExecutionContext:
    """
    Execution context for a workflow run.

    Tracks:
    - Flat variable space shared by every node (last write wins)
    - Append-only execution logs
    """

    def __init__(
        self,
        workflow_id: str,
        execution_id: str,
        user_id: Optional[str],
        variables: Optional[Dict[str, Any]] = None,
        namespaced: bool = False
    ):
        self.workflow_id = workflow_id
        self.execution_id = execution_id
        self.user_id = user_id
        self.variables: Dict[str, Any] = dict(variables or {})
        self.logs: List[ExecutionLog] = []
        # Opt-in: also keep each node's output under variables["$nodes"][node_id]
        self.namespaced = namespaced

    def merge(self, output: Any, node_id: Optional[str] = None) -> None:
        """
        Shallow-merge a node output into the variables.

        Only mapping outputs are merged; anything else leaves the
        variables untouched.
        """
        if isinstance(output, Mapping):
            self.variables = {**self.variables, **output}

        if self.namespaced and node_id is not None:
            outputs = dict(self.variables.get(NODE_OUTPUTS_KEY) or {})
            outputs[node_id] = output
            self.variables[NODE_OUTPUTS_KEY] = outputs

    def log(
        self,
        node_id: Optional[str],
        message: str,
        type: LogType = LogType.INFO,
        data: Any = None
    ) -> ExecutionLog:
        """Append a log entry"""
        entry = ExecutionLog(node_id=node_id, message=message, type=type, data=data)
        self.logs.append(entry)
        return entry

    def snapshot(self) -> Dict[str, Any]:
        """Shallow copy of current variables"""
        return dict(self.variables)
