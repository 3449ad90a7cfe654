# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Data transform executor.
"""

from typing import Any

from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import LogType, WorkflowNode
from flowengine.workflow.registry import NodeExecutor


class DataTransformExecutor(NodeExecutor):
    """Marks the current variable set as transformed"""

    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        context.log(node.id, "Transforming data", LogType.SUCCESS)
        return {
            "transformed": True,
            "output": {**context.variables, "transformed": True},
        }
