# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
AI completion executor (mocked).
"""

from typing import Any

from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import LogType, WorkflowNode
from flowengine.workflow.registry import NodeExecutor

DEFAULT_MODEL = "gpt-4"


class OpenAIExecutor(NodeExecutor):
    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        model = node.data.get("model") or DEFAULT_MODEL
        context.log(node.id, "Processing with OpenAI", LogType.INFO, data={"model": model})

        return {
            "response": "AI generated response based on input",
            "tokens": 150,
        }
