# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
GoHighLevel action executor (mocked CRM responses).
"""

from typing import Any, Dict

from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import LogType, WorkflowNode
from flowengine.workflow.registry import NodeExecutor

MOCK_RESPONSES: Dict[str, Dict[str, Any]] = {
    "create-contact": {"contactId": "mock-contact-123", "email": "new@example.com"},
    "update-contact": {"contactId": "mock-contact-123", "updated": True},
    "create-opportunity": {"opportunityId": "mock-opp-456", "value": 1000},
    "send-sms": {"messageId": "mock-msg-789", "status": "sent"},
    "add-tag": {"contactId": "mock-contact-123", "tags": ["new-tag"]},
}


class GoHighLevelActionExecutor(NodeExecutor):
    """
    Runs a CRM action.

    The action comes from the editor's `selectedOption`, falling back to the
    node's module type. Unknown actions return {"success": True}.
    """

    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        action = node.data.get("selectedOption") or node.data.module_type
        context.log(
            node.id,
            f"Executing GHL action: {action}",
            LogType.SUCCESS,
            data={"action": action}
        )

        response = MOCK_RESPONSES.get(action or "")
        if response is None:
            return {"success": True}
        return dict(response)
