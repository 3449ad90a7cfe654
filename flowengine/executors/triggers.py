# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Trigger executors.

Webhook payloads are ingested upstream and handed to the run as
input_data["webhookData"]; triggers echo that payload into the run.
"""

from typing import Any

from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import LogType, WorkflowNode
from flowengine.workflow.registry import NodeExecutor


def webhook_url(workflow_id: str) -> str:
    return f"/api/webhooks/{workflow_id}"


class WebhookTriggerExecutor(NodeExecutor):
    """Generic webhook trigger"""

    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        received = context.variables.get("webhookData")
        context.log(
            node.id,
            "Webhook trigger executed",
            LogType.INFO,
            data={
                "webhookUrl": webhook_url(context.workflow_id),
                "receivedData": received,
            }
        )
        return received or {}


class GoHighLevelTriggerExecutor(NodeExecutor):
    """GoHighLevel event trigger (contact created, appointment booked, ...)"""

    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        event_type = node.data.get("selectedOption")
        received = context.variables.get("webhookData")
        context.log(
            node.id,
            f"GoHighLevel webhook trigger: {event_type}",
            LogType.INFO,
            data={
                "webhookUrl": webhook_url(context.workflow_id),
                "eventType": event_type,
                "receivedData": received,
            }
        )
        return received or {}
