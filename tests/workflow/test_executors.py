# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for the built-in (mocked) integration executors
"""

import pytest

from flowengine.executors import (
    DataTransformExecutor,
    GoHighLevelActionExecutor,
    GoHighLevelTriggerExecutor,
    OpenAIExecutor,
    WebhookTriggerExecutor,
    build_default_registry,
)
from flowengine.executors.gohighlevel import MOCK_RESPONSES
from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import LogType, WorkflowNode


def make_node(node_id="n1", **data):
    return WorkflowNode.model_validate({"id": node_id, "data": data})


def make_context(variables=None):
    return ExecutionContext("wf-1", "exec-1", "user-1", variables=variables)


def test_default_registry_keys():
    registry = build_default_registry()
    assert list(registry.keys()) == [
        "data-transform",
        "gohighlevel-action",
        "gohighlevel-trigger",
        "openai",
        "webhook-trigger",
    ]


def test_default_registry_dispatches_compound_keys_to_integration():
    registry = build_default_registry()
    node = make_node(integration="gohighlevel-action", moduleType="create-contact")

    assert isinstance(registry.resolve(node), GoHighLevelActionExecutor)


@pytest.mark.asyncio
async def test_webhook_trigger_echoes_payload():
    context = make_context({"webhookData": {"email": "a@example.com"}})

    output = await WebhookTriggerExecutor().execute(make_node(integration="webhook-trigger"), context)

    assert output == {"email": "a@example.com"}
    assert context.logs[0].type == LogType.INFO
    assert context.logs[0].data["webhookUrl"] == "/api/webhooks/wf-1"


@pytest.mark.asyncio
async def test_webhook_trigger_without_payload_returns_empty():
    output = await WebhookTriggerExecutor().execute(make_node(), make_context())
    assert output == {}


@pytest.mark.asyncio
async def test_gohighlevel_trigger_reports_event_type():
    context = make_context({"webhookData": {"contact": "c-1"}})
    node = make_node(integration="gohighlevel-trigger", selectedOption="contact-created")

    output = await GoHighLevelTriggerExecutor().execute(node, context)

    assert output == {"contact": "c-1"}
    assert context.logs[0].data["eventType"] == "contact-created"


@pytest.mark.asyncio
@pytest.mark.parametrize("action", sorted(MOCK_RESPONSES))
async def test_gohighlevel_action_mock_responses(action):
    context = make_context()
    node = make_node(integration="gohighlevel-action", selectedOption=action)

    output = await GoHighLevelActionExecutor().execute(node, context)

    assert output == MOCK_RESPONSES[action]
    assert context.logs[0].type == LogType.SUCCESS
    assert context.logs[0].message == f"Executing GHL action: {action}"


@pytest.mark.asyncio
async def test_gohighlevel_action_falls_back_to_module_type():
    node = make_node(integration="gohighlevel-action", moduleType="send-sms")
    output = await GoHighLevelActionExecutor().execute(node, make_context())
    assert output == {"messageId": "mock-msg-789", "status": "sent"}


@pytest.mark.asyncio
async def test_gohighlevel_action_selected_option_wins():
    node = make_node(integration="gohighlevel-action", moduleType="send-sms", selectedOption="add-tag")
    output = await GoHighLevelActionExecutor().execute(node, make_context())
    assert output == MOCK_RESPONSES["add-tag"]


@pytest.mark.asyncio
async def test_gohighlevel_action_unknown_action():
    node = make_node(integration="gohighlevel-action", selectedOption="archive-contact")
    output = await GoHighLevelActionExecutor().execute(node, make_context())
    assert output == {"success": True}


@pytest.mark.asyncio
async def test_gohighlevel_action_returns_a_copy():
    node = make_node(integration="gohighlevel-action", selectedOption="send-sms")
    output = await GoHighLevelActionExecutor().execute(node, make_context())
    output["status"] = "tampered"

    assert MOCK_RESPONSES["send-sms"]["status"] == "sent"


@pytest.mark.asyncio
async def test_openai_mock_response():
    context = make_context()
    output = await OpenAIExecutor().execute(make_node(integration="openai", model="gpt-4o"), context)

    assert output == {"response": "AI generated response based on input", "tokens": 150}
    assert context.logs[0].data == {"model": "gpt-4o"}


@pytest.mark.asyncio
async def test_data_transform_marks_variables():
    context = make_context({"name": "Ada"})

    output = await DataTransformExecutor().execute(make_node(integration="data-transform"), context)

    assert output == {"transformed": True, "output": {"name": "Ada", "transformed": True}}
    assert context.variables == {"name": "Ada"}
