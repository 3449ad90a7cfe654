# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for executor registration and dispatch
"""

import pytest
from flowengine.workflow.context import ExecutionContext
from flowengine.workflow.models import WorkflowNode
from flowengine.workflow.registry import ExecutorRegistry, NodeExecutor, FunctionExecutor, executor_key


class StaticExecutor(NodeExecutor):
    def __init__(self, output):
        self.output = output

    async def execute(self, node, context):
        return self.output


def node(integration=None, module_type=None):
    return WorkflowNode.model_validate({
        "id": "n1",
        "data": {"integration": integration, "moduleType": module_type},
    })


@pytest.fixture
def registry():
    return ExecutorRegistry()


def test_executor_key():
    assert executor_key("gohighlevel-action", "send-sms") == "gohighlevel-action-send-sms"
    assert executor_key("openai") == "openai"
    assert executor_key("openai", None) == "openai"


def test_exact_key_wins_over_fallback(registry):
    exact = StaticExecutor("exact")
    fallback = StaticExecutor("fallback")
    registry.register("slack-send-message", exact)
    registry.register("slack", fallback)

    assert registry.resolve(node("slack", "send-message")) is exact


def test_falls_back_to_integration_key(registry):
    fallback = StaticExecutor("fallback")
    registry.register("slack", fallback)

    assert registry.resolve(node("slack", "post-file")) is fallback
    assert registry.resolve(node("slack")) is fallback


def test_unknown_integration_resolves_to_none(registry):
    registry.register("slack", StaticExecutor("x"))

    assert registry.resolve(node("discord", "send")) is None
    assert registry.resolve(node(None)) is None


def test_module_type_alone_is_not_a_key(registry):
    registry.register("send-sms", StaticExecutor("x"))
    assert registry.resolve(node("twilio", "send-sms")) is None


def test_register_rejects_non_executor(registry):
    with pytest.raises(TypeError):
        registry.register("bad", object())


def test_register_rejects_empty_key(registry):
    with pytest.raises(ValueError):
        registry.register("", StaticExecutor("x"))


@pytest.mark.asyncio
async def test_decorator_registers_coroutine(registry):
    @registry.executor("echo")
    async def echo(node, context):
        return {"echo": context.variables.get("value")}

    executor = registry.resolve(node("echo"))
    assert isinstance(executor, FunctionExecutor)

    context = ExecutionContext("wf", "exec", "user", variables={"value": 42})
    assert await executor.execute(node("echo"), context) == {"echo": 42}


def test_unregister_and_membership(registry):
    registry.register("a", StaticExecutor(1))
    registry.register("b", StaticExecutor(2))

    assert "a" in registry
    assert len(registry) == 2
    assert list(registry.keys()) == ["a", "b"]

    registry.unregister("a")
    assert "a" not in registry
    assert registry.get("a") is None
