# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Built-in node executors.

Integrations register under "<integration>" or "<integration>-<moduleType>";
third-party executors are added to the same registry at startup.
"""

from flowengine.workflow.registry import ExecutorRegistry
from .ai import OpenAIExecutor
from .gohighlevel import GoHighLevelActionExecutor
from .transform import DataTransformExecutor
from .triggers import GoHighLevelTriggerExecutor, WebhookTriggerExecutor


def build_default_registry() -> ExecutorRegistry:
    """Registry holding every built-in executor"""
    registry = ExecutorRegistry()
    registry.register("webhook-trigger", WebhookTriggerExecutor())
    registry.register("gohighlevel-trigger", GoHighLevelTriggerExecutor())
    registry.register("gohighlevel-action", GoHighLevelActionExecutor())
    registry.register("openai", OpenAIExecutor())
    registry.register("data-transform", DataTransformExecutor())
    return registry


__all__ = [
    "build_default_registry",
    "WebhookTriggerExecutor",
    "GoHighLevelTriggerExecutor",
    "GoHighLevelActionExecutor",
    "OpenAIExecutor",
    "DataTransformExecutor",
]
