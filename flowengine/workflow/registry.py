# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Executor Registry

Maps a node's integration and module type to the unit of work that runs it.
Keys are "<integration>-<moduleType>" with "<integration>" as fallback.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Iterator, Optional

from .context import ExecutionContext
from .models import WorkflowNode

ExecutorFunc = Callable[[WorkflowNode, ExecutionContext], Awaitable[Any]]


class NodeExecutor(ABC):
    """
    Performs one node's work.

    Business-level failures should be reported through context logs and a
    best-effort output. Raising aborts the whole run.
    """

    @abstractmethod
    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        ...


class FunctionExecutor(NodeExecutor):
    """Adapts a bare coroutine function to NodeExecutor"""

    def __init__(self, func: ExecutorFunc):
        self.func = func

    async def execute(self, node: WorkflowNode, context: ExecutionContext) -> Any:
        return await self.func(node, context)

    def __repr__(self) -> str:
        return f"FunctionExecutor({getattr(self.func, '__name__', self.func)!r})"


def executor_key(integration: Optional[str], module_type: Optional[str] = None) -> str:
    """Registration key for an integration and optional module type"""
    if module_type:
        return f"{integration}-{module_type}"
    return integration or ""


class ExecutorRegistry:
    """Registration table of node executors"""

    def __init__(self):
        self._executors: Dict[str, NodeExecutor] = {}

    def register(self, key: str, executor: NodeExecutor) -> None:
        """Register (or replace) the executor for `key`"""
        if not key:
            raise ValueError("Executor key must not be empty")
        if not isinstance(executor, NodeExecutor):
            raise TypeError(f"Executor for '{key}' must implement NodeExecutor, got {type(executor).__name__}")
        self._executors[key] = executor

    def executor(self, key: str) -> Callable[[ExecutorFunc], ExecutorFunc]:
        """
        Decorator registering a coroutine function under `key`.

            @registry.executor("slack-send-message")
            async def send_message(node, context):
                ...
        """
        def decorator(func: ExecutorFunc) -> ExecutorFunc:
            self.register(key, FunctionExecutor(func))
            return func
        return decorator

    def unregister(self, key: str) -> None:
        self._executors.pop(key, None)

    def get(self, key: str) -> Optional[NodeExecutor]:
        return self._executors.get(key)

    def resolve(self, node: WorkflowNode) -> Optional[NodeExecutor]:
        """
        Find the executor for a node.

        Exact "<integration>-<moduleType>" match first, then "<integration>".
        Returns None when neither is registered.
        """
        integration = node.data.integration
        if not integration:
            return None

        if node.data.module_type:
            executor = self._executors.get(executor_key(integration, node.data.module_type))
            if executor is not None:
                return executor

        return self._executors.get(integration)

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._executors))

    def __contains__(self, key: str) -> bool:
        return key in self._executors

    def __len__(self) -> int:
        return len(self._executors)
