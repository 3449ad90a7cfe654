# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Runner

Sequential execution of a stored workflow graph:
load definition -> schedule -> run nodes in order -> persist terminal state.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from flowengine.core.config import Config, get_config
from flowengine.core.logging import get_service_logger, log_event
from .context import ExecutionContext
from .exceptions import ExecutionCancelledError, ExecutionTimeoutError
from .models import (
    ExecutionRecord,
    ExecutionStatus,
    ExecutionUpdate,
    LogType,
    WorkflowDefinition,
    utc_now,
)
from .registry import ExecutorRegistry
from .validation import execution_order, unscheduled_nodes

if TYPE_CHECKING:
    from flowengine.persistence.gateway import PersistenceGateway

logger = get_service_logger("runner")


class ExecutionHandle:
    """
    Handle on a run dispatched with WorkflowRunner.start_workflow.

    The execution id is available immediately; wait() resolves once the
    record has reached a terminal status.
    """

    def __init__(self, execution_id: str, task: Optional[asyncio.Task] = None):
        self.execution_id = execution_id
        self._task = task

    def done(self) -> bool:
        return self._task is None or self._task.done()

    def cancel(self) -> bool:
        """Request cancellation; the run is recorded as failed"""
        if self._task is None:
            return False
        return self._task.cancel()

    async def wait(self) -> str:
        """Wait for the run and return its id, re-raising a run failure"""
        if self._task is None:
            return self.execution_id
        try:
            await self._task
        except asyncio.CancelledError:
            if self._task.cancelled():
                raise ExecutionCancelledError(self.execution_id)
            raise
        return self.execution_id


class WorkflowRunner:
    """
    Runs workflows one node at a time.

    Stateless across runs: every call gets its own ExecutionContext and
    ExecutionRecord, so concurrent runs only share the gateway.
    """

    def __init__(
        self,
        gateway: "PersistenceGateway",
        registry: ExecutorRegistry,
        config: Optional[Config] = None
    ):
        self.gateway = gateway
        self.registry = registry
        self.config = config or get_config()
        # Created on first use, inside the running loop
        self._idempotency_lock: Optional[asyncio.Lock] = None

    async def execute_workflow(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None
    ) -> str:
        """
        Run a workflow to completion and return its execution id.

        Blocks until the record is terminal. Any failure is persisted on the
        record and then re-raised.
        """
        execution_id, created = await self._claim(workflow_id, user_id, input_data, idempotency_key)
        if created:
            await self._run(execution_id, workflow_id, user_id, input_data)
        return execution_id

    async def start_workflow(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None
    ) -> ExecutionHandle:
        """Create the record, then run the workflow as a background task"""
        execution_id, created = await self._claim(workflow_id, user_id, input_data, idempotency_key)
        if not created:
            return ExecutionHandle(execution_id)

        task = asyncio.create_task(
            self._run(execution_id, workflow_id, user_id, input_data),
            name=f"workflow-run-{execution_id}"
        )
        task.add_done_callback(self._on_task_done)
        return ExecutionHandle(execution_id, task)

    async def get_execution_status(self, execution_id: str) -> ExecutionRecord:
        return await self.gateway.get_execution_record(execution_id)

    async def get_workflow_executions(self, workflow_id: str, limit: int = 10) -> List[ExecutionRecord]:
        return await self.gateway.list_executions_for_workflow(workflow_id, limit)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def _claim(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Optional[Dict[str, Any]],
        idempotency_key: Optional[str]
    ) -> Tuple[str, bool]:
        """
        Return (execution_id, created).

        Keyed triggers are serialized through one lock so that concurrent
        duplicates in this process resolve to a single record. Across
        processes uniqueness is up to the store.
        """
        if not idempotency_key:
            return await self._create_record(workflow_id, user_id, input_data, None), True

        if self._idempotency_lock is None:
            self._idempotency_lock = asyncio.Lock()

        async with self._idempotency_lock:
            existing = await self._find_existing(workflow_id, idempotency_key)
            if existing is not None:
                return existing.id, False
            return await self._create_record(workflow_id, user_id, input_data, idempotency_key), True

    async def _find_existing(self, workflow_id: str, idempotency_key: Optional[str]) -> Optional[ExecutionRecord]:
        if not idempotency_key:
            return None

        existing = await self.gateway.find_execution_by_idempotency_key(workflow_id, idempotency_key)
        if existing is not None:
            log_event(
                logger, "Duplicate trigger ignored",
                workflow_id=workflow_id,
                execution_id=existing.id,
                idempotency_key=idempotency_key
            )
        return existing

    async def _create_record(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Optional[Dict[str, Any]],
        idempotency_key: Optional[str]
    ) -> str:
        execution_id = await self.gateway.create_execution_record(
            workflow_id,
            user_id,
            input_data or {},
            status=ExecutionStatus.RUNNING,
            idempotency_key=idempotency_key
        )
        log_event(logger, "Workflow execution started", workflow_id=workflow_id, execution_id=execution_id)
        return execution_id

    async def _run(
        self,
        execution_id: str,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Optional[Dict[str, Any]]
    ) -> None:
        input_data = input_data or {}
        context = ExecutionContext(
            workflow_id,
            execution_id,
            user_id,
            variables=input_data,
            namespaced=self.config.namespaced_variables
        )

        try:
            workflow = await self.gateway.load_workflow_definition(workflow_id)
            order = self._schedule(workflow, context)

            last_output = await self._with_timeout(
                execution_id,
                self._execute_nodes(workflow, order, context, input_data)
            )

            await self.gateway.update_execution_record(
                execution_id,
                ExecutionUpdate(
                    status=ExecutionStatus.COMPLETED,
                    completed_at=utc_now(),
                    logs=context.logs,
                    output_data=last_output
                )
            )

        except asyncio.CancelledError:
            await self._mark_failed(execution_id, context, ExecutionCancelledError(execution_id))
            raise
        except Exception as e:
            await self._mark_failed(execution_id, context, e)
            raise

        # The record is terminal from here on
        await self._update_stats(workflow)

        log_event(
            logger, "Workflow execution completed",
            workflow_id=workflow_id,
            execution_id=execution_id,
            log_entries=len(context.logs)
        )

    async def _update_stats(self, workflow: WorkflowDefinition) -> None:
        try:
            await self.gateway.update_workflow_stats(
                workflow.id,
                last_executed_at=utc_now(),
                execution_count=workflow.execution_count + 1
            )
        except Exception as e:
            logger.warning(f"Could not update run statistics for workflow {workflow.id}: {e}")

    async def _with_timeout(self, execution_id: str, coro) -> Any:
        timeout = self.config.run_timeout
        if not timeout:
            return await coro
        try:
            return await asyncio.wait_for(coro, timeout=timeout)
        except asyncio.TimeoutError:
            raise ExecutionTimeoutError(execution_id, timeout)

    def _schedule(self, workflow: WorkflowDefinition, context: ExecutionContext) -> List[str]:
        """Compute the run's node order once"""
        graph = workflow.definition
        order = execution_order(graph.nodes, graph.edges, strict=self.config.strict_cycles)

        dropped = unscheduled_nodes(graph.nodes, order)
        if dropped:
            context.log(
                None,
                f"{len(dropped)} node(s) skipped: part of or only reachable through a cycle",
                LogType.WARNING,
                data={"unscheduled": dropped}
            )
            logger.warning(f"Workflow {workflow.id} has unschedulable nodes: {dropped}")

        return order

    async def _execute_nodes(
        self,
        workflow: WorkflowDefinition,
        order: List[str],
        context: ExecutionContext,
        input_data: Dict[str, Any]
    ) -> Any:
        """Run nodes in order; returns the last executed node's output"""
        nodes_by_id = {node.id: node for node in workflow.definition.nodes}
        last_output: Any = input_data
        last_node_id: Optional[str] = None

        for node_id in order:
            node = nodes_by_id.get(node_id)
            if node is None:
                continue

            context.merge(last_output, node_id=last_node_id)

            executor = self.registry.resolve(node)
            if executor is None:
                context.log(node.id, f"No executor found for {node.data.integration}", LogType.WARNING)
                logger.warning(f"No executor registered for node {node.id} (integration={node.data.integration})")
                continue

            try:
                last_output = await executor.execute(node, context)
                last_node_id = node.id
            except asyncio.CancelledError:
                context.log(node.id, "Node interrupted before completion", LogType.ERROR)
                raise
            except Exception as e:
                context.log(
                    node.id,
                    f"Error executing node: {e}",
                    LogType.ERROR,
                    data={"error_type": type(e).__name__}
                )
                raise

        return last_output

    async def _mark_failed(self, execution_id: str, context: ExecutionContext, error: BaseException) -> None:
        fields: Dict[str, Any] = {
            "status": ExecutionStatus.FAILED,
            "completed_at": utc_now(),
            "error": str(error),
        }
        if self.config.persist_logs_on_failure:
            fields["logs"] = context.logs

        logger.error(f"Workflow execution {execution_id} failed: {error}")
        await self.gateway.update_execution_record(execution_id, ExecutionUpdate(**fields))

    @staticmethod
    def _on_task_done(task: asyncio.Task) -> None:
        # Retrieve the exception so unawaited handles don't warn; it is already on the record
        if not task.cancelled():
            task.exception()
