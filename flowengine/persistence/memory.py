# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
In-memory persistence gateway.

Used for tests and single-process deployments. Records are deep-copied on
the way in and out so callers never share mutable state with the store.
"""

import uuid
from typing import Any, Dict, List, Optional

from flowengine.core.errors import NotFoundError
from flowengine.workflow.models import (
    ExecutionRecord,
    ExecutionStatus,
    ExecutionUpdate,
    WorkflowDefinition,
    utc_now,
)
from .gateway import PersistenceGateway


class InMemoryGateway(PersistenceGateway):
    """Dict-backed gateway"""

    def __init__(self):
        self.workflows: Dict[str, WorkflowDefinition] = {}
        self.executions: Dict[str, ExecutionRecord] = {}

    def save_workflow(self, workflow: WorkflowDefinition) -> WorkflowDefinition:
        """Seed or replace a workflow definition"""
        self.workflows[workflow.id] = workflow.model_copy(deep=True)
        return workflow

    async def load_workflow_definition(self, workflow_id: str) -> WorkflowDefinition:
        workflow = self.workflows.get(workflow_id)
        if workflow is None:
            raise NotFoundError("Workflow", workflow_id)
        return workflow.model_copy(deep=True)

    async def create_execution_record(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Any,
        status: ExecutionStatus = ExecutionStatus.RUNNING,
        idempotency_key: Optional[str] = None
    ) -> str:
        execution_id = str(uuid.uuid4())
        self.executions[execution_id] = ExecutionRecord(
            id=execution_id,
            workflow_id=workflow_id,
            user_id=user_id,
            status=status,
            input_data=input_data,
            logs=[],
            started_at=utc_now(),
            idempotency_key=idempotency_key,
        )
        return execution_id

    async def update_execution_record(self, execution_id: str, update: ExecutionUpdate) -> None:
        record = self.executions.get(execution_id)
        if record is None:
            raise NotFoundError("Execution", execution_id)

        changes = {field: getattr(update, field) for field in update.model_fields_set}
        self.executions[execution_id] = record.model_copy(update=changes, deep=True)

    async def update_workflow_stats(self, workflow_id: str, last_executed_at: str, execution_count: int) -> None:
        workflow = self.workflows.get(workflow_id)
        if workflow is None:
            raise NotFoundError("Workflow", workflow_id)

        workflow.last_executed_at = last_executed_at
        workflow.execution_count = execution_count

    async def get_execution_record(self, execution_id: str) -> ExecutionRecord:
        record = self.executions.get(execution_id)
        if record is None:
            raise NotFoundError("Execution", execution_id)
        return record.model_copy(deep=True)

    async def list_executions_for_workflow(self, workflow_id: str, limit: int = 10) -> List[ExecutionRecord]:
        records = [r for r in self.executions.values() if r.workflow_id == workflow_id]
        # Insertion order breaks started_at ties
        records = list(reversed(records))
        records.sort(key=lambda r: r.started_at, reverse=True)
        return [r.model_copy(deep=True) for r in records[:limit]]

    async def find_execution_by_idempotency_key(
        self,
        workflow_id: str,
        idempotency_key: str
    ) -> Optional[ExecutionRecord]:
        for record in self.executions.values():
            if record.workflow_id == workflow_id and record.idempotency_key == idempotency_key:
                return record.model_copy(deep=True)
        return None
