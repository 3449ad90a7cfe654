# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Persistence Gateway

Narrow read/write contract the runner uses against the durable store.
Every call is independent; the runner never holds a lock across calls.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from flowengine.workflow.models import (
    ExecutionRecord,
    ExecutionStatus,
    ExecutionUpdate,
    WorkflowDefinition,
)


class PersistenceGateway(ABC):
    """
    Durable store for workflow definitions and execution records.

    Implementations raise NotFoundError for missing rows and
    PersistenceError when the store itself fails.
    """

    @abstractmethod
    async def load_workflow_definition(self, workflow_id: str) -> WorkflowDefinition:
        """Load a workflow row including its node/edge definition"""

    @abstractmethod
    async def create_execution_record(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Any,
        status: ExecutionStatus = ExecutionStatus.RUNNING,
        idempotency_key: Optional[str] = None
    ) -> str:
        """Insert a new execution record with empty logs; returns its id"""

    @abstractmethod
    async def update_execution_record(self, execution_id: str, update: ExecutionUpdate) -> None:
        """Apply the explicitly set fields of `update`"""

    @abstractmethod
    async def update_workflow_stats(
        self,
        workflow_id: str,
        last_executed_at: str,
        execution_count: int
    ) -> None:
        """Stamp run statistics on the workflow row"""

    @abstractmethod
    async def get_execution_record(self, execution_id: str) -> ExecutionRecord:
        """Fetch one execution record"""

    @abstractmethod
    async def list_executions_for_workflow(self, workflow_id: str, limit: int = 10) -> List[ExecutionRecord]:
        """Most recent executions of a workflow, newest first"""

    @abstractmethod
    async def find_execution_by_idempotency_key(
        self,
        workflow_id: str,
        idempotency_key: str
    ) -> Optional[ExecutionRecord]:
        """Execution previously created with this key, if any"""

    async def close(self) -> None:
        """Release store resources"""
        return None
