# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Supabase Gateway

Talks to the `workflows` and `executions` tables through the PostgREST API
that Supabase exposes under /rest/v1.

The runner serializes keyed triggers within one process only. When several
engine processes share a project, give `executions` a unique index on
(workflow_id, idempotency_key); a duplicate insert then fails with 409 and
surfaces as PersistenceError instead of creating a second record.
"""

from typing import Any, Dict, List, Optional

import httpx

from flowengine.core.errors import NotFoundError, PersistenceError
from flowengine.workflow.models import (
    ExecutionRecord,
    ExecutionStatus,
    ExecutionUpdate,
    WorkflowDefinition,
    utc_now,
)
from .gateway import PersistenceGateway

WORKFLOWS_TABLE = "workflows"
EXECUTIONS_TABLE = "executions"


class SupabaseGateway(PersistenceGateway):
    """PostgREST-backed gateway"""

    def __init__(
        self,
        url: str,
        service_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not url or not service_key:
            raise PersistenceError("Supabase URL and service key are required", operation="connect")

        self.client = httpx.AsyncClient(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        table: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """Issue a PostgREST call, mapping transport and HTTP errors to PersistenceError"""
        try:
            response = await self.client.request(method, f"/{table}", params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PersistenceError(
                f"{operation} failed: {e.response.status_code} {e.response.text}",
                operation=operation,
                details={"status_code": e.response.status_code}
            )
        except httpx.HTTPError as e:
            raise PersistenceError(f"{operation} failed: {e}", operation=operation)

        if not response.content:
            return None
        return response.json()

    async def load_workflow_definition(self, workflow_id: str) -> WorkflowDefinition:
        rows = await self._request(
            "load_workflow_definition", "GET", WORKFLOWS_TABLE,
            params={"id": f"eq.{workflow_id}", "select": "*"}
        )
        if not rows:
            raise NotFoundError("Workflow", workflow_id)
        return WorkflowDefinition.model_validate(rows[0])

    async def create_execution_record(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Any,
        status: ExecutionStatus = ExecutionStatus.RUNNING,
        idempotency_key: Optional[str] = None
    ) -> str:
        row = {
            "workflow_id": workflow_id,
            "user_id": user_id,
            "status": status.value,
            "input_data": input_data,
            "logs": [],
            "started_at": utc_now(),
        }
        if idempotency_key is not None:
            row["idempotency_key"] = idempotency_key

        rows = await self._request(
            "create_execution_record", "POST", EXECUTIONS_TABLE,
            json=row,
            headers={"Prefer": "return=representation"}
        )
        if not rows:
            raise PersistenceError("Store returned no execution row", operation="create_execution_record")
        return str(rows[0]["id"])

    async def update_execution_record(self, execution_id: str, update: ExecutionUpdate) -> None:
        await self._request(
            "update_execution_record", "PATCH", EXECUTIONS_TABLE,
            params={"id": f"eq.{execution_id}"},
            json=update.changes()
        )

    async def update_workflow_stats(self, workflow_id: str, last_executed_at: str, execution_count: int) -> None:
        await self._request(
            "update_workflow_stats", "PATCH", WORKFLOWS_TABLE,
            params={"id": f"eq.{workflow_id}"},
            json={"last_executed_at": last_executed_at, "execution_count": execution_count}
        )

    async def get_execution_record(self, execution_id: str) -> ExecutionRecord:
        rows = await self._request(
            "get_execution_record", "GET", EXECUTIONS_TABLE,
            params={"id": f"eq.{execution_id}", "select": "*"}
        )
        if not rows:
            raise NotFoundError("Execution", execution_id)
        return ExecutionRecord.model_validate(rows[0])

    async def list_executions_for_workflow(self, workflow_id: str, limit: int = 10) -> List[ExecutionRecord]:
        rows = await self._request(
            "list_executions_for_workflow", "GET", EXECUTIONS_TABLE,
            params={
                "workflow_id": f"eq.{workflow_id}",
                "select": "*",
                "order": "started_at.desc",
                "limit": str(limit),
            }
        )
        return [ExecutionRecord.model_validate(row) for row in rows or []]

    async def find_execution_by_idempotency_key(
        self,
        workflow_id: str,
        idempotency_key: str
    ) -> Optional[ExecutionRecord]:
        rows = await self._request(
            "find_execution_by_idempotency_key", "GET", EXECUTIONS_TABLE,
            params={
                "workflow_id": f"eq.{workflow_id}",
                "idempotency_key": f"eq.{idempotency_key}",
                "select": "*",
                "limit": "1",
            }
        )
        if not rows:
            return None
        return ExecutionRecord.model_validate(rows[0])

    async def close(self) -> None:
        """Close HTTP client"""
        await self.client.aclose()
