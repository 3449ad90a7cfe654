# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
File Gateway - workflow definitions and execution history as JSON files

Storage structure:
    <base_dir>/
    ├── workflows/
    │   └── {workflow_id}.json
    └── executions/
        └── {YYYY-MM-DD}/
            ├── exec_20250101_120000_ab12cd34.json
            └── ...

Async file locking per file prevents interleaved read-modify-write.
"""

import asyncio
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from flowengine.core.errors import NotFoundError, PersistenceError, ValidationError
from flowengine.core.logging import get_service_logger
from flowengine.workflow.models import (
    ExecutionRecord,
    ExecutionStatus,
    ExecutionUpdate,
    WorkflowDefinition,
    utc_now,
)
from .gateway import PersistenceGateway

logger = get_service_logger("file-store")


def _check_file_id(value: str, field: str) -> None:
    """Ids become file names; anything that could leave the store directory is rejected"""
    if not value or "/" in value or "\\" in value or ".." in value:
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)


class FileGateway(PersistenceGateway):
    """Gateway persisting to plain JSON files"""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)
        self.workflows_dir = self.base_dir / "workflows"
        self.executions_dir = self.base_dir / "executions"
        self.workflows_dir.mkdir(parents=True, exist_ok=True)
        self.executions_dir.mkdir(parents=True, exist_ok=True)

        # Async locks for file operations
        self._locks: Dict[str, asyncio.Lock] = {}

    def _get_lock(self, file_path: Path) -> asyncio.Lock:
        """Get or create lock for a specific file"""
        key = str(file_path)
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    @staticmethod
    def _new_execution_id() -> str:
        return f"exec_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    def _workflow_path(self, workflow_id: str) -> Path:
        _check_file_id(workflow_id, "workflow_id")
        return self.workflows_dir / f"{workflow_id}.json"

    def _execution_path(self, execution_id: str) -> Path:
        """Resolve file path from the date embedded in execution_id"""
        _check_file_id(execution_id, "execution_id")
        try:
            date_str = execution_id.split("_")[1]  # YYYYMMDD
            date = datetime.strptime(date_str, "%Y%m%d").strftime("%Y-%m-%d")
        except (IndexError, ValueError):
            raise NotFoundError("Execution", execution_id)
        return self.executions_dir / date / f"{execution_id}.json"

    async def _read_json(self, path: Path) -> Dict[str, Any]:
        try:
            async with aiofiles.open(path, "r") as f:
                return json.loads(await f.read())
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupt record {path.name}: {e}", operation="read")

    async def _write_json(self, path: Path, data: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "w") as f:
            await f.write(json.dumps(data, indent=2))

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    async def save_workflow(self, workflow: WorkflowDefinition) -> str:
        """Write a workflow definition; returns the file path"""
        path = self._workflow_path(workflow.id)
        async with self._get_lock(path):
            await self._write_json(path, workflow.model_dump(mode="json", by_alias=True))
        return str(path)

    async def load_workflow_definition(self, workflow_id: str) -> WorkflowDefinition:
        path = self._workflow_path(workflow_id)
        if not path.exists():
            raise NotFoundError("Workflow", workflow_id)

        data = await self._read_json(path)
        try:
            return WorkflowDefinition.model_validate(data)
        except PydanticValidationError as e:
            raise PersistenceError(f"Malformed workflow {workflow_id}: {e}", operation="load_workflow_definition")

    async def update_workflow_stats(self, workflow_id: str, last_executed_at: str, execution_count: int) -> None:
        path = self._workflow_path(workflow_id)
        if not path.exists():
            raise NotFoundError("Workflow", workflow_id)

        async with self._get_lock(path):
            data = await self._read_json(path)
            data["last_executed_at"] = last_executed_at
            data["execution_count"] = execution_count
            await self._write_json(path, data)

    # ------------------------------------------------------------------
    # Executions
    # ------------------------------------------------------------------

    async def create_execution_record(
        self,
        workflow_id: str,
        user_id: Optional[str],
        input_data: Any,
        status: ExecutionStatus = ExecutionStatus.RUNNING,
        idempotency_key: Optional[str] = None
    ) -> str:
        execution_id = self._new_execution_id()
        record = ExecutionRecord(
            id=execution_id,
            workflow_id=workflow_id,
            user_id=user_id,
            status=status,
            input_data=input_data,
            logs=[],
            started_at=utc_now(),
            idempotency_key=idempotency_key,
        )

        path = self._execution_path(execution_id)
        async with self._get_lock(path):
            await self._write_json(path, record.model_dump(mode="json", by_alias=True))

        return execution_id

    async def update_execution_record(self, execution_id: str, update: ExecutionUpdate) -> None:
        path = self._execution_path(execution_id)
        if not path.exists():
            raise NotFoundError("Execution", execution_id)

        async with self._get_lock(path):
            data = await self._read_json(path)
            data.update(update.changes())
            await self._write_json(path, data)

    async def get_execution_record(self, execution_id: str) -> ExecutionRecord:
        path = self._execution_path(execution_id)
        if not path.exists():
            raise NotFoundError("Execution", execution_id)
        return ExecutionRecord.model_validate(await self._read_json(path))

    async def _scan(self, workflow_id: str) -> List[ExecutionRecord]:
        """All execution records of a workflow, newest date directory first"""
        records = []
        for date_dir in sorted(self.executions_dir.glob("*"), reverse=True):
            if not date_dir.is_dir():
                continue

            for execution_file in sorted(date_dir.glob("exec_*.json"), reverse=True):
                try:
                    data = await self._read_json(execution_file)
                except PersistenceError as e:
                    logger.warning(f"Skipping unreadable execution file {execution_file.name}: {e}")
                    continue

                if data.get("workflow_id") == workflow_id:
                    records.append(ExecutionRecord.model_validate(data))

        return records

    async def list_executions_for_workflow(self, workflow_id: str, limit: int = 10) -> List[ExecutionRecord]:
        records = await self._scan(workflow_id)
        records.sort(key=lambda r: r.started_at, reverse=True)
        return records[:limit]

    async def find_execution_by_idempotency_key(
        self,
        workflow_id: str,
        idempotency_key: str
    ) -> Optional[ExecutionRecord]:
        for record in await self._scan(workflow_id):
            if record.idempotency_key == idempotency_key:
                return record
        return None
