# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution API Routes

Run-now trigger, status polling and run history.
"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from flowengine.core.errors import FlowEngineError, NotFoundError, sanitize_error_for_user
from flowengine.core.logging import get_api_logger
from flowengine.workflow.models import ExecutionRecord, RunRequest
from flowengine.workflow.runner import WorkflowRunner

router = APIRouter(tags=["executions"])
logger = get_api_logger()


def get_runner(request: Request) -> WorkflowRunner:
    """WorkflowRunner from app.state (initialized by create_app)"""
    return request.app.state.runner


@router.post("/workflows/{workflow_id}/execute")
async def execute_workflow(
    workflow_id: str,
    body: RunRequest,
    runner: WorkflowRunner = Depends(get_runner)
) -> Dict[str, Any]:
    """Run a workflow to completion"""
    try:
        execution_id = await runner.execute_workflow(
            workflow_id,
            body.user_id,
            input_data=body.input_data,
            idempotency_key=body.idempotency_key
        )
    except FlowEngineError as e:
        # NotFoundError -> 404, graph validation -> 400, store failure -> 502
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Workflow {workflow_id} execution failed: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Workflow execution failed: {sanitize_error_for_user(e, include_type=False)}"
        )

    return {"success": True, "executionId": execution_id}


@router.get("/executions/{execution_id}", response_model=ExecutionRecord)
async def get_execution(
    execution_id: str,
    runner: WorkflowRunner = Depends(get_runner)
) -> ExecutionRecord:
    """Execution status and logs"""
    try:
        return await runner.get_execution_status(execution_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/workflows/{workflow_id}/executions", response_model=List[ExecutionRecord])
async def list_executions(
    workflow_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    runner: WorkflowRunner = Depends(get_runner)
) -> List[ExecutionRecord]:
    """Most recent executions of a workflow"""
    return await runner.get_workflow_executions(
        workflow_id,
        limit=limit or runner.config.default_execution_limit
    )
