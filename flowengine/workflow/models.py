# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Models

Pydantic models for stored workflow graphs and their execution records.
Wire names (moduleType, nodeId) match what the graph editor stores.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field, ConfigDict


def utc_now() -> str:
    """ISO-8601 timestamp in UTC"""
    return datetime.now(timezone.utc).isoformat()


# ============================================================================
# Workflow Definition Models
# ============================================================================

class NodeData(BaseModel):
    """Node payload: integration tag, module type and integration config"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    integration: Optional[str] = None
    module_type: Optional[str] = Field(default=None, alias="moduleType")

    def get(self, key: str, default: Any = None) -> Any:
        """Read an integration-specific config value"""
        extra = self.model_extra or {}
        return extra.get(key, default)


class WorkflowNode(BaseModel):
    """Single step in a workflow"""
    id: str
    data: NodeData = Field(default_factory=NodeData)
    position: Optional[Dict[str, Any]] = None  # Editor layout only


class WorkflowEdge(BaseModel):
    """Directed dependency between two nodes"""
    source: str
    target: str


class WorkflowGraph(BaseModel):
    """Stored `definition` payload"""
    nodes: List[WorkflowNode] = []
    edges: List[WorkflowEdge] = []
    variables: Dict[str, Any] = {}


class WorkflowDefinition(BaseModel):
    """Workflow row as loaded from the persistence gateway"""
    id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    definition: WorkflowGraph = Field(default_factory=WorkflowGraph)
    execution_count: int = 0
    last_executed_at: Optional[str] = None


# ============================================================================
# Execution Models
# ============================================================================

class ExecutionStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class LogType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class ExecutionLog(BaseModel):
    """Single audit entry appended during a run"""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str = Field(default_factory=utc_now)
    node_id: Optional[str] = Field(default=None, alias="nodeId")
    message: str
    type: LogType = LogType.INFO
    data: Optional[Any] = None


class ExecutionRecord(BaseModel):
    """Persisted outcome of one run"""
    id: str
    workflow_id: str
    user_id: Optional[str] = None
    status: ExecutionStatus = ExecutionStatus.PENDING
    input_data: Any = None
    output_data: Any = None
    logs: List[ExecutionLog] = []
    error: Optional[str] = None
    started_at: str = Field(default_factory=utc_now)
    completed_at: Optional[str] = None
    idempotency_key: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (ExecutionStatus.COMPLETED, ExecutionStatus.FAILED)


class ExecutionUpdate(BaseModel):
    """Partial update of an execution record; only set fields are written"""
    status: Optional[ExecutionStatus] = None
    completed_at: Optional[str] = None
    logs: Optional[List[ExecutionLog]] = None
    output_data: Any = None
    error: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """JSON-ready dict of explicitly set fields"""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class RunRequest(BaseModel):
    """Request to run a workflow"""
    user_id: str
    input_data: Optional[Dict[str, Any]] = None
    idempotency_key: Optional[str] = None
