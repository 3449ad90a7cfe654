# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Shared fixtures for engine, gateway and API tests.
"""

from typing import Any, Dict, List, Tuple

import pytest

from flowengine.core.config import Config
from flowengine.executors import build_default_registry
from flowengine.persistence.memory import InMemoryGateway
from flowengine.workflow.models import WorkflowDefinition
from flowengine.workflow.runner import WorkflowRunner


def build_workflow(
    workflow_id: str,
    nodes: List[Dict[str, Any]],
    edges: List[Tuple[str, str]] = (),
    user_id: str = "user-1",
    execution_count: int = 0
) -> WorkflowDefinition:
    """
    Build a workflow definition from compact node dicts.

    nodes: [{"id": "A", "integration": "webhook-trigger", "moduleType": ...}, ...]
    edges: [("A", "B"), ...]
    """
    node_payloads = []
    for entry in nodes:
        entry = dict(entry)
        node_id = entry.pop("id")
        node_payloads.append({
            "id": node_id,
            "type": "custom",
            "position": {"x": 0, "y": 0},
            "data": entry,
        })

    return WorkflowDefinition.model_validate({
        "id": workflow_id,
        "user_id": user_id,
        "name": f"Workflow {workflow_id}",
        "definition": {
            "nodes": node_payloads,
            "edges": [
                {"id": f"e-{source}-{target}", "source": source, "target": target}
                for source, target in edges
            ],
            "variables": {},
        },
        "execution_count": execution_count,
    })


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def runner(gateway, registry, config):
    return WorkflowRunner(gateway, registry, config)


@pytest.fixture
def sms_workflow(gateway):
    """Webhook trigger -> GoHighLevel send-sms"""
    workflow = build_workflow(
        "wf-sms",
        nodes=[
            {"id": "A", "integration": "webhook-trigger"},
            {"id": "B", "integration": "gohighlevel-action", "moduleType": "send-sms"},
        ],
        edges=[("A", "B")],
    )
    gateway.save_workflow(workflow)
    return workflow


@pytest.fixture
def webhook_input():
    return {"webhookData": {"phone": "+15551234567"}}


@pytest.fixture
def make_workflow():
    """Factory fixture around build_workflow"""
    return build_workflow
