# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Validation and Scheduling

Graph checks plus execution ordering using topological sort (Kahn's algorithm).
"""

from typing import List, Dict, Sequence
from collections import deque

from .models import WorkflowNode, WorkflowEdge
from .exceptions import WorkflowValidationError, CyclicGraphError


def validate_graph(nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]) -> None:
    """
    Validate graph structure.

    Raises WorkflowValidationError on duplicate node IDs or edges that
    reference nodes outside the node set.
    """
    node_ids = [node.id for node in nodes]
    if len(node_ids) != len(set(node_ids)):
        duplicates = {nid for nid in node_ids if node_ids.count(nid) > 1}
        raise WorkflowValidationError(f"Duplicate node IDs found: {sorted(duplicates)}", field="nodes")

    node_id_set = set(node_ids)
    for edge in edges:
        if edge.source not in node_id_set:
            raise WorkflowValidationError(
                f"Edge references non-existent node: {edge.source}",
                field="edges"
            )
        if edge.target not in node_id_set:
            raise WorkflowValidationError(
                f"Edge references non-existent node: {edge.target}",
                field="edges"
            )


def topological_sort(nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]) -> List[str]:
    """
    Order node IDs with Kahn's algorithm.

    Ready nodes are taken FIFO, seeded in node declaration order, so the
    result is deterministic for a fixed input. Nodes that never reach
    in-degree zero (on or behind a cycle) are left out of the result.
    """
    graph: Dict[str, List[str]] = {node.id: [] for node in nodes}
    in_degree: Dict[str, int] = {node.id: 0 for node in nodes}

    for edge in edges:
        graph[edge.source].append(edge.target)
        in_degree[edge.target] += 1

    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)

    order = []
    while queue:
        node_id = queue.popleft()
        order.append(node_id)

        for neighbor in graph[node_id]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    return order


def unscheduled_nodes(nodes: Sequence[WorkflowNode], order: Sequence[str]) -> List[str]:
    """Node IDs missing from `order`, in declaration order"""
    scheduled = set(order)
    return [node.id for node in nodes if node.id not in scheduled]


def execution_order(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    strict: bool = False
) -> List[str]:
    """
    Validate the graph and return its execution order.

    With strict=True an incomplete order raises CyclicGraphError naming the
    nodes that could not be scheduled.
    """
    validate_graph(nodes, edges)
    order = topological_sort(nodes, edges)

    if strict:
        dropped = unscheduled_nodes(nodes, order)
        if dropped:
            raise CyclicGraphError(dropped)

    return order
