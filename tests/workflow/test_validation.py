# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for graph validation and execution ordering
"""

import pytest
from flowengine.workflow.models import WorkflowNode, WorkflowEdge
from flowengine.workflow.validation import (
    validate_graph,
    topological_sort,
    unscheduled_nodes,
    execution_order,
)
from flowengine.workflow.exceptions import WorkflowValidationError, CyclicGraphError
from flowengine.core.errors import ValidationError


def nodes(*ids):
    return [WorkflowNode(id=node_id) for node_id in ids]


def edges(*pairs):
    return [WorkflowEdge(source=source, target=target) for source, target in pairs]


def assert_topological(order, edge_list):
    position = {node_id: i for i, node_id in enumerate(order)}
    for edge in edge_list:
        assert position[edge.source] < position[edge.target], f"{edge.source} must precede {edge.target}"


def test_no_edges_keeps_declaration_order():
    """Without edges every node is ready at once, in declaration order"""
    assert topological_sort(nodes("C", "A", "B"), []) == ["C", "A", "B"]


def test_serial_chain():
    """A → B → C"""
    graph_edges = edges(("A", "B"), ("B", "C"))
    assert topological_sort(nodes("C", "B", "A"), graph_edges) == ["A", "B", "C"]


def test_diamond_is_valid_topological_order():
    """A → [B, C] → D"""
    graph_edges = edges(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"))
    order = topological_sort(nodes("A", "B", "C", "D"), graph_edges)

    assert order == ["A", "B", "C", "D"]
    assert_topological(order, graph_edges)


def test_ties_follow_fifo_queue_order():
    """Simultaneously-ready nodes run in the order they became ready"""
    graph_edges = edges(("X", "Z"), ("Y", "W"))
    order = topological_sort(nodes("X", "Y", "Z", "W"), graph_edges)

    assert order == ["X", "Y", "Z", "W"]


def test_wide_graph_respects_every_edge():
    node_list = nodes("n1", "n2", "n3", "n4", "n5", "n6")
    graph_edges = edges(("n6", "n1"), ("n5", "n2"), ("n1", "n2"), ("n4", "n3"), ("n2", "n3"))

    order = topological_sort(node_list, graph_edges)

    assert sorted(order) == sorted(n.id for n in node_list)
    assert_topological(order, graph_edges)


def test_order_is_deterministic():
    node_list = nodes("a", "b", "c", "d", "e")
    graph_edges = edges(("a", "c"), ("b", "c"), ("c", "e"), ("d", "e"))

    first = topological_sort(node_list, graph_edges)
    for _ in range(5):
        assert topological_sort(node_list, graph_edges) == first


def test_cycle_nodes_are_dropped():
    """A → B → C → B: B and C can never become ready"""
    node_list = nodes("A", "B", "C")
    graph_edges = edges(("A", "B"), ("B", "C"), ("C", "B"))

    order = topological_sort(node_list, graph_edges)

    assert order == ["A"]
    assert unscheduled_nodes(node_list, order) == ["B", "C"]


def test_nodes_downstream_of_cycle_are_dropped():
    node_list = nodes("A", "B", "C", "D")
    graph_edges = edges(("B", "C"), ("C", "B"), ("C", "D"))

    order = topological_sort(node_list, graph_edges)

    assert order == ["A"]
    assert unscheduled_nodes(node_list, order) == ["B", "C", "D"]


def test_self_loop_is_dropped():
    order = topological_sort(nodes("A", "B"), edges(("B", "B")))
    assert order == ["A"]


def test_execution_order_lenient_by_default():
    node_list = nodes("A", "B")
    assert execution_order(node_list, edges(("A", "B"), ("B", "A"))) == []


def test_execution_order_strict_rejects_cycle():
    node_list = nodes("A", "B", "C")

    with pytest.raises(CyclicGraphError) as exc_info:
        execution_order(node_list, edges(("B", "C"), ("C", "B")), strict=True)

    assert exc_info.value.node_ids == ["B", "C"]
    assert exc_info.value.field == "edges"


def test_execution_order_strict_accepts_dag():
    node_list = nodes("A", "B")
    assert execution_order(node_list, edges(("A", "B")), strict=True) == ["A", "B"]


def test_duplicate_node_ids():
    """Duplicate node IDs should raise ValidationError"""
    with pytest.raises(WorkflowValidationError, match="Duplicate node IDs"):
        validate_graph(nodes("node1", "node1"), [])


def test_invalid_edge_source():
    with pytest.raises(WorkflowValidationError, match="non-existent node: nonexistent"):
        validate_graph(nodes("node1"), edges(("nonexistent", "node1")))


def test_invalid_edge_target():
    with pytest.raises(WorkflowValidationError, match="non-existent node: ghost"):
        execution_order(nodes("node1"), edges(("node1", "ghost")))


def test_validation_error_is_core_validation_error():
    """Graph errors map onto the shared 400-class error"""
    with pytest.raises(ValidationError) as exc_info:
        validate_graph(nodes("x", "x"), [])

    assert exc_info.value.status_code == 400
