"""Tests for deep_copy and copy_node independence."""

from dwgraph import DirectedWeightedGraph, GeoLocation, NodeRecord, VisitState


def make_graph() -> DirectedWeightedGraph:
    graph = DirectedWeightedGraph(verbose=False, log_rejected=False)
    positions = {1: (0.0, 0.0), 2: (3.0, 4.0), 3: (6.0, 8.0), 4: (1.0, 1.0)}
    for key, (x, y) in positions.items():
        graph.add_node(NodeRecord(key, GeoLocation(x, y, 0.0)))
    graph.connect(1, 2, 4.0)
    graph.connect(2, 3, 1.0)
    graph.connect(1, 3, 10.0)
    graph.connect(3, 1, 2.5)
    graph.connect(4, 2, 0.5)
    return graph


def test_copy_equals_original():
    graph = make_graph()
    clone = graph.deep_copy()

    assert clone == graph
    assert clone.node_size() == graph.node_size()
    assert clone.edge_size() == graph.edge_size()
    assert clone.mutation_count() == graph.mutation_count()
    for node in graph.all_nodes():
        assert clone.get_node(node.key) == node
    clone.check_invariants()


def test_copy_preserves_locations_and_scratch_fields():
    graph = make_graph()
    node = graph.get_node(2)
    node.weight = 7.0
    node.info = "note"
    node.tag = 1
    node.visit = VisitState.IN_PROGRESS
    graph.get_edge(1, 2).info = "edge-note"
    graph.get_edge(1, 2).tag = 3

    clone = graph.deep_copy()
    copied = clone.get_node(2)

    assert copied.location == GeoLocation(3.0, 4.0, 0.0)
    assert (copied.weight, copied.info, copied.tag) == (7.0, "note", 1)
    assert copied.visit is VisitState.IN_PROGRESS
    assert clone.get_edge(1, 2).info == "edge-note"
    assert clone.get_edge(1, 2).tag == 3


def test_no_object_is_shared():
    graph = make_graph()
    clone = graph.deep_copy()

    for node in graph.all_nodes():
        copied = clone.get_node(node.key)
        assert copied is not node
        assert copied.location is not node.location
        for dest, edge in node.outgoing.items():
            assert copied.outgoing[dest] is not edge
        for src, edge in node.incoming.items():
            assert copied.incoming[src] is not edge


def test_copied_edges_are_shared_between_endpoint_maps():
    clone = make_graph().deep_copy()
    for edge in clone.all_edges():
        assert clone.get_node(edge.dest).incoming[edge.src] is edge


def test_mutating_copy_leaves_original_intact():
    graph = make_graph()
    clone = graph.deep_copy()

    clone.remove_node(2)
    clone.connect(4, 1, 9.0)
    clone.get_edge(1, 3).weight = 0.0
    clone.get_node(1).location.x = 500.0
    clone.get_node(3).tag = 77

    assert graph.node_size() == 4
    assert graph.edge_size() == 5
    assert graph.get_edge(1, 2).weight == 4.0
    assert graph.get_edge(4, 1) is None
    assert graph.get_edge(1, 3).weight == 10.0
    assert graph.get_node(1).location.x == 0.0
    assert graph.get_node(3).tag == -1
    assert clone != graph
    graph.check_invariants()
    clone.check_invariants()


def test_mutating_original_leaves_copy_intact():
    graph = make_graph()
    clone = graph.deep_copy()

    graph.remove_edge(1, 2)
    graph.remove_node(4)

    assert clone.get_edge(1, 2).weight == 4.0
    assert clone.get_edge(4, 2).weight == 0.5
    assert clone.edge_size() == 5


def test_copy_of_empty_graph():
    graph = DirectedWeightedGraph(verbose=False, log_rejected=False)
    clone = graph.deep_copy()
    assert clone == graph
    assert clone is not graph
    assert clone.node_size() == 0


def test_copy_node_is_detached():
    graph = make_graph()
    original = graph.get_node(1)

    copied = graph.copy_node(original)

    assert copied == original
    assert copied is not original
    assert copied.outgoing[2] is not original.outgoing[2]
    assert set(copied.incoming) == {3}
    # The copy is not linked into the graph
    assert graph.get_node(1) is original
    copied.location.y = 123.0
    assert original.location.y == 0.0
