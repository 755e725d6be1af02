from graphsample import GraphEdge
from graphsample.adjacency import build_adjacency, degree

from conftest import make_edges


def test_edge_indexed_under_both_endpoints():
    edges = make_edges([("a", "b"), ("b", "c")])
    adj = build_adjacency(edges)

    assert [e.id for e in adj["a"]] == ["e0"]
    assert [e.id for e in adj["b"]] == ["e0", "e1"]
    assert [e.id for e in adj["c"]] == ["e1"]


def test_self_loop_appears_twice():
    loop = GraphEdge(id="loop", source="a", target="a")
    adj = build_adjacency([loop])

    assert adj["a"] == [loop, loop]
    assert degree(adj, "a") == 2


def test_parallel_edges_not_deduplicated():
    edges = make_edges([("a", "b"), ("a", "b"), ("b", "a")])
    adj = build_adjacency(edges)

    assert [e.id for e in adj["a"]] == ["e0", "e1", "e2"]
    assert [e.id for e in adj["b"]] == ["e0", "e1", "e2"]


def test_dangling_endpoint_still_indexed():
    # the index does not know about the node list
    adj = build_adjacency(make_edges([("a", "ghost")]))
    assert "ghost" in adj


def test_unknown_node_has_degree_zero_and_is_not_inserted():
    adj = build_adjacency(make_edges([("a", "b")]))
    assert degree(adj, "zzz") == 0
    assert "zzz" not in adj


def test_empty_edge_list():
    assert build_adjacency([]) == {}
