# tests/conftest.py
import pytest

from graphsample import GraphEdge, GraphNode, make_rng


def make_nodes(ids):
    return [GraphNode(id=i, labels=["Node"], properties={}) for i in ids]


def make_edges(pairs, prefix="e"):
    return [
        GraphEdge(id=f"{prefix}{i}", source=s, target=t, type="CONNECTS", properties={})
        for i, (s, t) in enumerate(pairs)
    ]


def make_chain(length):
    """Path n0 - n1 - ... - n{length}: length+1 nodes, `length` edges."""
    nodes = make_nodes([f"n{i}" for i in range(length + 1)])
    edges = make_edges([(f"n{i}", f"n{i + 1}") for i in range(length)])
    return nodes, edges


@pytest.fixture
def two_chains():
    """10 nodes, two chains sharing n0: n0-n1-n2-n3-n4 and n0-n5-n6-n7-n8-n9."""
    nodes = make_nodes([f"n{i}" for i in range(10)])
    edges = make_edges([
        ("n0", "n1"), ("n1", "n2"), ("n2", "n3"), ("n3", "n4"),
        ("n0", "n5"), ("n5", "n6"), ("n6", "n7"), ("n7", "n8"), ("n8", "n9"),
    ])
    return nodes, edges


@pytest.fixture
def rng():
    return make_rng(42)
