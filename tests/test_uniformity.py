"""Statistical sanity checks: uniform subsets, multiplicity-weighted walk steps."""
from collections import Counter
from itertools import combinations

import numpy as np

from graphsample import GraphEdge, make_rng
from graphsample.samplers import random_sample, random_walk_sample

from conftest import make_edges, make_nodes


def compute_cv(counts):
    """Compute coefficient of variation"""
    values = np.array(list(counts.values()), dtype=float)
    if len(values) == 0:
        return float('inf')
    mean = np.mean(values)
    std = np.std(values)
    if mean == 0:
        return float('inf')
    return std / mean


def test_random_sample_subsets_are_uniform():
    nodes = make_nodes([f"n{i}" for i in range(5)])
    rng = make_rng(7)
    num_samples = 5000

    subset_counts = Counter()
    for _ in range(num_samples):
        result = random_sample(nodes, [], 2, rng=rng)
        subset_counts[tuple(sorted(result.node_ids))] += 1

    # every 2-subset of 5 nodes shows up
    assert set(subset_counts) == {tuple(c) for c in combinations([f"n{i}" for i in range(5)], 2)}
    cv = compute_cv(subset_counts)
    assert cv < 0.15, f"subset frequencies not uniform (CV={cv:.3f})"


def test_random_sample_first_position_is_unbiased():
    nodes = make_nodes([f"n{i}" for i in range(6)])
    rng = make_rng(11)

    first = Counter()
    for _ in range(6000):
        result = random_sample(nodes, [], 3, rng=rng)
        first[result.sampled_nodes[0].id] += 1

    assert len(first) == 6
    assert compute_cv(first) < 0.15


def test_walk_step_weighted_by_edge_multiplicity():
    # two parallel a-b edges and one a-c edge: b should be reached ~2/3 of the time
    nodes = make_nodes(["a", "b", "c"])
    edges = make_edges([("a", "b"), ("b", "a"), ("a", "c")])
    rng = make_rng(3)

    trials = 3000
    hits_b = 0
    for _ in range(trials):
        result = random_walk_sample(nodes, edges, "a", walk_length=1, num_walks=1, rng=rng)
        if "b" in result.node_ids:
            hits_b += 1

    freq = hits_b / trials
    assert 0.60 < freq < 0.73, f"expected ~0.667, got {freq:.3f}"


def test_walk_self_loop_counts_twice():
    # loop contributes two incidences at a, the a-b edge one: stay put ~2/3 of the time
    nodes = make_nodes(["a", "b"])
    edges = [GraphEdge(id="loop", source="a", target="a")] + make_edges([("a", "b")])
    rng = make_rng(5)

    trials = 3000
    stayed = 0
    for _ in range(trials):
        result = random_walk_sample(nodes, edges, "a", walk_length=1, num_walks=1, rng=rng)
        if result.edge_ids == {"loop"}:
            stayed += 1

    freq = stayed / trials
    assert 0.60 < freq < 0.73, f"expected ~0.667, got {freq:.3f}"
