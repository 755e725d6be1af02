"""
Graph sampling algorithms.

Three samplers, all pure functions of (nodes, edges, params, rng):

- ``random_sample``       uniform node subset + induced edges
- ``random_walk_sample``  union of `num_walks` random walks from one start node
- ``frontier_sample``     breadth-first expansion from seeds, capped at `max_nodes`

Walk and frontier results only contain edges the traversal actually crossed,
never the induced edge set. Visited ids are turned back into node records by
``resolve_nodes``; ids without a record (dangling edge endpoints, unknown
start ids) are dropped there and nowhere else.
"""
from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from . import GraphEdge, GraphNode, NodeId, SampleResult, make_rng
from .adjacency import build_adjacency
from .registry import register_sampler


# ---------- Result assembly ----------
def index_nodes(nodes: Sequence[GraphNode]) -> Dict[NodeId, GraphNode]:
    return {n.id: n for n in nodes}


def resolve_nodes(node_map: Dict[NodeId, GraphNode], ids: Iterable[NodeId]) -> List[GraphNode]:
    # TODO: report unresolved ids once callers agree on how to surface them
    return [node_map[i] for i in ids if i in node_map]


def select_edges(edges: Sequence[GraphEdge], edge_ids) -> List[GraphEdge]:
    return [e for e in edges if e.id in edge_ids]


# ---------- Samplers ----------
@register_sampler("random")
def random_sample(nodes: Sequence[GraphNode],
                  edges: Sequence[GraphEdge],
                  count: int,
                  rng: Optional[np.random.Generator] = None) -> SampleResult:
    """Pick `min(count, len(nodes))` distinct nodes uniformly and keep the induced edges."""
    rng = rng if rng is not None else make_rng()
    n = len(nodes)
    k = max(0, min(count, n))

    # partial Fisher-Yates: positions [0, k) end up a uniform k-subset in uniform order
    indices = list(range(n))
    for i in range(k):
        j = int(rng.integers(i, n))
        indices[i], indices[j] = indices[j], indices[i]

    sampled_nodes = [nodes[i] for i in indices[:k]]
    sampled_ids = {node.id for node in sampled_nodes}

    sampled_edges = [e for e in edges if e.source in sampled_ids and e.target in sampled_ids]
    return SampleResult(sampled_nodes=sampled_nodes, sampled_edges=sampled_edges)


@register_sampler("random_walk")
def random_walk_sample(nodes: Sequence[GraphNode],
                       edges: Sequence[GraphEdge],
                       start_node_id: NodeId,
                       walk_length: int,
                       num_walks: int,
                       rng: Optional[np.random.Generator] = None) -> SampleResult:
    """
    Run `num_walks` independent walks of up to `walk_length` steps from `start_node_id`.

    Each step crosses an incident edge chosen uniformly from the adjacency list
    (parallel edges and self-loops count once per incidence). A walk stops
    early at a node with no incident edges. Visited nodes/edges accumulate
    over all walks; the start node is always part of the result.
    """
    rng = rng if rng is not None else make_rng()
    adjacency = build_adjacency(edges)

    # dict keeps first-visit order
    visited_nodes: Dict[NodeId, None] = {start_node_id: None}
    visited_edges = set()

    for _ in range(num_walks):
        current = start_node_id
        for _ in range(walk_length):
            incident = adjacency.get(current)
            if not incident:
                break  # dead end

            edge = incident[int(rng.integers(len(incident)))]
            visited_edges.add(edge.id)
            current = edge.other_end(current)
            visited_nodes.setdefault(current, None)

    node_map = index_nodes(nodes)
    return SampleResult(
        sampled_nodes=resolve_nodes(node_map, visited_nodes),
        sampled_edges=select_edges(edges, visited_edges),
    )


@register_sampler("frontier")
def frontier_sample(nodes: Sequence[GraphNode],
                    edges: Sequence[GraphEdge],
                    start_node_ids: Sequence[NodeId],
                    max_nodes: int,
                    rng: Optional[np.random.Generator] = None) -> SampleResult:
    """
    Breadth-first expansion from every id in `start_node_ids`, visiting at most `max_nodes` nodes.

    An edge is recorded only when it discovers a not-yet-visited neighbour while
    budget remains. Edges between two nodes reached along other paths are
    left out, and so are recorded edges whose neighbour was still queued when
    the budget ran out. `rng` is accepted for a uniform sampler signature and
    unused.
    """
    adjacency = build_adjacency(edges)

    visited_nodes: Dict[NodeId, None] = {}
    discovered_by: Dict[str, NodeId] = {}  # edge id -> neighbour it was recorded for
    queue = deque(start_node_ids)

    while queue:
        current = queue.popleft()
        if len(visited_nodes) >= max_nodes:
            break
        if current in visited_nodes:
            continue

        visited_nodes[current] = None

        for edge in adjacency.get(current, ()):
            neighbor = edge.other_end(current)
            if neighbor not in visited_nodes and len(visited_nodes) < max_nodes:
                discovered_by.setdefault(edge.id, neighbor)
                queue.append(neighbor)

    visited_edges = {eid for eid, nid in discovered_by.items() if nid in visited_nodes}

    node_map = index_nodes(nodes)
    return SampleResult(
        sampled_nodes=resolve_nodes(node_map, visited_nodes),
        sampled_edges=select_edges(edges, visited_edges),
    )
