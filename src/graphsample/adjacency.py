from collections import defaultdict
from typing import Dict, List, Sequence

from . import GraphEdge, NodeId


def build_adjacency(edges: Sequence[GraphEdge]) -> Dict[NodeId, List[GraphEdge]]:
    """
    Index every edge under both of its endpoints.

    No deduplication: a self-loop shows up twice under its node and parallel
    edges each get their own entry, so a uniform pick over the list is
    weighted by multiplicity. Endpoints need not exist in the node list.
    """
    adj: Dict[NodeId, List[GraphEdge]] = defaultdict(list)
    for edge in edges:
        adj[edge.source].append(edge)
        adj[edge.target].append(edge)
    # plain dict so lookups of unknown ids don't insert keys
    return dict(adj)


def degree(adjacency: Dict[NodeId, List[GraphEdge]], node_id: NodeId) -> int:
    return len(adjacency.get(node_id, ()))
