from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional

import numpy as np

# ----- Type aliases -----
NodeId = str
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

SamplerFn = Callable[..., "SampleResult"]

PROTOCOL_VERSION = "1.0.0"
FEATURES = ("sampling",)


# ----- Graph records -----
@dataclass(frozen=True)
class GraphNode:
    id: NodeId
    labels: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"id": self.id, "labels": list(self.labels), "properties": dict(self.properties)}


@dataclass(frozen=True)
class GraphEdge:
    """
    Edge record. Carries a source/target direction on the wire, but every
    sampler walks it in both directions.
    """
    id: str
    source: NodeId
    target: NodeId
    type: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)

    def other_end(self, node_id: NodeId) -> NodeId:
        # self-loops come back to node_id
        return self.target if self.source == node_id else self.source

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "properties": dict(self.properties),
        }


@dataclass
class SampleResult:
    sampled_nodes: List[GraphNode] = field(default_factory=list)
    sampled_edges: List[GraphEdge] = field(default_factory=list)

    @property
    def node_ids(self) -> set:
        return {n.id for n in self.sampled_nodes}

    @property
    def edge_ids(self) -> set:
        return {e.id for e in self.sampled_edges}

    def to_dict(self) -> dict:
        return {
            "sampledNodes": [n.to_dict() for n in self.sampled_nodes],
            "sampledEdges": [e.to_dict() for e in self.sampled_edges],
        }


# ----- Runtime config -----
@dataclass
class ServerConfig:
    name: str = "graphsample"
    seed: Optional[int] = None          # None -> OS entropy
    log_level: LogLevel = "INFO"


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded generator for reproducible runs, OS entropy when `seed` is None."""
    return np.random.default_rng(seed)


# ----- Config overlay -----
def merge_into_dataclass(dc, src: Mapping[str, Any] | None) -> List[str]:
    """
    Copy values from dict-like `src` onto dataclass `dc` in place.

    Keys whose value is None keep the dataclass default. Returns the keys of
    `src` that `dc` has no field for, so callers can decide whether that's fatal.
    """
    if src is None:
        return []
    if not isinstance(src, Mapping):
        raise TypeError("merge_into_dataclass expects a Mapping as `src`")

    known = {f.name for f in fields(dc)}
    for key, value in src.items():
        if key in known and value is not None:
            setattr(dc, key, value)
    return sorted(k for k in src if k not in known)
