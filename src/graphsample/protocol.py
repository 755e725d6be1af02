"""
JSON-RPC 2.0 envelopes for the sampling sidecar.

Decoding turns wire dicts into the dataclasses in ``graphsample`` and raises
``ParamsError`` / ``InvalidRequestError`` for anything malformed. Encoding
produces plain dicts ready for ``json.dumps``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from . import GraphEdge, GraphNode, SampleResult

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ParamsError(ValueError):
    """Request params have the wrong shape or type."""


class InvalidRequestError(ValueError):
    """The envelope itself is not a valid JSON-RPC request."""

    def __init__(self, message: str, request_id: int = 0):
        super().__init__(message)
        self.request_id = request_id


# ---------- Envelopes ----------
@dataclass
class Request:
    id: int
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    jsonrpc: str = JSONRPC_VERSION

    @classmethod
    def from_dict(cls, raw: Any) -> "Request":
        if not isinstance(raw, Mapping):
            raise InvalidRequestError("Invalid request: expected a JSON object")

        request_id = raw.get("id")
        if not _is_uint(request_id):
            raise InvalidRequestError("Invalid request: `id` must be a non-negative integer")
        if raw.get("jsonrpc") != JSONRPC_VERSION:
            raise InvalidRequestError(f"Invalid request: `jsonrpc` must be \"{JSONRPC_VERSION}\"", request_id)
        method = raw.get("method")
        if not isinstance(method, str):
            raise InvalidRequestError("Invalid request: `method` must be a string", request_id)

        params = raw.get("params")
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise InvalidRequestError("Invalid request: `params` must be an object", request_id)

        return cls(id=request_id, method=method, params=dict(params))

    def to_dict(self) -> dict:
        return {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method, "params": self.params}


def success_response(request_id: int, result: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: int, code: int, message: str, data: Any = None) -> dict:
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def method_not_found(request_id: int, method: str) -> dict:
    return error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")


def invalid_params(request_id: int, message: str) -> dict:
    return error_response(request_id, INVALID_PARAMS, f"Invalid params: {message}")


def internal_error(request_id: int, message: str) -> dict:
    return error_response(request_id, INTERNAL_ERROR, message)


# ---------- Field helpers ----------
def _is_uint(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _require(params: Mapping[str, Any], key: str) -> Any:
    if key not in params:
        raise ParamsError(f"missing field `{key}`")
    return params[key]


def _uint(params: Mapping[str, Any], key: str) -> int:
    value = _require(params, key)
    if not _is_uint(value):
        raise ParamsError(f"`{key}` must be a non-negative integer, got {value!r}")
    return value


def _str(obj: Mapping[str, Any], key: str, where: str) -> str:
    value = _require(obj, key)
    if not isinstance(value, str):
        raise ParamsError(f"{where}.{key} must be a string, got {value!r}")
    return value


def _mapping(obj: Mapping[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = obj.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ParamsError(f"{where}.{key} must be an object")
    return dict(value)


# ---------- Graph records ----------
def node_from_dict(raw: Any, where: str = "node") -> GraphNode:
    if not isinstance(raw, Mapping):
        raise ParamsError(f"{where} must be an object")
    labels = raw.get("labels")
    if labels is None:
        labels = []
    if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
        raise ParamsError(f"{where}.labels must be a list of strings")
    return GraphNode(
        id=_str(raw, "id", where),
        labels=list(labels),
        properties=_mapping(raw, "properties", where),
    )


def edge_from_dict(raw: Any, where: str = "edge") -> GraphEdge:
    if not isinstance(raw, Mapping):
        raise ParamsError(f"{where} must be an object")
    edge_type = raw.get("type", "")
    if not isinstance(edge_type, str):
        raise ParamsError(f"{where}.type must be a string")
    return GraphEdge(
        id=_str(raw, "id", where),
        source=_str(raw, "source", where),
        target=_str(raw, "target", where),
        type=edge_type,
        properties=_mapping(raw, "properties", where),
    )


def _nodes(params: Mapping[str, Any]) -> List[GraphNode]:
    raw = _require(params, "nodes")
    if not isinstance(raw, list):
        raise ParamsError("`nodes` must be a list")
    return [node_from_dict(n, f"nodes[{i}]") for i, n in enumerate(raw)]


def _edges(params: Mapping[str, Any]) -> List[GraphEdge]:
    raw = _require(params, "edges")
    if not isinstance(raw, list):
        raise ParamsError("`edges` must be a list")
    return [edge_from_dict(e, f"edges[{i}]") for i, e in enumerate(raw)]


def _seed(params: Mapping[str, Any]) -> Optional[int]:
    if params.get("seed") is None:
        return None
    return _uint(params, "seed")


# ---------- Method params ----------
@dataclass
class RandomSampleParams:
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    count: int
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "RandomSampleParams":
        return cls(
            nodes=_nodes(params),
            edges=_edges(params),
            count=_uint(params, "count"),
            seed=_seed(params),
        )


@dataclass
class RandomWalkParams:
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    start_node_id: str
    walk_length: int
    num_walks: int
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "RandomWalkParams":
        return cls(
            nodes=_nodes(params),
            edges=_edges(params),
            start_node_id=_str(params, "startNodeId", "params"),
            walk_length=_uint(params, "walkLength"),
            num_walks=_uint(params, "numWalks"),
            seed=_seed(params),
        )


@dataclass
class FrontierSampleParams:
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    start_node_ids: List[str]
    max_nodes: int
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "FrontierSampleParams":
        start_ids = _require(params, "startNodeIds")
        if not isinstance(start_ids, list) or not all(isinstance(s, str) for s in start_ids):
            raise ParamsError("`startNodeIds` must be a list of strings")
        return cls(
            nodes=_nodes(params),
            edges=_edges(params),
            start_node_ids=list(start_ids),
            max_nodes=_uint(params, "maxNodes"),
            seed=_seed(params),
        )


def sample_result_from_dict(raw: Mapping[str, Any]) -> SampleResult:
    return SampleResult(
        sampled_nodes=[node_from_dict(n) for n in raw.get("sampledNodes", [])],
        sampled_edges=[edge_from_dict(e) for e in raw.get("sampledEdges", [])],
    )
