import io
import json

import pytest

from graphsample import ServerConfig
from graphsample.protocol import Request
from graphsample.registry import METHOD_REG, register_method
from graphsample.server import SamplerServer

from conftest import make_chain


def _wire(nodes, edges):
    return {"nodes": [n.to_dict() for n in nodes], "edges": [e.to_dict() for e in edges]}


def _line(method, params=None, id=1):
    return json.dumps({"jsonrpc": "2.0", "id": id, "method": method, "params": params or {}})


@pytest.fixture
def server():
    return SamplerServer(ServerConfig(seed=42))


def test_protocol_version(server):
    resp = server.handle_line(_line("protocol.version"))
    assert resp == {"jsonrpc": "2.0", "id": 1, "result": {"version": "1.0.0", "features": ["sampling"]}}


def test_blank_line_has_no_response(server):
    assert server.handle_line("   \n") is None


def test_parse_error_uses_id_zero(server):
    resp = server.handle_line("{not json")
    assert resp["id"] == 0
    assert resp["error"]["code"] == -32700
    assert resp["error"]["message"].startswith("Parse error")


def test_invalid_request(server):
    resp = server.handle_line(json.dumps({"jsonrpc": "2.0", "id": 5}))
    assert resp["id"] == 5
    assert resp["error"]["code"] == -32600


def test_unknown_method(server):
    resp = server.handle_line(_line("invalid.method", id=5))
    assert resp["id"] == 5
    assert resp["error"] == {"code": -32601, "message": "Method not found: invalid.method"}


def test_invalid_params_is_structured(server, two_chains):
    params = _wire(*two_chains)  # no count
    resp = server.handle_line(_line("sample.random", params, id=2))
    assert resp["error"]["code"] == -32602
    assert resp["error"]["message"].startswith("Invalid params:")
    assert "result" not in resp


def test_internal_error_keeps_server_alive(server):
    @register_method("test.explode")
    def explode(params, rng):
        raise RuntimeError("boom")

    try:
        resp = server.handle_line(_line("test.explode", id=7))
        assert resp["error"] == {"code": -32603, "message": "boom"}
        # next request still answered
        assert "result" in server.handle_line(_line("protocol.version", id=8))
    finally:
        METHOD_REG.unregister("test.explode")


def test_sample_random_over_wire(server, two_chains):
    params = _wire(*two_chains)
    params["count"] = 12
    resp = server.handle_line(_line("sample.random", params, id=2))

    result = resp["result"]
    assert len(result["sampledNodes"]) == 10
    assert len(result["sampledEdges"]) == 9
    assert set(result["sampledEdges"][0]) == {"id", "source", "target", "type", "properties"}


def test_sample_random_walk_over_wire(server, two_chains):
    params = _wire(*two_chains)
    params.update(startNodeId="n0", walkLength=0, numWalks=1)
    result = server.handle_line(_line("sample.randomWalk", params))["result"]

    assert [n["id"] for n in result["sampledNodes"]] == ["n0"]
    assert result["sampledEdges"] == []


def test_sample_frontier_over_wire(server, two_chains):
    params = _wire(*two_chains)
    params.update(startNodeIds=["n0"], maxNodes=5)
    result = server.handle_line(_line("sample.frontier", params))["result"]

    assert {n["id"] for n in result["sampledNodes"]} == {"n0", "n1", "n5", "n2", "n6"}
    assert len(result["sampledEdges"]) == 4


def test_request_seed_makes_result_reproducible(two_chains):
    params = _wire(*two_chains)
    params.update(startNodeId="n0", walkLength=20, numWalks=5, seed=2024)

    # different server generators, same per-request seed
    a = SamplerServer(ServerConfig(seed=1)).handle_line(_line("sample.randomWalk", params))
    b = SamplerServer(ServerConfig(seed=2)).handle_line(_line("sample.randomWalk", params))
    assert a["result"] == b["result"]


def test_server_seed_makes_sequence_reproducible(two_chains):
    params = _wire(*two_chains)
    params["count"] = 3
    lines = [_line("sample.random", params, id=i) for i in range(5)]

    s1, s2 = SamplerServer(ServerConfig(seed=9)), SamplerServer(ServerConfig(seed=9))
    assert [s1.handle_line(l) for l in lines] == [s2.handle_line(l) for l in lines]


def test_serve_loop_reads_until_eof(server):
    nodes, edges = make_chain(3)
    params = _wire(nodes, edges)
    params.update(startNodeIds=["n0"], maxNodes=2)
    stdin = io.StringIO("\n".join([
        _line("protocol.version", id=1),
        "",
        _line("sample.frontier", params, id=2),
        "garbage",
        _line("nope", id=3),
    ]) + "\n")
    stdout = io.StringIO()

    handled = server.serve(stdin, stdout)

    responses = [json.loads(l) for l in stdout.getvalue().splitlines()]
    assert [r["id"] for r in responses] == [1, 2, 0, 3]
    assert [n["id"] for n in responses[1]["result"]["sampledNodes"]] == ["n0", "n1"]
    assert "error" in responses[2] and "error" in responses[3]
    assert handled == 2


def test_handle_request_directly(server):
    resp = server.handle_request(Request(id=11, method="protocol.version"))
    assert resp["id"] == 11 and resp["result"]["version"] == "1.0.0"
