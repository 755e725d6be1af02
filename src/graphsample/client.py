"""
Client for the sampling sidecar.

Spawns ``python -m graphsample`` (or a custom command), talks JSON-RPC over
its pipes and decodes results back into ``SampleResult``. When the sidecar
can't be started, or fails during a call, and `fallback` is on, the same
samplers run in-process.

    with SamplerClient() as client:
        result = client.frontier_sample(nodes, edges, ["n0"], max_nodes=5)
"""
from __future__ import annotations

import itertools
import json
import logging
import subprocess
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import PROTOCOL_VERSION, GraphEdge, GraphNode, SampleResult, make_rng
from . import samplers
from .protocol import INTERNAL_ERROR, PARSE_ERROR, Request, sample_result_from_dict

logger = logging.getLogger(__name__)


class SamplerUnavailableError(RuntimeError):
    pass


class SamplerRpcError(RuntimeError):
    def __init__(self, code: int, message: str, method: str = ""):
        super().__init__(f"{method}: {message} (code {code})" if method else f"{message} (code {code})")
        self.code = code
        self.message = message
        self.method = method


class SamplerClient:
    def __init__(self,
                 command: Optional[Sequence[str]] = None,
                 fallback: bool = True,
                 seed: Optional[int] = None):
        self.command = list(command) if command else [sys.executable, "-m", "graphsample"]
        self.fallback = fallback
        self.available = False
        self.version: Optional[str] = None
        self.features: List[str] = []
        self._process: Optional[subprocess.Popen] = None
        self._ids = itertools.count(1)
        self._rng = make_rng(seed)  # only used by the in-process fallback

    # ---------- lifecycle ----------
    def start(self) -> bool:
        try:
            self._process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            logger.warning("Failed to start sampler sidecar %s: %s. Using in-process samplers.", self.command, e)
            self.available = False
            return False

        self.available = True
        try:
            info = self._rpc("protocol.version", {})
        except (SamplerUnavailableError, SamplerRpcError) as e:
            logger.warning("Sampler sidecar did not answer protocol.version: %s", e)
            self.stop()
            return False

        self.version = info.get("version")
        self.features = list(info.get("features", []))
        if self.version != PROTOCOL_VERSION:
            logger.warning("Protocol version mismatch: expected %s, got %s", PROTOCOL_VERSION, self.version)
        logger.info("Sampler sidecar started (version=%s, features=%s)", self.version, self.features)
        return True

    def stop(self) -> None:
        self.available = False
        proc, self._process = self._process, None
        if proc is None:
            return
        if proc.stdin:
            try:
                proc.stdin.close()
            except BrokenPipeError:
                pass  # sidecar already gone
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            logger.warning("Sampler sidecar did not exit, killing it")
            proc.kill()
            proc.wait()
        if proc.stdout:
            proc.stdout.close()

    def __enter__(self) -> "SamplerClient":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    # ---------- transport ----------
    def _rpc(self, method: str, params: Dict[str, Any]) -> Any:
        proc = self._process
        if not self.available or proc is None or proc.poll() is not None:
            self.available = False
            raise SamplerUnavailableError("Sampler sidecar not available")

        request = Request(id=next(self._ids), method=method, params=params)
        try:
            proc.stdin.write(json.dumps(request.to_dict()) + "\n")
            proc.stdin.flush()
            line = proc.stdout.readline()
        except OSError as e:
            self.available = False
            raise SamplerUnavailableError(f"Sampler sidecar pipe broken: {e}")

        if not line:
            self.available = False
            raise SamplerUnavailableError("Sampler sidecar exited")

        try:
            response = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Unparsable sidecar response %r: %s", line.rstrip("\n"), e)
            raise SamplerRpcError(PARSE_ERROR, f"Unparsable response: {e}", method)
        if not isinstance(response, dict):
            raise SamplerRpcError(PARSE_ERROR, "Response is not a JSON object", method)
        if response.get("id") != request.id:
            raise SamplerRpcError(INTERNAL_ERROR, f"Response id {response.get('id')} does not match request {request.id}", method)
        if "error" in response:
            err = response["error"]
            raise SamplerRpcError(err.get("code", 0), err.get("message", ""), method)
        return response["result"]

    def _call_sampler(self, method: str, params: Dict[str, Any]) -> SampleResult:
        return sample_result_from_dict(self._rpc(method, params))

    def _use_fallback(self) -> bool:
        if self.available:
            return False
        if not self.fallback:
            raise SamplerUnavailableError("Sampler sidecar not available and fallback disabled")
        return True

    def _fallback_rng(self, seed: Optional[int]):
        return make_rng(seed) if seed is not None else self._rng

    @staticmethod
    def _graph_params(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> Dict[str, Any]:
        return {"nodes": [n.to_dict() for n in nodes], "edges": [e.to_dict() for e in edges]}

    # ---------- sampling ----------
    def _sample(self, method: str, params: Dict[str, Any], local: Callable[[], SampleResult]) -> SampleResult:
        if self._use_fallback():
            return local()
        try:
            return self._call_sampler(method, params)
        except (SamplerUnavailableError, SamplerRpcError) as e:
            if not self.fallback:
                raise
            logger.warning("Sidecar %s failed, falling back to in-process sampler: %s", method, e)
            return local()

    def random_sample(self, nodes, edges, count: int, seed: Optional[int] = None) -> SampleResult:
        params = self._graph_params(nodes, edges)
        params["count"] = count
        if seed is not None:
            params["seed"] = seed
        return self._sample(
            "sample.random", params,
            lambda: samplers.random_sample(nodes, edges, count, rng=self._fallback_rng(seed)),
        )

    def random_walk_sample(self, nodes, edges, start_node_id: str, walk_length: int, num_walks: int,
                           seed: Optional[int] = None) -> SampleResult:
        params = self._graph_params(nodes, edges)
        params.update(startNodeId=start_node_id, walkLength=walk_length, numWalks=num_walks)
        if seed is not None:
            params["seed"] = seed
        return self._sample(
            "sample.randomWalk", params,
            lambda: samplers.random_walk_sample(nodes, edges, start_node_id, walk_length, num_walks,
                                                rng=self._fallback_rng(seed)),
        )

    def frontier_sample(self, nodes, edges, start_node_ids: Sequence[str], max_nodes: int) -> SampleResult:
        params = self._graph_params(nodes, edges)
        params.update(startNodeIds=list(start_node_ids), maxNodes=max_nodes)
        return self._sample(
            "sample.frontier", params,
            lambda: samplers.frontier_sample(nodes, edges, start_node_ids, max_nodes),
        )
