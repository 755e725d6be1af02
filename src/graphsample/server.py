"""
Sampling sidecar: newline-delimited JSON-RPC over stdin/stdout.

Each input line is one request, each output line one response, flushed
immediately. Diagnostics go to stderr through `logging`. The loop exits
cleanly at end of input.

Run with ``python -m graphsample`` or the ``graphsample-serve`` script.
"""
from __future__ import annotations

import json
import logging
import sys
import time
from typing import IO, Any, Dict, Optional

import numpy as np

from . import FEATURES, PROTOCOL_VERSION, ServerConfig, make_rng
from . import samplers
from .protocol import (
    FrontierSampleParams,
    INVALID_REQUEST,
    InvalidRequestError,
    ParamsError,
    PARSE_ERROR,
    RandomSampleParams,
    RandomWalkParams,
    Request,
    error_response,
    internal_error,
    invalid_params,
    method_not_found,
    success_response,
)
from .registry import get_method, has_method, register_method

logger = logging.getLogger(__name__)


def _request_rng(seed: Optional[int], rng: np.random.Generator) -> np.random.Generator:
    # a per-request seed gets its own stream, otherwise share the server's
    return make_rng(seed) if seed is not None else rng


# ---------- Method handlers ----------
@register_method("protocol.version")
def protocol_version(params: Dict[str, Any], rng: np.random.Generator) -> dict:
    return {"version": PROTOCOL_VERSION, "features": list(FEATURES)}


@register_method("sample.random")
def sample_random(params: Dict[str, Any], rng: np.random.Generator) -> dict:
    p = RandomSampleParams.from_dict(params)
    result = samplers.random_sample(p.nodes, p.edges, p.count, rng=_request_rng(p.seed, rng))
    return result.to_dict()


@register_method("sample.randomWalk")
def sample_random_walk(params: Dict[str, Any], rng: np.random.Generator) -> dict:
    p = RandomWalkParams.from_dict(params)
    result = samplers.random_walk_sample(
        p.nodes, p.edges, p.start_node_id, p.walk_length, p.num_walks,
        rng=_request_rng(p.seed, rng),
    )
    return result.to_dict()


@register_method("sample.frontier")
def sample_frontier(params: Dict[str, Any], rng: np.random.Generator) -> dict:
    p = FrontierSampleParams.from_dict(params)
    result = samplers.frontier_sample(p.nodes, p.edges, p.start_node_ids, p.max_nodes)
    return result.to_dict()


# ---------- Server ----------
def setup_logger(name: str = "graphsample", level: str = "INFO") -> logging.Logger:
    log = logging.getLogger(name)
    log.setLevel(level)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    fmt = logging.Formatter('%(asctime)s | %(levelname)s | %(message)s')
    ch.setFormatter(fmt)
    if not log.handlers:
        log.addHandler(ch)
    return log


class SamplerServer:
    """Dispatches decoded requests to the registered method handlers."""

    def __init__(self, cfg: Optional[ServerConfig] = None):
        self.cfg = cfg if cfg is not None else ServerConfig()
        self.rng = make_rng(self.cfg.seed)
        self.handled = 0

    def handle_request(self, request: Request) -> dict:
        if not has_method(request.method):
            logger.warning("Unknown method %r (id=%s)", request.method, request.id)
            return method_not_found(request.id, request.method)

        handler = get_method(request.method)
        start = time.perf_counter()
        try:
            result = handler(request.params, self.rng)
        except ParamsError as e:
            logger.info("Rejected %s (id=%s): %s", request.method, request.id, e)
            return invalid_params(request.id, str(e))
        except Exception as e:
            logger.exception("Handler for %s failed (id=%s)", request.method, request.id)
            return internal_error(request.id, str(e))

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("%s id=%s done in %.2f ms", request.method, request.id, elapsed_ms)
        self.handled += 1
        return success_response(request.id, result)

    def handle_line(self, line: str) -> Optional[dict]:
        """Decode one input line and answer it. Blank lines produce no response."""
        if not line.strip():
            return None

        try:
            raw = json.loads(line)
        except json.JSONDecodeError as e:
            logger.error("Error parsing request: %s", e)
            return error_response(0, PARSE_ERROR, f"Parse error: {e}")

        try:
            request = Request.from_dict(raw)
        except InvalidRequestError as e:
            logger.error("%s", e)
            return error_response(e.request_id, INVALID_REQUEST, str(e))

        return self.handle_request(request)

    def serve(self, stdin: IO[str], stdout: IO[str]) -> int:
        """Answer requests from `stdin` until it is exhausted. Returns the count handled."""
        logger.info("%s accelerator v%s started", self.cfg.name, PROTOCOL_VERSION)
        for line in stdin:
            response = self.handle_line(line)
            if response is None:
                continue
            try:
                stdout.write(json.dumps(response) + "\n")
                stdout.flush()
            except OSError as e:
                logger.error("Error writing response: %s", e)
                break
        logger.info("End of input after %d successful requests, shutting down", self.handled)
        return self.handled


def main(cfg: Optional[ServerConfig] = None) -> None:
    cfg = cfg if cfg is not None else ServerConfig()
    setup_logger("graphsample", cfg.log_level)
    SamplerServer(cfg).serve(sys.stdin, sys.stdout)

