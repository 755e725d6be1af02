# graphsample/cli.py
import argparse
from typing import List

from graphsample.config import load_config, resolve_config_path, set_config
from graphsample.server import main as serve


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Serve graph sampling requests as JSON-RPC over stdin/stdout.")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config file (JSON/YAML). Accepts absolute paths, or paths relative to "
             "$GRAPHSAMPLE_CONFIG_DIR or to the current directory.",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Seed the server's random generator (default: non-deterministic).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level for stderr diagnostics (DEBUG, INFO, WARNING, ...).",
    )
    args = parser.parse_args(argv)

    cfg_dict = {}
    if args.config:
        cfg_dict = load_config(str(resolve_config_path(args.config)))
    if args.log_level is not None:
        cfg_dict["log_level"] = args.log_level

    cfg = set_config(cfg_dict)
    # --seed beats both the file and $GRAPHSAMPLE_SEED
    if args.seed is not None:
        if args.seed < 0:
            parser.error("--seed must be non-negative")
        cfg.seed = args.seed

    serve(cfg)
