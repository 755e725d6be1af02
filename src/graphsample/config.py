import os
import json
from pathlib import Path
from typing import Dict, Any, get_args

import yaml

from . import LogLevel, ServerConfig, merge_into_dataclass

SEED_ENV = "GRAPHSAMPLE_SEED"
CONFIG_DIR_ENV = "GRAPHSAMPLE_CONFIG_DIR"


def resolve_config_path(user_path: str) -> Path:
    """
    Resolve --config in three ways:
    1) If absolute or exists as given, use it.
    2) If GRAPHSAMPLE_CONFIG_DIR is set, resolve relative to it.
    3) Relative to CWD.
    """
    p = Path(user_path)
    if p.is_file():
        return p

    base_env = os.environ.get(CONFIG_DIR_ENV)
    if base_env:
        candidate = Path(base_env) / user_path
        if candidate.is_file():
            return candidate

    candidate = Path.cwd() / user_path
    if candidate.is_file():
        return candidate

    raise FileNotFoundError(
        f"Config file not found. Tried: '{user_path}', "
        f"${CONFIG_DIR_ENV}/{user_path}, and CWD."
    )


def load_config(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"`{path}` doesn't exist.")
    with open(path) as f:
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"`{path}` must contain a mapping at top level.")
    return data


def set_config(cfg_dict: dict | None = None,
               *,
               strict: bool = True) -> ServerConfig:
    """
    Build a fully-populated ServerConfig:
      - merge cfg_dict onto dataclass defaults (unknown keys are an error)
      - apply GRAPHSAMPLE_SEED from the environment
      - validate (optional)
    """
    cfg = ServerConfig()                             # defaults
    unknown = merge_into_dataclass(cfg, cfg_dict)    # overlay file values

    env_seed = os.environ.get(SEED_ENV)
    if env_seed:
        try:
            cfg.seed = int(env_seed)
        except ValueError:
            raise ValueError(f"${SEED_ENV} must be an integer, got {env_seed!r}")

    if isinstance(cfg.log_level, str):
        cfg.log_level = cfg.log_level.upper()

    problems = []
    if unknown:
        problems.append(f"unknown keys: {unknown}")
    if cfg.seed is not None and (isinstance(cfg.seed, bool) or not isinstance(cfg.seed, int) or cfg.seed < 0):
        problems.append(f"seed must be a non-negative integer or null, got {cfg.seed!r}")
    if cfg.log_level not in get_args(LogLevel):
        problems.append(f"log_level must be one of {list(get_args(LogLevel))}, got {cfg.log_level!r}")

    if strict and problems:
        bullet = "\n  - ".join(problems)
        raise ValueError(f"Invalid configuration:\n  - {bullet}")

    return cfg
