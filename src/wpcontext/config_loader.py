"""
Centralized configuration loading for wp-context.

Environment facts (the values a real WordPress would expose through constants,
options and superglobals) are read from `environment.json` so a request can be
replayed without WordPress.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Optional

from wpcontext.environment import StaticEnvironment

CONFIG_DIR_ENV = "WPCONTEXT_CONFIG_DIR"
STRICT_ENV = "WPCONTEXT_STRICT_CONFIG"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"
ENVIRONMENT_FILE = "environment.json"

_BOOL_FACTS = frozenset(
    {
        "core_loaded",
        "installing",
        "xml_rpc",
        "cli",
        "ajax",
        "admin",
        "cron",
        "multisite",
        "rest_flagged",
    }
)
_MAPPING_FACTS = frozenset({"query", "request"})


def _resolve_config_dir(config_dir: Optional[str]) -> Path:
    if config_dir:
        return Path(config_dir)
    env_dir = os.getenv(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_CONFIG_DIR


def _resolve_strict(strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    env = os.getenv(STRICT_ENV, "")
    return env.lower() in {"1", "true", "yes", "on"}


def _warn_or_raise(msg: str, *, strict: bool) -> None:
    if strict:
        raise ValueError(msg)
    print(f"Warning: {msg}", file=sys.stderr)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _load_json(path: Path, *, strict: bool) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        if strict:
            raise FileNotFoundError(f"Missing config file: {path}") from exc
        print(f"Warning: {path} not found.", file=sys.stderr)
        return {}
    except json.JSONDecodeError as exc:
        if strict:
            raise ValueError(f"Malformed config file: {path} ({exc})") from exc
        print(f"Warning: {path} is malformed ({exc}).", file=sys.stderr)
        return {}


def _ensure_dict(payload: Any, *, name: str, strict: bool) -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    _warn_or_raise(f"Expected {name} to be an object.", strict=strict)
    return {}


def build_environment(
    facts: dict[str, Any], *, strict: Optional[bool] = None
) -> StaticEnvironment:
    """
    Build a StaticEnvironment from a flat mapping of facts.

    Unknown keys and values of the wrong shape are dropped with a warning,
    or rejected in strict mode.
    """
    strict_flag = _resolve_strict(strict)
    known = StaticEnvironment.fact_names()
    kwargs: dict[str, Any] = {}

    for key, value in facts.items():
        if key not in known:
            _warn_or_raise(f"Unknown environment fact '{key}'.", strict=strict_flag)
            continue
        if key in _BOOL_FACTS:
            kwargs[key] = _as_bool(value)
        elif key in _MAPPING_FACTS:
            if not isinstance(value, dict):
                _warn_or_raise(f"Expected '{key}' to be an object.", strict=strict_flag)
                continue
            kwargs[key] = dict(value)
        else:
            kwargs[key] = "" if value is None else str(value)

    return StaticEnvironment(**kwargs)


def load_environment_facts(
    path: Optional[str] = None,
    *,
    config_dir: Optional[str] = None,
    strict: Optional[bool] = None,
) -> dict[str, Any]:
    strict_flag = _resolve_strict(strict)
    config_path = Path(path) if path else _resolve_config_dir(config_dir) / ENVIRONMENT_FILE
    payload = _load_json(config_path, strict=strict_flag)
    return _ensure_dict(payload, name=config_path.name, strict=strict_flag)


def load_environment(
    path: Optional[str] = None,
    *,
    config_dir: Optional[str] = None,
    strict: Optional[bool] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> StaticEnvironment:
    strict_flag = _resolve_strict(strict)
    facts = load_environment_facts(path, config_dir=config_dir, strict=strict_flag)
    if overrides:
        facts = {**facts, **overrides}
    return build_environment(facts, strict=strict_flag)
