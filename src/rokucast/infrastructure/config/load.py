from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides


_SECTION_KEYS: set[str] = {"roku", "search", "http", "logging"}

_EMBY_ENV_KEYS: dict[str, str] = {
    "emby_server_url": "serverUrl",
    "emby_api_key": "apiKey",
    "emby_user_id": "userId",
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Recursively merge `override` into `base` and return `base`.

    Rules:
    - dict + dict => deep merge
    - otherwise => override wins (lists are replaced, not concatenated)
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, Mapping)
        ):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize a layer (defaults/YAML/ENV/CLI) into the canonical *sectioned* shape.

    Canonical top-level keys:
    - app_name, environment
    - roku.device_ip, roku.device_name, roku.port, roku.*_delay_ms
    - channels (list of {type, enabled, config})
    - search.default_limit, search.*_timeout_seconds, search.brave_*
    - http.timeout_seconds, http.user_agent
    - logging.level, logging.format
    """
    out: dict[str, Any] = {}

    # Pass through already sectioned blocks
    for section in _SECTION_KEYS:
        if section in data and isinstance(data[section], Mapping):
            out[section] = dict(data[section])

    # General
    for key in ("app_name", "environment"):
        if key in data:
            out[key] = data[key]

    if "channels" in data and data["channels"] is not None:
        if not isinstance(data["channels"], list):
            raise ValueError(
                f"'channels' must be a list, got: {type(data['channels'])!r}"
            )
        out["channels"] = [dict(c) for c in data["channels"]]

    # Flat -> section mappings
    flat_map: dict[str, tuple[str, str]] = {
        "roku_device_ip": ("roku", "device_ip"),
        "roku_device_name": ("roku", "device_name"),
        "roku_port": ("roku", "port"),
        "roku_keypress_delay_ms": ("roku", "keypress_delay_ms"),
        "roku_char_delay_ms": ("roku", "char_delay_ms"),
        "search_default_limit": ("search", "default_limit"),
        "search_plugin_timeout_seconds": ("search", "plugin_timeout_seconds"),
        "search_source_timeout_seconds": ("search", "source_timeout_seconds"),
        "search_brave_max_results": ("search", "brave_max_results"),
        "brave_api_key": ("search", "brave_api_key"),
        "http_timeout_seconds": ("http", "timeout_seconds"),
        "http_user_agent": ("http", "user_agent"),
        "log_level": ("logging", "level"),
        "log_format": ("logging", "format"),
    }

    for flat_key, (section, section_key) in flat_map.items():
        if flat_key in data:
            out.setdefault(section, {})
            out[section][section_key] = data[flat_key]

    return out


def _apply_emby_env(base: dict[str, Any], env: Mapping[str, Any]) -> None:
    """Register (or replace) the Emby channel from ROKUCAST_EMBY_* variables."""
    present = {k: env[k] for k in _EMBY_ENV_KEYS if env.get(k)}
    if not present:
        return
    missing = sorted(set(_EMBY_ENV_KEYS) - set(present))
    if missing:
        raise ValueError(
            "Emby env configuration is incomplete, missing: "
            + ", ".join(f"ROKUCAST_{k.upper()}" for k in missing)
        )
    definition = {
        "type": "emby",
        "enabled": True,
        "config": {_EMBY_ENV_KEYS[k]: v for k, v in present.items()},
    }
    channels = [
        c
        for c in base.get("channels", [])
        if str(c.get("type", "")).strip().lower() != "emby"
    ]
    # Emby first: native library results are preferred over web hits.
    base["channels"] = [definition, *channels]


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    raw = config_path.read_text(encoding="utf-8")
    parsed = yaml.safe_load(raw)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(
            f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars < cli overrides

    This function MUST NOT create files or directories (no filesystem side-effects).
    """
    cli_overrides = cli_overrides or {}

    # Load .env first so it participates as "env vars" layer.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    base = _normalize_layer(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        yaml_layer = _normalize_layer(_read_yaml_config(config_path))
        _deep_merge(base, yaml_layer)

    env_layer_flat = EnvOverrides().to_update_dict()
    env_layer = _normalize_layer(env_layer_flat)
    _deep_merge(base, env_layer)
    _apply_emby_env(base, env_layer_flat)

    cli_layer = _normalize_layer(cli_overrides)
    _deep_merge(base, cli_layer)

    # Validate final merged config (single source of truth).
    return AppConfig.model_validate(base)
