from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from togglit_client import VARIANTS

APP_NAME = "togglit"
CONFIG_FILENAME = "config.toml"
DEFAULT_VARIANT = "hosted"

ENV_API_KEY = "TOGGLIT_API_KEY"
ENV_PROJECT_ID = "TOGGLIT_PROJECT_ID"
ENV_ENV = "TOGGLIT_ENV"

PROFILE_KEYS = ("project_id", "env", "api_key", "variant")


@dataclass
class AppConfig:
    project_id: str = ""
    env: str = ""
    api_key: str = ""
    variant: str = DEFAULT_VARIANT
    profiles: dict[str, dict[str, str]] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_variant(raw: str | None) -> str:
    value = (raw or "").strip().lower()
    if not value:
        return DEFAULT_VARIANT
    if value not in VARIANTS:
        raise ValueError(f"Unknown variant '{raw}'. Expected one of: {', '.join(sorted(VARIANTS))}")
    return value


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_empty(
        {
            "project_id": cfg.project_id,
            "env": cfg.env,
            "api_key": cfg.api_key,
            "variant": cfg.variant,
            "profiles": cfg.profiles,
        }
    )


def _prune_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_empty(v) for k, v in value.items() if v not in (None, "")}
    return value


def _read_str_fields(raw: dict[str, Any]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key in PROFILE_KEYS:
        value = raw.get(key)
        if value is not None:
            out[key] = str(value).strip()
    return out


def from_toml(data: dict[str, Any]) -> AppConfig:
    fields = _read_str_fields(data)
    profiles: dict[str, dict[str, str]] = {}
    profiles_raw = data.get("profiles") or {}
    if isinstance(profiles_raw, dict):
        for name, prof in profiles_raw.items():
            if isinstance(prof, dict):
                profiles[str(name)] = _read_str_fields(prof)

    return AppConfig(
        project_id=fields.get("project_id", ""),
        env=fields.get("env", ""),
        api_key=fields.get("api_key", ""),
        variant=fields.get("variant") or DEFAULT_VARIANT,
        profiles=profiles,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    prof = cfg.profiles.get(profile)
    if prof is None:
        raise KeyError(profile)
    overrides = {k: v for k, v in prof.items() if v}
    return replace(cfg, **overrides)


def apply_env(cfg: AppConfig) -> AppConfig:
    """Environment variables win over the settings file."""
    overrides: dict[str, str] = {}
    for attr, env_name in (("api_key", ENV_API_KEY), ("project_id", ENV_PROJECT_ID), ("env", ENV_ENV)):
        value = os.getenv(env_name, "").strip()
        if value:
            overrides[attr] = value
    return replace(cfg, **overrides) if overrides else cfg


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
