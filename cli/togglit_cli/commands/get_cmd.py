from __future__ import annotations

import asyncio
import json
from typing import Any

import typer

from togglit_client import ApiError, ConfigRequest, DecodeError, FetchOutcome, NetworkError

from .. import console
from ..config import apply_env, apply_profile, load_config
from ..http import make_fetcher


def _load_fallback(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        console.err(f"Cannot read fallback file {path}: {e}")
        raise typer.Exit(code=2)
    except ValueError as e:
        console.err(f"Fallback file {path} is not valid JSON: {e}")
        raise typer.Exit(code=2)
    if not isinstance(data, dict):
        console.err(f"Fallback file {path} must contain a JSON object.")
        raise typer.Exit(code=2)
    return data


def _describe_fallback(outcome: FetchOutcome) -> str:
    e = outcome.error
    if isinstance(e, ApiError):
        return f"server responded with HTTP {e.status_code}"
    if isinstance(e, NetworkError):
        return f"network error: {e}"
    if isinstance(e, DecodeError):
        return f"invalid response: {e}"
    return "response had no config field"


def get_config(
        project: str | None = typer.Option(None, "--project", "-p", help="Project id."),
        env: str | None = typer.Option(None, "--env", "-e", help="Environment name, e.g. production."),
        api_key: str | None = typer.Option(None, "--api-key", help="API key (overrides settings and TOGGLIT_API_KEY)."),
        version: int | None = typer.Option(None, "--version", help="Config revision to fetch."),
        bypass_cache: bool = typer.Option(False, "--bypass-cache", help="Force a fresh fetch."),
        fallback: str | None = typer.Option(None, "--fallback", help="JSON file used when the fetch fails."),
        variant: str | None = typer.Option(None, "--variant", help="Service variant: hosted, local, alternate."),
        profile: str | None = typer.Option(None, "--profile", help="Settings profile name."),
        strict: bool = typer.Option(False, "--strict", help="Exit with code 1 when the fallback was used."),
):
    """Fetch the configuration for a project environment and print it as JSON."""
    cfg = load_config()
    try:
        cfg = apply_profile(cfg, profile)
    except KeyError:
        console.err(f"Unknown profile: {profile}")
        raise typer.Exit(code=2)
    cfg = apply_env(cfg)

    project_id = (project or cfg.project_id).strip()
    env_name = (env or cfg.env).strip()
    key = (api_key or cfg.api_key).strip()
    missing = [name for name, value in (("project", project_id), ("env", env_name), ("api key", key)) if not value]
    if missing:
        console.err(f"Missing {', '.join(missing)}. Pass options or run 'togglit settings init'.")
        raise typer.Exit(code=2)

    try:
        fetcher = make_fetcher(variant or cfg.variant)
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)

    req = ConfigRequest(
        project_id=project_id,
        env=env_name,
        api_key=key,
        version=version,
        fallback=_load_fallback(fallback),
        bypass_cache=bypass_cache,
    )
    outcome = asyncio.run(fetcher.fetch_outcome(req))
    if outcome.fell_back:
        console.warn(f"Using fallback config: {_describe_fallback(outcome)}")
    console.print_json(outcome.config)
    if outcome.fell_back and strict:
        raise typer.Exit(code=1)
