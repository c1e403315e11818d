from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config_types import HOSTED, ClientConfig, ConfigRequest, ExtractionPolicy
from .errors import DecodeError, TogglitClientError
from .transport import Transport

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch, successful or degraded to the fallback."""

    config: dict[str, Any]
    fell_back: bool = False
    error: TogglitClientError | None = None


def _is_set(value: Any) -> bool:
    # null, false, 0 and "" count as missing; empty objects and lists do not
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    return True


def extract_config(body: Any, fallback: dict[str, Any], policy: ExtractionPolicy) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise DecodeError(f"Expected a JSON object, got {type(body).__name__}")
    config = body.get("config")
    if _is_set(config):
        return config
    if policy is ExtractionPolicy.CONFIG_OR_FALLBACK:
        return fallback
    return body


class ConfigFetcher:
    """Fetches configuration for one service variant.

    Failures never reach the caller: network errors, non-2xx responses and
    undecodable bodies are logged and turned into the request's fallback.
    Pass ``client`` to reuse an existing ``httpx.AsyncClient``; it is not
    closed by the fetcher.
    """

    def __init__(self, cfg: ClientConfig = HOSTED, *, client: httpx.AsyncClient | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, client=client)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    async def fetch_outcome(self, req: ConfigRequest) -> FetchOutcome:
        try:
            body = await self._t.get_json(req)
            config = extract_config(body, req.fallback, self._cfg.extraction)
        except TogglitClientError as e:
            log.warning("Togglit fallback config used due to error: %s", e)
            return FetchOutcome(config=req.fallback, fell_back=True, error=e)
        return FetchOutcome(config=config, fell_back=config is req.fallback)

    async def fetch_config(self, req: ConfigRequest) -> dict[str, Any]:
        outcome = await self.fetch_outcome(req)
        return outcome.config


async def get_config(
        *,
        project_id: str,
        env: str,
        api_key: str,
        version: int | None = None,
        fallback: dict[str, Any] | None = None,
        bypass_cache: bool = False,
        cfg: ClientConfig = HOSTED,
) -> dict[str, Any]:
    req = ConfigRequest(
        project_id=project_id,
        env=env,
        api_key=api_key,
        version=version,
        fallback=fallback if fallback is not None else {},
        bypass_cache=bypass_cache,
    )
    return await ConfigFetcher(cfg).fetch_config(req)


def get_config_sync(**kwargs: Any) -> dict[str, Any]:
    """Blocking form of :func:`get_config` for scripts; not for use inside a running loop."""
    return asyncio.run(get_config(**kwargs))
