from __future__ import annotations

from typing import Any

import httpx

from . import __version__
from .config_types import ClientConfig, ConfigRequest
from .errors import ApiError, DecodeError, NetworkError


def should_skip_cache(cfg: ClientConfig, req: ConfigRequest) -> bool:
    if not cfg.smart_cache:
        return False
    return not req.is_production or req.bypass_cache


def build_params(cfg: ClientConfig, req: ConfigRequest) -> list[tuple[str, str]]:
    params = [("projectId", req.project_id), ("env", req.env)]
    if req.version:
        params.append(("version", str(int(req.version))))
    if should_skip_cache(cfg, req):
        params.append(("nocache", "true"))
    return params


def build_headers(cfg: ClientConfig, req: ConfigRequest) -> dict[str, str]:
    headers = {
        "User-Agent": f"togglit-client/{__version__}",
        "Authorization": f"Bearer {req.api_key}",
    }
    if cfg.send_content_type:
        headers["Content-Type"] = "application/json"
    if cfg.smart_cache and req.bypass_cache:
        headers["X-Cache-Control"] = "no-cache"
    # transport-level equivalent of fetch(..., cache="no-store")
    if should_skip_cache(cfg, req):
        headers["Cache-Control"] = "no-store"
        headers["Pragma"] = "no-cache"
    return headers


class Transport:
    def __init__(self, cfg: ClientConfig, *, client: httpx.AsyncClient | None = None):
        self._cfg = cfg
        self._client = client

    async def get_json(self, req: ConfigRequest) -> Any:
        params = build_params(self._cfg, req)
        headers = build_headers(self._cfg, req)
        if self._client is not None:
            r = await self._send(self._client, params, headers)
        else:
            kwargs: dict[str, Any] = {}
            if self._cfg.timeout_s is not None:
                kwargs["timeout"] = self._cfg.timeout_s
            async with httpx.AsyncClient(**kwargs) as client:
                r = await self._send(client, params, headers)

        if not r.is_success:
            raise ApiError(
                r.status_code,
                f"Failed to fetch config: {r.status_code} {r.reason_phrase}",
                r.text[:1000] or None,
            )

        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"Failed to decode config response: {e}") from e

    async def _send(
            self,
            client: httpx.AsyncClient,
            params: list[tuple[str, str]],
            headers: dict[str, str],
    ) -> httpx.Response:
        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if self._cfg.timeout_s is not None:
            timeout = self._cfg.timeout_s
        try:
            return await client.get(self._cfg.endpoint, params=params, headers=headers, timeout=timeout)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            # httpx encodes header values as ASCII while building the request
            raise NetworkError(f"Cannot build config request: {e}") from e
