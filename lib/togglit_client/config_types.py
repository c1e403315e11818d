from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class ExtractionPolicy(str, enum.Enum):
    """What to return when the response body has no ``config`` field."""

    CONFIG_OR_BODY = "prefer-config-field-else-body"
    CONFIG_OR_FALLBACK = "prefer-config-field-else-fallback"


@dataclass(frozen=True)
class ClientConfig:
    endpoint: str
    extraction: ExtractionPolicy = ExtractionPolicy.CONFIG_OR_BODY
    smart_cache: bool = False
    send_content_type: bool = False
    timeout_s: float | None = None


HOSTED = ClientConfig(
    endpoint="https://togglit.vercel.app/api/public/config",
    extraction=ExtractionPolicy.CONFIG_OR_BODY,
    smart_cache=True,
    send_content_type=True,
)

LOCAL = ClientConfig(
    endpoint="http://localhost:3000/api/public/config",
    extraction=ExtractionPolicy.CONFIG_OR_BODY,
)

ALTERNATE = ClientConfig(
    endpoint="https://togglit.dev/api/config",
    extraction=ExtractionPolicy.CONFIG_OR_FALLBACK,
)

VARIANTS: dict[str, ClientConfig] = {
    "hosted": HOSTED,
    "local": LOCAL,
    "alternate": ALTERNATE,
}

PRODUCTION_ENVS = frozenset({"production", "prod"})


@dataclass
class ConfigRequest:
    project_id: str
    env: str
    api_key: str
    version: int | None = None
    fallback: dict[str, Any] = field(default_factory=dict)
    bypass_cache: bool = False

    @property
    def is_production(self) -> bool:
        return self.env in PRODUCTION_ENVS
