from __future__ import annotations

from togglit_client import VARIANTS, ConfigFetcher

from .config import normalize_variant


def make_fetcher(variant: str | None) -> ConfigFetcher:
    return ConfigFetcher(VARIANTS[normalize_variant(variant)])
