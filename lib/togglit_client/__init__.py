__version__ = "0.3.0"

from .client import ConfigFetcher, FetchOutcome, get_config, get_config_sync
from .config_types import ALTERNATE, HOSTED, LOCAL, VARIANTS, ClientConfig, ConfigRequest, ExtractionPolicy
from .errors import ApiError, DecodeError, NetworkError, TogglitClientError

__all__ = [
    "ConfigFetcher",
    "FetchOutcome",
    "get_config",
    "get_config_sync",
    "ClientConfig",
    "ConfigRequest",
    "ExtractionPolicy",
    "HOSTED",
    "LOCAL",
    "ALTERNATE",
    "VARIANTS",
    "ApiError",
    "DecodeError",
    "NetworkError",
    "TogglitClientError",
]
