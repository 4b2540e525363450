"""Configuration module for grounded search."""

from grounded_search.config.factory import Assistant, create_client_factory, create_from_config
from grounded_search.config.loader import (
    CONFIG_ENV_VAR,
    get_default_config_path,
    load_config,
    resolve_config_path,
)
from grounded_search.config.models import (
    ClaudeProviderConfig,
    GeminiProviderConfig,
    GroundedSearchConfig,
    LoggingConfig,
    ProbeConfig,
    ProviderConfig,
    SearchServiceConfig,
    WeatherServiceConfig,
)

__all__ = [
    "Assistant",
    "CONFIG_ENV_VAR",
    "ClaudeProviderConfig",
    "GeminiProviderConfig",
    "GroundedSearchConfig",
    "LoggingConfig",
    "ProbeConfig",
    "ProviderConfig",
    "SearchServiceConfig",
    "WeatherServiceConfig",
    "create_client_factory",
    "create_from_config",
    "get_default_config_path",
    "load_config",
    "resolve_config_path",
]
