"""Factory functions to create components from configuration."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from grounded_search.config.models import (
    ClaudeProviderConfig,
    GeminiProviderConfig,
    GroundedSearchConfig,
)
from grounded_search.credentials import default_credential
from grounded_search.model import ClaudeClient, ClientFactory, GeminiClient, ModelClient
from grounded_search.run_logger import RunLogger
from grounded_search.services import CredentialProbe, SearchService, WeatherService
from grounded_search.settings import SettingsStore


@dataclass(frozen=True)
class Assistant:
    """Everything a front end needs, wired from one config."""

    search: SearchService
    weather: WeatherService
    probe: CredentialProbe
    store: SettingsStore
    run_logger: RunLogger | None
    weather_max_age: timedelta


def create_client_factory(
    config: GeminiProviderConfig | ClaudeProviderConfig,
) -> ClientFactory:
    """Create a client factory for the configured provider.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, GeminiProviderConfig):

        def gemini(api_key: str) -> ModelClient:
            return GeminiClient(api_key=api_key, structured_output=config.structured_output)

        return gemini
    if isinstance(config, ClaudeProviderConfig):

        def claude(api_key: str) -> ModelClient:
            return ClaudeClient(
                api_key=api_key,
                max_searches=config.max_searches,
                default_max_tokens=config.default_max_tokens,
            )

        return claude
    msg = f"Unknown provider config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(
    config: GroundedSearchConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    settings_path_override: Path | None = None,
) -> Assistant:
    """Create the query services from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        settings_path_override: Override the config's settings_path.

    Returns:
        The wired Assistant. ``run_logger`` is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    settings_path = settings_path_override or Path(config.settings_path).expanduser()
    store = SettingsStore(settings_path)
    client_factory = create_client_factory(config.provider)
    default_api_key = default_credential(config.provider.api_key_env)

    search = SearchService(
        client_factory,
        model=config.search.model,
        store=store,
        default_api_key=default_api_key,
        temperature=config.search.temperature,
        max_output_tokens=config.search.max_output_tokens,
        run_logger=run_logger,
    )
    weather = WeatherService(
        client_factory,
        model=config.weather.model,
        store=store,
        default_api_key=default_api_key,
        temperature=config.weather.temperature,
        max_output_tokens=config.weather.max_output_tokens,
        run_logger=run_logger,
    )
    probe = CredentialProbe(
        client_factory,
        model=config.probe.model,
        max_output_tokens=config.probe.max_output_tokens,
        store=store,
    )
    return Assistant(
        search=search,
        weather=weather,
        probe=probe,
        store=store,
        run_logger=run_logger,
        weather_max_age=timedelta(minutes=config.weather.cache_minutes),
    )
