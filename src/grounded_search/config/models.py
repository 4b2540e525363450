"""Pydantic configuration models for grounded search."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================
# Provider Configs
# ============================================================


class GeminiProviderConfig(BaseModel):
    """Configuration for GeminiClient."""

    type: Literal["gemini"] = "gemini"
    api_key_env: str = "GEMINI_API_KEY"
    structured_output: bool = False

    model_config = {"frozen": True}


class ClaudeProviderConfig(BaseModel):
    """Configuration for ClaudeClient."""

    type: Literal["claude"] = "claude"
    api_key_env: str = "CLAUDE_API_KEY"
    max_searches: int = 3
    default_max_tokens: int = 2048

    model_config = {"frozen": True}


ProviderConfig = Annotated[
    GeminiProviderConfig | ClaudeProviderConfig,
    Field(discriminator="type"),
]


# ============================================================
# Service Configs
# ============================================================


class SearchServiceConfig(BaseModel):
    """Configuration for SearchService."""

    model: str = "gemini-3-pro-preview"
    temperature: float = Field(default=0.0, ge=0.0, le=0.1)
    max_output_tokens: int | None = None

    model_config = {"frozen": True}


class WeatherServiceConfig(BaseModel):
    """Configuration for WeatherService."""

    model: str = "gemini-3-flash-preview"
    temperature: float = Field(default=0.0, ge=0.0, le=0.1)
    max_output_tokens: int | None = None
    cache_minutes: int = 30

    model_config = {"frozen": True}


class ProbeConfig(BaseModel):
    """Configuration for CredentialProbe."""

    model: str = "gemini-3-flash-preview"
    max_output_tokens: int = Field(default=5, ge=1, le=64)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for console logging and per-call JSON run logs."""

    level: str = "INFO"
    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class GroundedSearchConfig(BaseModel):
    """Root configuration for grounded search."""

    provider: GeminiProviderConfig | ClaudeProviderConfig = Field(
        default_factory=GeminiProviderConfig, discriminator="type"
    )
    search: SearchServiceConfig = Field(default_factory=SearchServiceConfig)
    weather: WeatherServiceConfig = Field(default_factory=WeatherServiceConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    settings_path: str = "~/.grounded_search/settings.json"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
