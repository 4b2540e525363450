"""Grounded search: web search and local weather answered by a search-grounded LLM."""

from grounded_search.config import (
    Assistant,
    GroundedSearchConfig,
    create_client_factory,
    create_from_config,
    load_config,
)
from grounded_search.credentials import resolve_credential
from grounded_search.data import (
    APICallUsage,
    ErrorKind,
    SearchResponse,
    SearchResult,
    WeatherInfo,
)
from grounded_search.errors import (
    ClassifiedError,
    ExtractionError,
    MissingCredentialError,
    classify_error,
)
from grounded_search.extract import extract_json
from grounded_search.model import (
    ClaudeClient,
    ClientFactory,
    GeminiClient,
    GenerationRequest,
    ModelClient,
    ModelResponse,
)
from grounded_search.run_logger import RunLogger
from grounded_search.services import CredentialProbe, SearchService, WeatherService
from grounded_search.settings import Settings, SettingsStore
from grounded_search.url import extract_domain, is_absolute_url

__all__ = [
    # Models
    "APICallUsage",
    "ErrorKind",
    "SearchResponse",
    "SearchResult",
    "WeatherInfo",
    # Errors
    "ClassifiedError",
    "ExtractionError",
    "MissingCredentialError",
    # Functions
    "classify_error",
    "extract_domain",
    "extract_json",
    "is_absolute_url",
    "resolve_credential",
    # Protocols
    "ClientFactory",
    "ModelClient",
    # Model Clients
    "ClaudeClient",
    "GeminiClient",
    "GenerationRequest",
    "ModelResponse",
    # Services
    "CredentialProbe",
    "SearchService",
    "WeatherService",
    # Settings
    "Settings",
    "SettingsStore",
    # Logging
    "RunLogger",
    # Config
    "Assistant",
    "GroundedSearchConfig",
    "create_client_factory",
    "create_from_config",
    "load_config",
]
