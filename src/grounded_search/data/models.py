"""Core data models for grounded search."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from grounded_search.url import extract_domain

UNKNOWN_LOCATION = "不明な地点"
UNKNOWN_TEMPERATURE = "--℃"
PENDING_CONDITION = "取得中"
MISSING_DETAILS = "データの取得に失敗しました。"


class ErrorKind(StrEnum):
    """User-facing failure categories for a query service call."""

    UNAUTHENTICATED = "unauthenticated"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK = "network"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SearchResult:
    """A single grounded search hit."""

    title: str
    url: str
    summary: str

    @property
    def domain(self) -> str:
        """Host name for display, without a leading ``www.``."""
        return extract_domain(self.url)


@dataclass(frozen=True)
class SearchResponse:
    """Search hits in the relevance order the model returned them."""

    results: tuple[SearchResult, ...] = ()


@dataclass(frozen=True)
class WeatherInfo:
    """Current conditions at a reverse-geocoded location.

    Every field is always populated; missing values carry a sentinel default.
    """

    location: str = UNKNOWN_LOCATION
    temp: str = UNKNOWN_TEMPERATURE
    condition: str = PENDING_CONDITION
    high: str = UNKNOWN_TEMPERATURE
    low: str = UNKNOWN_TEMPERATURE
    details: str = MISSING_DETAILS

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "WeatherInfo":
        """Build from an untrusted parsed object, backfilling each field.

        A field that is missing, null, or blank falls back to its sentinel.
        Non-string scalars (e.g. ``20``) are converted with ``str()``.
        """
        defaults = cls()
        values: dict[str, str] = {}
        for name in ("location", "temp", "condition", "high", "low", "details"):
            raw = payload.get(name)
            text = "" if raw is None or isinstance(raw, (dict, list)) else str(raw).strip()
            values[name] = text or getattr(defaults, name)
        return cls(**values)


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single model call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    web_searches: int = 0
