"""Data models for grounded search."""

from grounded_search.data.models import (
    APICallUsage,
    ErrorKind,
    SearchResponse,
    SearchResult,
    WeatherInfo,
)

__all__ = [
    "APICallUsage",
    "ErrorKind",
    "SearchResponse",
    "SearchResult",
    "WeatherInfo",
]
