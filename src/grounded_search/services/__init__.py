from grounded_search.services.base import QueryService
from grounded_search.services.probe import CredentialProbe
from grounded_search.services.search import SearchService, parse_search_response
from grounded_search.services.weather import WeatherService, parse_weather

__all__ = [
    "CredentialProbe",
    "QueryService",
    "SearchService",
    "WeatherService",
    "parse_search_response",
    "parse_weather",
]
