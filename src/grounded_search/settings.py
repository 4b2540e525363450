"""JSON-file-backed store for user settings.

Holds the user's credential override, the theme preference and the last
weather result. Query services only read the credential override; the
credential probe is the one core component that writes to the store.
"""

import dataclasses
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator

from grounded_search.data import WeatherInfo

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_MAX_AGE = timedelta(minutes=30)
# Degrees; roughly one kilometre.
WEATHER_COORD_TOLERANCE = 0.01

Theme = Literal["light", "dark"]


class WeatherCacheEntry(BaseModel):
    """A weather payload and when it was fetched."""

    info: dict[str, str]
    fetched_at: datetime
    lat: float | None = None
    lng: float | None = None

    @field_validator("fetched_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Hand-edited files may carry naive timestamps.
        return v if v.tzinfo is not None else v.replace(tzinfo=UTC)

    def matches(self, lat: float, lng: float) -> bool:
        """Whether this entry was fetched at (about) the given coordinates."""
        if self.lat is None or self.lng is None:
            return False
        return (
            abs(self.lat - lat) <= WEATHER_COORD_TOLERANCE
            and abs(self.lng - lng) <= WEATHER_COORD_TOLERANCE
        )


class Settings(BaseModel):
    """Persisted settings document."""

    api_key: str | None = None
    theme: Theme = "light"
    weather: WeatherCacheEntry | None = None


class SettingsStore:
    """Reads and writes :class:`Settings` as a JSON file.

    A missing or unreadable file reads as default settings. Every write
    replaces the whole file.

    Args:
        path: Location of the settings JSON file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        if not self._path.exists():
            return Settings()
        try:
            return Settings.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings file {self._path}: {e}")
            return Settings()

    def save(self, settings: Settings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")

    # -- credential override --

    @property
    def api_key(self) -> str | None:
        """The user's credential override, if any."""
        return self.load().api_key

    def set_api_key(self, api_key: str) -> None:
        settings = self.load()
        self.save(settings.model_copy(update={"api_key": api_key.strip()}))

    def clear_api_key(self) -> None:
        settings = self.load()
        self.save(settings.model_copy(update={"api_key": None}))

    # -- theme --

    @property
    def theme(self) -> Theme:
        return self.load().theme

    def set_theme(self, theme: Theme) -> None:
        settings = self.load()
        self.save(Settings.model_validate({**settings.model_dump(), "theme": theme}))

    # -- weather cache --

    def cached_weather(
        self,
        max_age: timedelta = DEFAULT_WEATHER_MAX_AGE,
        *,
        lat: float,
        lng: float,
        now: datetime | None = None,
    ) -> WeatherInfo | None:
        """Return the cached weather for (*lat*, *lng*) if younger than *max_age*.

        Args:
            max_age: Maximum age of a usable entry (default: 30 minutes).
            lat: Requested latitude.
            lng: Requested longitude.
            now: Current time (defaults to the UTC wall clock).

        Returns:
            The cached WeatherInfo, or None on a miss, an expired entry or an
            entry saved for another location.
        """
        entry = self.load().weather
        if entry is None:
            return None
        if not entry.matches(lat, lng):
            logger.debug(f"Weather cache is for another location ({entry.lat}, {entry.lng})")
            return None
        now = now or datetime.now(tz=UTC)
        if now - entry.fetched_at >= max_age:
            logger.debug(f"Weather cache expired (fetched at {entry.fetched_at.isoformat()})")
            return None
        return WeatherInfo.from_payload(entry.info)

    def save_weather(
        self,
        info: WeatherInfo,
        *,
        lat: float,
        lng: float,
        now: datetime | None = None,
    ) -> None:
        settings = self.load()
        entry = WeatherCacheEntry(
            info=dataclasses.asdict(info),
            fetched_at=now or datetime.now(tz=UTC),
            lat=lat,
            lng=lng,
        )
        self.save(settings.model_copy(update={"weather": entry}))
