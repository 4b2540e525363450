"""Tests for SettingsStore."""

import dataclasses
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from grounded_search.data import WeatherInfo
from grounded_search.settings import Settings, SettingsStore

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=UTC)
TOKYO = {"lat": 35.68, "lng": 139.77}
OSAKA = {"lat": 34.69, "lng": 135.50}
WEATHER = WeatherInfo(
    location="東京都千代田区",
    temp="20℃",
    condition="晴れ",
    high="24℃",
    low="15℃",
    details="過ごしやすい一日です。",
)


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "nested" / "settings.json")


def test_missing_file_reads_defaults(store: SettingsStore) -> None:
    assert store.load() == Settings()
    assert store.api_key is None
    assert store.theme == "light"


def test_set_and_clear_api_key(store: SettingsStore) -> None:
    store.set_api_key("  user-key  ")
    assert store.api_key == "user-key"
    assert store.path.exists()

    store.clear_api_key()
    assert store.api_key is None


def test_api_key_survives_new_store_instance(store: SettingsStore) -> None:
    store.set_api_key("user-key")
    assert SettingsStore(store.path).api_key == "user-key"


def test_set_theme(store: SettingsStore) -> None:
    store.set_theme("dark")
    assert store.theme == "dark"


def test_invalid_theme_rejected(store: SettingsStore) -> None:
    with pytest.raises(ValidationError):
        store.set_theme("sepia")  # type: ignore[arg-type]


def test_writes_keep_other_slots(store: SettingsStore) -> None:
    store.set_api_key("user-key")
    store.set_theme("dark")
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    assert store.api_key == "user-key"
    assert store.theme == "dark"


def test_unreadable_file_reads_defaults(store: SettingsStore) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text("not json")
    assert store.load() == Settings()


def test_cached_weather_fresh(store: SettingsStore) -> None:
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    cached = store.cached_weather(
        timedelta(minutes=30), **TOKYO, now=NOW + timedelta(minutes=29)
    )

    assert cached == WEATHER


def test_cached_weather_expired(store: SettingsStore) -> None:
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    expired = store.cached_weather(timedelta(minutes=30), **TOKYO, now=NOW + timedelta(minutes=30))
    assert expired is None


def test_cached_weather_miss(store: SettingsStore) -> None:
    assert store.cached_weather(**TOKYO, now=NOW) is None


def test_cached_weather_default_max_age_is_thirty_minutes(store: SettingsStore) -> None:
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    assert store.cached_weather(**TOKYO, now=NOW + timedelta(minutes=10)) == WEATHER
    assert store.cached_weather(**TOKYO, now=NOW + timedelta(minutes=31)) is None


def test_cached_weather_other_location_is_miss(store: SettingsStore) -> None:
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    assert store.cached_weather(**OSAKA, now=NOW + timedelta(minutes=1)) is None


def test_cached_weather_tolerates_small_coordinate_drift(store: SettingsStore) -> None:
    store.save_weather(WEATHER, **TOKYO, now=NOW)

    cached = store.cached_weather(lat=35.681, lng=139.771, now=NOW + timedelta(minutes=1))

    assert cached == WEATHER


def test_cached_weather_without_coordinates_is_miss(store: SettingsStore) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text(
        json.dumps(
            {
                "weather": {
                    "info": dataclasses.asdict(WEATHER),
                    "fetched_at": NOW.isoformat(),
                }
            }
        )
    )

    assert store.cached_weather(**TOKYO, now=NOW + timedelta(minutes=1)) is None


def test_cached_weather_naive_timestamp_read_as_utc(store: SettingsStore) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text(
        json.dumps(
            {
                "weather": {
                    "info": dataclasses.asdict(WEATHER),
                    "fetched_at": "2026-10-18T09:00:00",
                    **TOKYO,
                }
            }
        )
    )

    assert store.load().weather is not None
    assert store.load().weather.fetched_at == NOW
    assert store.cached_weather(**TOKYO, now=NOW + timedelta(minutes=5)) == WEATHER
    assert store.cached_weather(**TOKYO, now=NOW + timedelta(minutes=31)) is None
