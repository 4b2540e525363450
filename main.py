#!/usr/bin/env python
"""CLI for grounded web search and local weather."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from grounded_search.config import (
    Assistant,
    create_from_config,
    load_config,
    resolve_config_path,
)
from grounded_search.data import SearchResponse, WeatherInfo
from grounded_search.errors import ClassifiedError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: Literal["search", "weather", "key", "theme"]
    config: Path
    log: bool = False
    query: str | None = None
    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lng: float | None = Field(default=None, ge=-180.0, le=180.0)
    refresh: bool = False
    key_action: Literal["set", "clear", "show"] | None = None
    key: str | None = None
    theme: Literal["light", "dark"] | None = None

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def print_search(response: SearchResponse) -> None:
    if not response.results:
        print("\n該当する結果が見つかりませんでした。")
        return
    print(f"\n{len(response.results)} 件の結果:\n")
    for i, result in enumerate(response.results, 1):
        print(f"{i}. {result.title}")
        print(f"   [{result.domain}] {result.url}")
        if result.summary:
            print(f"   {result.summary}")


def print_weather(info: WeatherInfo) -> None:
    print(f"\n{info.location}")
    print(f"  {info.condition}  {info.temp}  (最高 {info.high} / 最低 {info.low})")
    print(f"  {info.details}")


async def run_weather(
    assistant: Assistant, lat: float, lng: float, *, refresh: bool
) -> WeatherInfo:
    """Serve weather from the settings cache when fresh, else fetch and cache it."""
    if not refresh:
        cached = assistant.store.cached_weather(assistant.weather_max_age, lat=lat, lng=lng)
        if cached is not None:
            logger.info("Using cached weather")
            return cached
    info = await assistant.weather.weather_at(lat, lng)
    assistant.store.save_weather(info, lat=lat, lng=lng)
    return info


async def run_key(assistant: Assistant, args: CLIArgs) -> None:
    store = assistant.store
    if args.key_action == "set":
        if not args.key:
            raise ValueError("key set requires a KEY argument")
        if not await assistant.probe.probe_and_store(args.key):
            logger.error("APIキーを確認できませんでした。キーを確認して再度お試しください。")
            sys.exit(1)
        logger.info("APIキーを保存しました。")
    elif args.key_action == "clear":
        store.clear_api_key()
        logger.info("APIキーを削除しました。")
    else:
        api_key = store.api_key
        if api_key:
            print(f"{api_key[:4]}{'*' * max(len(api_key) - 4, 0)}")
        else:
            print("(not set)")


async def run(args: CLIArgs) -> None:
    """Execute one command with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    logging.getLogger().setLevel(config.logging.level)
    assistant = create_from_config(config, log_override=args.log if args.log else None)

    if args.command == "search":
        print_search(await assistant.search.search(args.query or ""))
    elif args.command == "weather":
        if args.lat is None or args.lng is None:
            raise ValueError("weather requires LAT and LNG")
        print_weather(await run_weather(assistant, args.lat, args.lng, refresh=args.refresh))
    elif args.command == "key":
        await run_key(assistant, args)
    elif args.theme is not None:
        assistant.store.set_theme(args.theme)
    else:
        print(assistant.store.theme)

    if assistant.run_logger and assistant.run_logger.last_log_path:
        logger.info(f"\nRun log written to: {assistant.run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Grounded web search and local weather.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help=(
            "Path to YAML config file "
            "(default: $GROUNDED_SEARCH_CONFIG, then configs/default.yaml)"
        ),
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON run log for each model call",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search_parser = sub.add_parser("search", help="Search the web")
    search_parser.add_argument("query", help="Search query")

    weather_parser = sub.add_parser("weather", help="Current weather at a coordinate pair")
    weather_parser.add_argument("lat", type=float, help="Latitude")
    weather_parser.add_argument("lng", type=float, help="Longitude")
    weather_parser.add_argument(
        "--refresh",
        action="store_true",
        default=False,
        help="Ignore the cached weather result",
    )

    key_parser = sub.add_parser("key", help="Manage the API key override")
    key_parser.add_argument("key_action", choices=["set", "clear", "show"])
    key_parser.add_argument("key", nargs="?", default=None)

    theme_parser = sub.add_parser("theme", help="Show or set the theme preference")
    theme_parser.add_argument("theme", nargs="?", choices=["light", "dark"], default=None)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path = resolve_config_path(ns.config)

    try:
        args = CLIArgs(
            command=ns.command,
            config=config_path,
            log=ns.log,
            query=getattr(ns, "query", None),
            lat=getattr(ns, "lat", None),
            lng=getattr(ns, "lng", None),
            refresh=getattr(ns, "refresh", False),
            key_action=getattr(ns, "key_action", None),
            key=getattr(ns, "key", None),
            theme=getattr(ns, "theme", None),
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except ClassifiedError as e:
        logger.error(f"[{e.kind}] {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
