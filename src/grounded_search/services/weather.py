from typing import Any

from grounded_search.data import WeatherInfo
from grounded_search.extract import extract_json
from grounded_search.services.base import QueryService

WEATHER_SYSTEM_PROMPT = """\
あなたは気象情報botです。
Google Searchツールを使用して、与えられた座標の最新情報を検索してください。
まず座標から地名を特定し、次にその場所の現在の天気を調べてください。
必ず以下のJSONのみで回答し、他のテキストや引用[1]などは含めないでください。

{
  "location": "地名（例: 東京都千代田区）",
  "temp": "気温（例: 20℃）",
  "condition": "天気（例: 晴れ）",
  "high": "最高気温",
  "low": "最低気温",
  "details": "今日のアドバイス"
}\
"""

WEATHER_PROMPT = (
    "緯度:{lat}, 経度:{lng} の地点を特定し、"
    "その場所の現在の天気、気温、最高/最低気温を取得してください。"
)

WEATHER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        name: {"type": "string"}
        for name in ("location", "temp", "condition", "high", "low", "details")
    },
}


def parse_weather(raw_text: str | None) -> WeatherInfo:
    """Turn raw model output into a fully populated WeatherInfo."""
    payload = extract_json(raw_text if raw_text and raw_text.strip() else "{}")
    return WeatherInfo.from_payload(payload)


class WeatherService(QueryService):
    """Current weather for a coordinate pair, reverse-geocoded by the model."""

    operation = "weather"
    fallback_message = "天気情報の取得に失敗しました。しばらくしてから再度お試しください。"

    async def weather_at(self, lat: float, lng: float) -> WeatherInfo:
        """Look up current conditions at (*lat*, *lng*).

        Every field of the result is populated, with sentinel defaults for
        anything the model left out.

        Raises:
            ClassifiedError: If no credential resolves, the call fails, or the
                response cannot be parsed.
        """
        request = self._request(
            WEATHER_PROMPT.format(lat=lat, lng=lng),
            WEATHER_SYSTEM_PROMPT,
            WEATHER_SCHEMA,
        )
        return await self._run(request, parse_weather, log_input={"lat": lat, "lng": lng})
