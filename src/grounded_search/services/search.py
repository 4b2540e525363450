import logging
from typing import Any

from grounded_search.data import SearchResponse, SearchResult
from grounded_search.extract import extract_json
from grounded_search.services.base import QueryService
from grounded_search.url import is_absolute_url

logger = logging.getLogger(__name__)

SEARCH_SYSTEM_PROMPT = """\
あなたは優秀な検索エンジンです。
Google Searchを使用して正確な結果を見つけ、以下のJSONのみを出力してください。
解説や引用記号は一切不要です。URLは検索結果に実在する完全なURLのみを使い、推測で作らないでください。

{
  "results": [
    {
      "title": "タイトル",
      "url": "完全なURL",
      "summary": "日本語での2-3文の要約"
    }
  ]
}\
"""

SEARCH_PROMPT = "検索クエリ: 「{query}」に関連する最新のウェブサイトを検索し、要約付きのJSONで返してください。"

SEARCH_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "results": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "url": {"type": "string"},
                    "summary": {"type": "string"},
                },
                "required": ["title", "url", "summary"],
            },
        }
    },
    "required": ["results"],
}

_NO_RESULTS = '{"results": []}'


def _parse_result(raw: object) -> SearchResult | None:
    """Validate a single result entry, or return None to drop it."""
    if not isinstance(raw, dict):
        return None
    url = str(raw.get("url") or "").strip()
    if not is_absolute_url(url):
        logger.warning(f"Dropping search result with invalid url: {url!r}")
        return None
    return SearchResult(
        title=str(raw.get("title") or "").strip(),
        url=url,
        summary=str(raw.get("summary") or "").strip(),
    )


def parse_search_response(raw_text: str | None) -> SearchResponse:
    """Turn raw model output into a SearchResponse.

    Empty output means the model found nothing. A payload without a
    ``results`` list also yields an empty response.
    """
    payload = extract_json(raw_text if raw_text and raw_text.strip() else _NO_RESULTS)
    raw_results = payload.get("results")
    if not isinstance(raw_results, list):
        logger.warning("Search payload has no results list")
        return SearchResponse()

    results = [r for r in (_parse_result(item) for item in raw_results) if r is not None]
    return SearchResponse(results=tuple(results))


class SearchService(QueryService):
    """Grounded web search returning titled, summarized links."""

    operation = "search"
    fallback_message = "検索中にエラーが発生しました。しばらくしてから再度お試しください。"

    async def search(self, query: str) -> SearchResponse:
        """Search the web for *query*.

        Args:
            query: Free-text search query.

        Returns:
            Results in relevance order; empty when nothing was found or the
            query is blank.

        Raises:
            ClassifiedError: If no credential resolves, the call fails, or the
                response cannot be parsed.
        """
        query = query.strip()
        if not query:
            return SearchResponse()

        request = self._request(
            SEARCH_PROMPT.format(query=query),
            SEARCH_SYSTEM_PROMPT,
            SEARCH_RESPONSE_SCHEMA,
        )
        return await self._run(request, parse_search_response, log_input={"query": query})
