from typing import Any

from google import genai
from google.genai import types

from grounded_search.data import APICallUsage
from grounded_search.model.base import GenerationRequest, ModelResponse


class GeminiClient:
    """Generate content with Google Gemini, grounded by Google Search.

    Args:
        api_key: Gemini API key.
        structured_output: Send the request's JSON schema as a structured
            output constraint. Only enable this for models that accept a
            response schema together with the search tool.
    """

    def __init__(self, *, api_key: str, structured_output: bool = False) -> None:
        self._client = genai.Client(api_key=api_key)
        self._structured_output = structured_output

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        options: dict[str, Any] = {
            "system_instruction": request.system_instruction,
            "temperature": request.temperature,
            "max_output_tokens": request.max_output_tokens,
        }
        if request.web_search:
            options["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if self._structured_output and request.response_schema is not None:
            options["response_mime_type"] = "application/json"
            options["response_json_schema"] = request.response_schema

        config = types.GenerateContentConfig(**options)

        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=request.prompt,
            config=config,
        )

        usage = APICallUsage(
            model=request.model,
            input_tokens=getattr(response.usage_metadata, "prompt_token_count", 0) or 0,
            output_tokens=getattr(response.usage_metadata, "candidates_token_count", 0) or 0,
            web_searches=_count_web_searches(response),
        )
        return ModelResponse(text=response.text, usage=usage)


def _count_web_searches(response: types.GenerateContentResponse) -> int:
    """Count the search queries the grounding tool issued for the first candidate."""
    if not response.candidates:
        return 0
    grounding = getattr(response.candidates[0], "grounding_metadata", None)
    queries = getattr(grounding, "web_search_queries", None)
    if not isinstance(queries, list):
        return 0
    return len(queries)
