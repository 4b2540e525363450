import logging
from typing import Any

import anthropic

from grounded_search.data import APICallUsage
from grounded_search.model.base import GenerationRequest, ModelResponse

logger = logging.getLogger(__name__)


class ClaudeClient:
    """Generate content with Claude using its built-in web search tool.

    This uses Anthropic's server-side web search, so only a Claude API key is
    needed. Response schemas are not sent; the prompt carries the shape.

    Args:
        api_key: Anthropic API key.
        max_searches: Max web searches per call (default: 3).
        default_max_tokens: Output cap when the request sets none.
    """

    def __init__(
        self,
        *,
        api_key: str,
        max_searches: int = 3,
        default_max_tokens: int = 2048,
    ) -> None:
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self._max_searches = max_searches
        self._default_max_tokens = default_max_tokens

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        kwargs: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_output_tokens or self._default_max_tokens,
            "temperature": request.temperature,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system_instruction:
            kwargs["system"] = request.system_instruction
        if request.web_search:
            kwargs["tools"] = [
                {
                    "type": "web_search_20250305",
                    "name": "web_search",
                    "max_uses": self._max_searches,
                }
            ]
        if request.response_schema is not None:
            logger.debug("Response schema ignored for %s; relying on prompt", request.model)

        response = await self._client.messages.create(**kwargs)

        # Count web searches from server_tool_use in usage
        web_searches = 0
        server_tool_use = getattr(response.usage, "server_tool_use", None)
        if server_tool_use is not None:
            web_searches = getattr(server_tool_use, "web_search_requests", 0) or 0

        usage = APICallUsage(
            model=request.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            web_searches=web_searches,
        )

        # Only the final text blocks carry the answer; search results are separate blocks
        text = "".join(block.text for block in response.content if block.type == "text")
        return ModelResponse(text=text or None, usage=usage)
