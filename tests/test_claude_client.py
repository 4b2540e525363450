"""Tests for ClaudeClient."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from anthropic.types import TextBlock

from grounded_search.model import GenerationRequest
from grounded_search.model.claude import ClaudeClient


def _make_mock_usage(web_searches: int = 1) -> MagicMock:
    """Create a mock usage object."""
    usage = MagicMock()
    usage.input_tokens = 300
    usage.output_tokens = 80
    usage.server_tool_use.web_search_requests = web_searches
    return usage


@pytest.fixture
def mock_response() -> MagicMock:
    """Create a mock API response with a search result block and text blocks."""
    tool_result = MagicMock()
    tool_result.type = "web_search_tool_result"

    response = MagicMock()
    response.content = [
        TextBlock(type="text", text="調べます。"),
        tool_result,
        TextBlock(type="text", text='{"results": []}'),
    ]
    response.usage = _make_mock_usage()
    return response


@pytest.fixture
def client(mock_response: MagicMock) -> ClaudeClient:
    """Create a client with mocked API client."""
    c = ClaudeClient(api_key="test-key", max_searches=2)
    object.__setattr__(c._client.messages, "create", AsyncMock(return_value=mock_response))
    return c


async def test_generate_joins_text_blocks(client: ClaudeClient) -> None:
    response = await client.generate(GenerationRequest(model="claude-haiku-4-5", prompt="q"))

    assert response.text == '調べます。{"results": []}'
    assert response.usage.input_tokens == 300
    assert response.usage.output_tokens == 80
    assert response.usage.web_searches == 1


async def test_generate_calls_api_with_web_search_tool(client: ClaudeClient) -> None:
    await client.generate(
        GenerationRequest(
            model="claude-haiku-4-5",
            prompt="q",
            system_instruction="system",
            web_search=True,
        )
    )

    mock_create: AsyncMock = client._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["system"] == "system"
    assert call_kwargs["temperature"] == 0.0
    assert call_kwargs["max_tokens"] == 2048
    assert call_kwargs["tools"] == [
        {"type": "web_search_20250305", "name": "web_search", "max_uses": 2}
    ]
    assert call_kwargs["messages"] == [{"role": "user", "content": "q"}]


async def test_generate_omits_optional_params(client: ClaudeClient) -> None:
    await client.generate(GenerationRequest(model="m", prompt="Hi", max_output_tokens=5))

    mock_create: AsyncMock = client._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert "system" not in call_kwargs
    assert "tools" not in call_kwargs
    assert call_kwargs["max_tokens"] == 5


async def test_generate_without_text_returns_none(
    client: ClaudeClient, mock_response: MagicMock
) -> None:
    mock_response.content = []
    response = await client.generate(GenerationRequest(model="m", prompt="q"))
    assert response.text is None


async def test_generate_without_server_tool_use(
    client: ClaudeClient, mock_response: MagicMock
) -> None:
    mock_response.usage.server_tool_use = None
    response = await client.generate(GenerationRequest(model="m", prompt="q"))
    assert response.usage.web_searches == 0
