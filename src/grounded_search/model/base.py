from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from grounded_search.data import APICallUsage


@dataclass(frozen=True)
class GenerationRequest:
    """A single generate-content call.

    Attributes:
        model: Provider model ID.
        prompt: User prompt text.
        system_instruction: System prompt, if any.
        temperature: Sampling temperature.
        web_search: Whether the model may use its web search tool.
        response_schema: JSON schema for structured output, when supported.
        max_output_tokens: Output token cap, or None for the provider default.
    """

    model: str
    prompt: str
    system_instruction: str | None = None
    temperature: float = 0.0
    web_search: bool = False
    response_schema: dict[str, Any] | None = None
    max_output_tokens: int | None = None


@dataclass(frozen=True)
class ModelResponse:
    """Raw text returned by the model plus usage for the call."""

    text: str | None
    usage: APICallUsage


class ModelClient(Protocol):
    """Interface for a hosted model exposing one generate-content call."""

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        """Run one generate-content call.

        Provider SDK errors propagate unchanged; classification happens in
        the calling service.
        """
        ...


# Builds a client bound to the credential resolved for the current call.
ClientFactory = Callable[[str], ModelClient]
