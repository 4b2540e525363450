from grounded_search.model.base import (
    ClientFactory,
    GenerationRequest,
    ModelClient,
    ModelResponse,
)
from grounded_search.model.claude import ClaudeClient
from grounded_search.model.gemini import GeminiClient

__all__ = [
    "ClaudeClient",
    "ClientFactory",
    "GeminiClient",
    "GenerationRequest",
    "ModelClient",
    "ModelResponse",
]
