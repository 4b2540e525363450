import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from grounded_search.credentials import resolve_credential
from grounded_search.errors import MissingCredentialError, classify_error
from grounded_search.model import ClientFactory, GenerationRequest
from grounded_search.run_logger import RunLogger
from grounded_search.settings import SettingsStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryService:
    """Shared orchestration for one grounded model call.

    Resolves the credential, calls the model once, parses the raw text and
    funnels every failure through the error classifier. Subclasses supply the
    prompts and the parser. No retries, caching or de-duplication happen here.

    Args:
        client_factory: Builds a model client for a resolved credential.
        model: Provider model ID.
        store: Settings store holding the user's credential override.
        default_api_key: Ambient credential used when there is no override.
        temperature: Sampling temperature.
        max_output_tokens: Output token cap, or None for the provider default.
        run_logger: Optional per-call JSON logger.
    """

    operation = "query"
    fallback_message: str | None = None

    def __init__(
        self,
        client_factory: ClientFactory,
        *,
        model: str,
        store: SettingsStore | None = None,
        default_api_key: str | None = None,
        temperature: float = 0.0,
        max_output_tokens: int | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._model = model
        self._store = store
        self._default_api_key = default_api_key
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._run_logger = run_logger or RunLogger(Path("logs"), enabled=False)

    def _resolve_api_key(self) -> str:
        override = self._store.api_key if self._store is not None else None
        api_key = resolve_credential(override, self._default_api_key)
        if api_key is None:
            raise MissingCredentialError("No API key configured")
        return api_key

    def _request(
        self,
        prompt: str,
        system_instruction: str,
        response_schema: dict[str, Any] | None = None,
    ) -> GenerationRequest:
        return GenerationRequest(
            model=self._model,
            prompt=prompt,
            system_instruction=system_instruction,
            temperature=self._temperature,
            web_search=True,
            response_schema=response_schema,
            max_output_tokens=self._max_output_tokens,
        )

    async def _run(
        self,
        request: GenerationRequest,
        parse: Callable[[str | None], T],
        *,
        log_input: dict[str, Any],
    ) -> T:
        """Execute *request* and parse the response text.

        Raises:
            ClassifiedError: On any failure, with the upstream error dropped.
        """
        record = self._run_logger.start_run(self.operation, log_input)
        try:
            client = self._client_factory(self._resolve_api_key())

            started = time.perf_counter()
            response = await client.generate(request)
            self._run_logger.log_stage(
                record,
                "model_call",
                type(client).__name__,
                {"prompt": request.prompt, "model": request.model},
                response.text,
                response.usage,
                time.perf_counter() - started,
            )

            started = time.perf_counter()
            result = parse(response.text)
            self._run_logger.log_stage(
                record,
                "extraction",
                parse.__name__,
                response.text,
                result,
                None,
                time.perf_counter() - started,
            )
        except Exception as e:
            classified = classify_error(e, fallback_message=self.fallback_message)
            logger.warning(f"{self.operation} failed ({classified.kind}): {type(e).__name__}: {e}")
            self._run_logger.finish_run(record, error_kind=str(classified.kind))
            raise classified from None

        self._run_logger.finish_run(record)
        return result
