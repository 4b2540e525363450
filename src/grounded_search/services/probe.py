import logging

from grounded_search.credentials import is_plausible_credential
from grounded_search.errors import classify_error
from grounded_search.model import ClientFactory, GenerationRequest
from grounded_search.settings import SettingsStore

logger = logging.getLogger(__name__)

PROBE_PROMPT = "Hi"


class CredentialProbe:
    """Validate a candidate credential with one minimal model call.

    Args:
        client_factory: Builds a model client for the candidate credential.
        model: Provider model ID (a small, cheap model).
        max_output_tokens: Output cap for the probe call.
        store: Settings store the candidate is saved to on success.
    """

    def __init__(
        self,
        client_factory: ClientFactory,
        *,
        model: str,
        max_output_tokens: int = 5,
        store: SettingsStore | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._model = model
        self._max_output_tokens = max_output_tokens
        self._store = store

    async def probe(self, candidate: str) -> bool:
        """Return True iff a minimal call with *candidate* succeeds.

        Candidates shorter than five characters are rejected without a call.
        Never raises.
        """
        if not is_plausible_credential(candidate):
            return False

        request = GenerationRequest(
            model=self._model,
            prompt=PROBE_PROMPT,
            temperature=0.0,
            max_output_tokens=self._max_output_tokens,
        )
        try:
            client = self._client_factory(candidate.strip())
            await client.generate(request)
        except Exception as e:
            logger.info(f"Credential probe failed ({classify_error(e).kind})")
            logger.debug(f"Probe error: {type(e).__name__}: {e}")
            return False
        return True

    async def probe_and_store(self, candidate: str) -> bool:
        """Probe *candidate* and persist it as the override only on success.

        Raises:
            RuntimeError: If the probe was built without a settings store.
        """
        if self._store is None:
            raise RuntimeError("CredentialProbe has no settings store")
        if not await self.probe(candidate):
            return False
        self._store.set_api_key(candidate)
        return True
