"""Tests for CredentialProbe."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from grounded_search.data import APICallUsage
from grounded_search.model import GenerationRequest, ModelClient, ModelResponse
from grounded_search.services.probe import CredentialProbe
from grounded_search.settings import SettingsStore


@pytest.fixture
def client() -> MagicMock:
    """Create a mock model client whose call succeeds."""
    c = MagicMock()
    c.generate = AsyncMock(
        return_value=ModelResponse(text="Hello", usage=APICallUsage(model="probe-model"))
    )
    return c


@pytest.fixture
def factory(client: MagicMock) -> MagicMock:
    return MagicMock(return_value=client)


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings.json")


@pytest.fixture
def probe(factory: MagicMock, store: SettingsStore) -> CredentialProbe:
    return CredentialProbe(factory, model="probe-model", max_output_tokens=5, store=store)


@pytest.mark.parametrize("candidate", ["", "abc", "abcd", "   "])
async def test_probe_rejects_short_candidates_without_call(
    probe: CredentialProbe, factory: MagicMock, candidate: str
) -> None:
    assert await probe.probe(candidate) is False
    factory.assert_not_called()


async def test_probe_success(probe: CredentialProbe, factory: MagicMock, client: MagicMock) -> None:
    assert await probe.probe("valid-key-123") is True
    factory.assert_called_once_with("valid-key-123")

    request: GenerationRequest = client.generate.call_args.args[0]
    assert request.model == "probe-model"
    assert request.max_output_tokens == 5
    assert request.web_search is False


async def test_probe_returns_false_on_auth_failure(
    probe: CredentialProbe, client: MagicMock
) -> None:
    client.generate.side_effect = Exception("400 INVALID_ARGUMENT. API_KEY_INVALID")
    assert await probe.probe("invalid-key") is False


async def test_probe_returns_false_on_transport_failure(
    probe: CredentialProbe, client: MagicMock
) -> None:
    client.generate.side_effect = httpx.ConnectError("unreachable")
    assert await probe.probe("some-key-123") is False


async def test_probe_returns_false_when_client_construction_fails(
    probe: CredentialProbe, factory: MagicMock
) -> None:
    factory.side_effect = ValueError("bad key format")
    assert await probe.probe("some-key-123") is False


async def test_probe_and_store_persists_on_success(
    probe: CredentialProbe, store: SettingsStore
) -> None:
    assert await probe.probe_and_store("valid-key-123") is True
    assert store.api_key == "valid-key-123"


async def test_probe_and_store_does_not_persist_on_failure(
    probe: CredentialProbe, store: SettingsStore, client: MagicMock
) -> None:
    store.set_api_key("previous-key")
    client.generate.side_effect = Exception("403 PERMISSION_DENIED")

    assert await probe.probe_and_store("invalid-key") is False
    assert store.api_key == "previous-key"


async def test_probe_and_store_requires_store(factory: MagicMock) -> None:
    probe = CredentialProbe(factory, model="probe-model")
    with pytest.raises(RuntimeError):
        await probe.probe_and_store("valid-key-123")


class StaticClient:
    """A minimal implementation to verify protocol requirements."""

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        return ModelResponse(text="ok", usage=APICallUsage(model=request.model))


async def test_probe_with_protocol_client() -> None:
    def make(api_key: str) -> ModelClient:
        return StaticClient()

    probe = CredentialProbe(make, model="probe-model")
    assert await probe.probe("valid-key-123") is True
