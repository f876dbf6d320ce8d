from __future__ import annotations
from typing import Any

from typing_extensions import override

import pytest

from sambanotes.core.clients.client_base import Client
from sambanotes.core.model.models.capability import ModelCapability
from sambanotes.core.model.models.modelstore import CapabilityTable, ModelStore
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.domain.config.analyzer_options import AnalyzerOptions
from sambanotes.domain.request.sampling_params import SamplingParams


class FakeClient(Client):
    """
    Provider client that records payloads instead of calling an SDK.
    `envelope` is returned as-is (or called with the payload dict if callable);
    `error` is raised from the call and surfaces as ProviderCallFailed.
    """

    family = ProviderFamily.OPENAI
    api_key_envs = ("FAKE_API_KEY",)

    def __init__(
        self,
        family: ProviderFamily = ProviderFamily.OPENAI,
        envelope: Any = "",
        error: Exception | None = None,
    ):
        super().__init__(api_key="test-key")
        self.family = family
        self.envelope = envelope
        self.error = error
        self.payloads: list[dict[str, Any]] = []

    @property
    def calls(self) -> int:
        return len(self.payloads)

    @override
    def _initialize_client(self) -> Any:
        return None

    @override
    async def _create(self, payload_dict: dict[str, Any]) -> Any:
        self.payloads.append(payload_dict)
        if self.error is not None:
            raise self.error
        if callable(self.envelope):
            return self.envelope(payload_dict)
        return self.envelope

    @override
    def extract_envelope(self, response: Any) -> Any:
        return response


@pytest.fixture(scope="session")
def capabilities() -> CapabilityTable:
    """
    The packaged capability table.
    """
    return ModelStore.load()


@pytest.fixture
def tiny_capabilities() -> CapabilityTable:
    """
    One OpenAI-family model with a 16 character document ceiling.
    """
    tiny = ModelCapability(
        model="tiny-model",
        family=ProviderFamily.OPENAI,
        max_document_chars=16,
        accepted_params=frozenset({"temperature", "top_p"}),
        default_max_tokens=64,
    )
    return CapabilityTable({"tiny-model": tiny}, {"TINY": "tiny-model"})


@pytest.fixture
def fake_clients() -> dict[ProviderFamily, FakeClient]:
    return {family: FakeClient(family=family) for family in ProviderFamily}


@pytest.fixture
def default_sampling() -> SamplingParams:
    return SamplingParams(temperature=0.1, top_p=0.7)


@pytest.fixture
def options(capabilities, fake_clients, default_sampling) -> AnalyzerOptions:
    return AnalyzerOptions(
        capabilities=capabilities,
        clients=fake_clients,
        default_sampling=default_sampling,
    )


@pytest.fixture
def tiny_options(tiny_capabilities, fake_clients) -> AnalyzerOptions:
    return AnalyzerOptions(capabilities=tiny_capabilities, clients=fake_clients)
