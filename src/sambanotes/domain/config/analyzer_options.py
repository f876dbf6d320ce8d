from __future__ import annotations
from sambanotes.core.clients.client_base import Client
from sambanotes.core.model.models.modelstore import CapabilityTable, ModelStore
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.domain.exceptions.exceptions import InvalidRequest
from sambanotes.domain.request.sampling_params import SamplingParams
from pydantic import BaseModel, ConfigDict, Field


class AnalyzerOptions(BaseModel):
    """
    Process-wide configuration for the analyzer, built once at startup and passed in explicitly.
    Holds the read-only capability table and one pre-configured client per provider family.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    capabilities: CapabilityTable = Field(
        ..., description="Model id/alias -> capability descriptor.", exclude=True
    )
    clients: dict[ProviderFamily, Client] = Field(
        default_factory=dict,
        description="One client per provider family.",
        exclude=True,
    )
    truncate_oversize: bool = Field(
        default=False,
        description="Truncate oversize documents instead of raising DocumentTooLarge.",
    )
    default_sampling: SamplingParams = Field(
        default_factory=SamplingParams,
        description="Sampling values used where the request leaves a field unset.",
    )
    strict_sampling: bool = Field(
        default=False,
        description="Reject caller sampling params the model does not accept instead of dropping them.",
    )

    def client_for(self, family: ProviderFamily) -> Client:
        try:
            return self.clients[family]
        except KeyError:
            raise InvalidRequest(
                f"No client configured for provider family {family.value!r}."
            ) from None

    @classmethod
    def with_default_clients(cls, **overrides) -> AnalyzerOptions:
        """
        Packaged capability table plus one SDK-backed client per family.
        API keys are read from the environment on first use, not here.
        """
        from sambanotes.core.clients.anthropic.client import AnthropicClient
        from sambanotes.core.clients.google.client import GoogleClient
        from sambanotes.core.clients.openai.client import OpenAIClient
        from sambanotes.core.clients.perplexity.client import PerplexityClient

        clients: dict[ProviderFamily, Client] = {
            ProviderFamily.OPENAI: OpenAIClient(),
            ProviderFamily.ANTHROPIC: AnthropicClient(),
            ProviderFamily.GOOGLE: GoogleClient(),
            ProviderFamily.PERPLEXITY: PerplexityClient(),
        }
        overrides.setdefault("capabilities", ModelStore.load())
        overrides.setdefault("clients", clients)
        return cls(**overrides)
