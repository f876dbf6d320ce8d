from __future__ import annotations
from sambanotes.core.model.models.provider import ProviderFamily
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class ModelCapability(BaseModel):
    """
    Static, read-only description of a model: which family serves it, how large an encoded
    document it can take, which sampling parameters it accepts, and how its output cap is named.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Provider-side model identifier")
    family: ProviderFamily
    max_document_chars: int = Field(
        ..., ge=1, description="Maximum safe length of the encoded document"
    )
    accepted_params: frozenset[str] = Field(
        default=frozenset(),
        description="Subset of {'temperature', 'top_p', 'top_k'} the model accepts",
    )
    default_max_tokens: int = Field(..., ge=1)
    max_tokens_param: Literal["max_tokens", "max_completion_tokens"] = "max_tokens"

    def accepts(self, param: str) -> bool:
        return param in self.accepted_params

    @property
    def card(self) -> dict[str, str]:
        """
        Flat string view for display.
        """
        return {
            "model": self.model,
            "family": self.family.value,
            "max_document_chars": f"{self.max_document_chars:,}",
            "accepted_params": ", ".join(sorted(self.accepted_params)) or "-",
            "default_max_tokens": str(self.default_max_tokens),
            "max_tokens_param": self.max_tokens_param,
        }
