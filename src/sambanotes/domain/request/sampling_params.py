from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

# Names as they appear in capability descriptors and provider payloads
SAMPLING_FIELDS = ("temperature", "top_p", "top_k")


class SamplingParams(BaseModel):
    """
    Tunable sampling parameters for a single call.
    Every field is optional; which ones reach the provider depends on the model's
    capability descriptor.
    """

    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    top_k: int | None = Field(default=None, ge=0)
    max_tokens: int | None = Field(default=None, ge=1)

    def merged_over(self, defaults: SamplingParams) -> SamplingParams:
        """
        Fill unset fields from `defaults`; explicit values on self win.
        """
        merged = defaults.model_dump()
        merged.update(self.model_dump(exclude_none=True))
        return SamplingParams(**merged)

    def provided(self) -> dict[str, float | int]:
        """
        The sampling fields (not max_tokens) that were actually set.
        """
        return {
            name: value
            for name in SAMPLING_FIELDS
            if (value := getattr(self, name)) is not None
        }
