from pydantic import BaseModel, Field, ConfigDict
from typing import Any


class OpenAIPayload(BaseModel):
    """
    Anti-corruption Layer for OpenAI chat completions.
    Validates top-level configuration while allowing flexibility in message structure.
    Since Gemini and Perplexity speak the same dialect, their payloads inherit from this model.
    """

    model_config = ConfigDict(extra="allow")

    # Required
    model: str
    messages: list[dict[str, Any]]

    # Optional
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    max_tokens: int | None = Field(default=None, ge=1)
    # o1-style reasoning models take this instead of max_tokens
    max_completion_tokens: int | None = Field(default=None, ge=1)
