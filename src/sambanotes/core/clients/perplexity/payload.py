from sambanotes.core.clients.openai.payload import OpenAIPayload
from pydantic import Field
from typing import Literal


class PerplexityPayload(OpenAIPayload):
    """
    Perplexity accepts the OpenAI fields plus a few of its own. The OpenAI SDK does not know
    these, so the client moves them into `extra_body` (see EXTRA_BODY_FIELDS).
    """

    temperature: float | None = Field(default=None, ge=0.0, lt=2.0)
    top_k: int | None = Field(default=None, ge=0, le=2048)
    return_citations: bool | None = None
    search_recency_filter: Literal["month", "week", "day", "hour"] | None = None


EXTRA_BODY_FIELDS = ("top_k", "return_citations", "search_recency_filter")
