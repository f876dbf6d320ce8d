"""
For Perplexity models.
NOTE: these use the standard OpenAI SDK; Perplexity-only fields (top_k, search filters)
ride in extra_body.
"""

from __future__ import annotations
from sambanotes.core.clients.openai.client import OpenAIClient
from sambanotes.core.clients.perplexity.payload import EXTRA_BODY_FIELDS
from sambanotes.core.model.models.provider import ProviderFamily


class PerplexityClient(OpenAIClient):
    family = ProviderFamily.PERPLEXITY
    api_key_envs = ("PERPLEXITY_API_KEY",)
    base_url = "https://api.perplexity.ai"
    extra_body_fields = EXTRA_BODY_FIELDS
