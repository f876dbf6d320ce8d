"""
For Google Gemini models, through Gemini's OpenAI-compatible endpoint.
"""

from __future__ import annotations
from sambanotes.core.clients.openai.client import OpenAIClient
from sambanotes.core.model.models.provider import ProviderFamily


class GoogleClient(OpenAIClient):
    family = ProviderFamily.GOOGLE
    api_key_envs = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
    base_url = "https://generativelanguage.googleapis.com/v1beta/openai/"
