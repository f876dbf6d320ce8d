from __future__ import annotations
from sambanotes.core.clients.client_base import Client
from sambanotes.core.model.models.provider import ProviderFamily
from anthropic import AsyncAnthropic
from typing import Any

from typing_extensions import override
import logging

logger = logging.getLogger(__name__)


class AnthropicClient(Client):
    """
    Client implementation for Anthropic's Messages API.
    Async only. The envelope is the content-block list, not just its first block:
    a document answer can come back split across several text blocks.
    """

    family = ProviderFamily.ANTHROPIC
    api_key_envs = ("ANTHROPIC_API_KEY",)

    @override
    def _initialize_client(self) -> AsyncAnthropic:
        return AsyncAnthropic(api_key=self._get_api_key())

    @override
    async def _create(self, payload_dict: dict[str, Any]) -> Any:
        return await self.async_client.messages.create(**payload_dict)

    @override
    def extract_envelope(self, response: Any) -> Any:
        if getattr(response, "stop_reason", None) == "max_tokens":
            logger.warning("Anthropic response hit max_tokens; text may be cut off.")
        return response.content
