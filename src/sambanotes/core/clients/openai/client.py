from __future__ import annotations
from sambanotes.core.clients.client_base import Client
from sambanotes.core.model.models.provider import ProviderFamily
from openai import AsyncOpenAI
from typing import Any, ClassVar

from typing_extensions import override
import logging

logger = logging.getLogger(__name__)


class OpenAIClient(Client):
    """
    Client for OpenAI's chat completions API, using the official async SDK.
    Also the base for every provider reached through an OpenAI-compatible endpoint.
    """

    family = ProviderFamily.OPENAI
    api_key_envs = ("OPENAI_API_KEY",)
    base_url: ClassVar[str | None] = None
    # Payload fields the OpenAI SDK signature does not know; sent through extra_body
    extra_body_fields: ClassVar[tuple[str, ...]] = ()

    @override
    def _initialize_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=self._get_api_key(), base_url=self.base_url)

    @override
    async def _create(self, payload_dict: dict[str, Any]) -> Any:
        extra_body = {
            name: payload_dict.pop(name)
            for name in self.extra_body_fields
            if name in payload_dict
        }
        if extra_body:
            payload_dict["extra_body"] = extra_body
        return await self.async_client.chat.completions.create(**payload_dict)

    @override
    def extract_envelope(self, response: Any) -> Any:
        if not response.choices:
            raise ValueError(f"{self.family.value} response contained no choices")
        choice = response.choices[0]
        if getattr(choice, "finish_reason", None) == "length":
            logger.warning(
                f"{self.family.value} response hit the output token cap; text may be cut off."
            )
        return choice.message.content or ""
