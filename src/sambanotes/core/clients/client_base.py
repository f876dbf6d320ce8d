"""
Base class for provider clients; openai, anthropic, google and perplexity inherit from it.

A client owns one SDK handle and performs exactly one call per query: no retries, no
timeout handling beyond the SDK's own. Every failure leaves as ProviderCallFailed.
"""

from __future__ import annotations
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.domain.exceptions.exceptions import ProviderCallFailed
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import override
import logging
import os
import time

if TYPE_CHECKING:
    from sambanotes.core.clients.payload_base import Payload

logger = logging.getLogger(__name__)


class Client(ABC):
    family: ClassVar[ProviderFamily]
    api_key_envs: ClassVar[tuple[str, ...]]

    def __init__(self, api_key: str | None = None, raw_client: Any | None = None):
        """
        Args:
            api_key: explicit key; falls back to the family's environment variables.
            raw_client: pre-built SDK client (or a fake in tests); built lazily otherwise.
        """
        self._api_key: str | None = api_key
        self._raw_client: Any | None = raw_client

    @property
    def async_client(self) -> Any:
        """
        The underlying async SDK client, created on first use.
        """
        if self._raw_client is None:
            self._raw_client = self._initialize_client()
        return self._raw_client

    def _get_api_key(self) -> str:
        if self._api_key:
            return self._api_key
        for name in self.api_key_envs:
            api_key = os.getenv(name)
            if api_key:
                return api_key
        raise ValueError(
            f"{' or '.join(self.api_key_envs)} environment variable not set."
        )

    @abstractmethod
    def _initialize_client(self) -> Any: ...

    @abstractmethod
    async def _create(self, payload_dict: dict[str, Any]) -> Any: ...

    @abstractmethod
    def extract_envelope(self, response: Any) -> Any:
        """
        Pick the content envelope out of the SDK response, unmodified:
        a string for chat-completions providers, a content-block list for Anthropic.
        """
        ...

    def _log_response(self, response: Any, model: str, duration: float) -> None:
        """
        Usage and stop-reason logging; SDK objects and dicts alike, missing fields ignored.
        """
        usage = getattr(response, "usage", None)
        input_tokens = getattr(usage, "prompt_tokens", None) or getattr(
            usage, "input_tokens", None
        )
        output_tokens = getattr(usage, "completion_tokens", None) or getattr(
            usage, "output_tokens", None
        )
        logger.info(
            f"{self.family.value} call for {model} completed in {duration:.0f} ms "
            f"(input tokens: {input_tokens if input_tokens is not None else 'unknown'}, "
            f"output tokens: {output_tokens if output_tokens is not None else 'unknown'})"
        )

    async def query(self, payload: Payload) -> Any:
        """
        Send the payload and return the provider's content envelope.
        """
        payload_dict = payload.model_dump(exclude_none=True)
        start_time = time.time()
        try:
            response = await self._create(payload_dict)
            envelope = self.extract_envelope(response)
        except Exception as e:
            raise ProviderCallFailed(
                provider=self.family.value, model=payload.model, cause=e
            ) from e
        duration = (time.time() - start_time) * 1000
        self._log_response(response, payload.model, duration)
        return envelope

    @override
    def __repr__(self):
        """
        Standard repr.
        """
        attributes = ", ".join(
            [
                f"{k}={repr(v)[:50]}"
                for k, v in self.__dict__.items()
                if k != "_api_key"
            ]
        )
        return f"{self.__class__.__name__}({attributes})"
