"""
AnalyzerAsync runs the analysis pipeline for one request:

    resolve model -> validate -> encode + size guard -> build payload -> provider call
    -> normalize -> (fallback)

Input problems (InvalidRequest, DocumentTooLarge) are raised before any provider is
contacted. A ProviderCallFailed from the client is logged and converted into the fallback
result; it never reaches the caller of analyze().
"""

from __future__ import annotations
from sambanotes.core.builder.request_builder import build_payload
from sambanotes.core.fallback import fallback
from sambanotes.core.guard.size_guard import enforce_size
from sambanotes.core.guard.validation import (
    EncodedDocument,
    encode_document,
    validate_request,
)
from sambanotes.core.parser.normalizer import (
    MNEMONIC_LIST_STRATEGIES,
    extract_text,
    normalize,
)
from sambanotes.core.prompt.templates import MNEMONICS_PROMPT, MNEMONICS_SYSTEM_PROMPT
from sambanotes.domain.exceptions.exceptions import ProviderCallFailed
from sambanotes.domain.request.analysis_request import AnalysisRequest
from sambanotes.domain.request.chat_message import ChatMessage
from sambanotes.domain.request.sampling_params import SamplingParams
from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry
from sambanotes.utils.redaction import estimate_tokens, redact_payload
from typing import TYPE_CHECKING, Any
import asyncio
import logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from sambanotes.core.clients.payload_base import Payload
    from sambanotes.core.model.models.capability import ModelCapability
    from sambanotes.domain.config.analyzer_options import AnalyzerOptions

logger = logging.getLogger(__name__)


class AnalyzerAsync:
    """
    Stateless orchestration over an AnalyzerOptions struct.
    Safe to share across concurrent calls: nothing here is mutated after construction.
    """

    def __init__(self, options: AnalyzerOptions):
        self.options: AnalyzerOptions = options

    def _prepare(
        self, request: AnalysisRequest
    ) -> tuple[ModelCapability, EncodedDocument | None, Payload]:
        capability = self.options.capabilities.resolve(request.model)
        validate_request(request)

        document = None
        if request.has_document:
            truncate = (
                request.truncate
                if request.truncate is not None
                else self.options.truncate_oversize
            )
            document = enforce_size(encode_document(request), capability, truncate)

        payload = build_payload(
            request,
            capability,
            document=document,
            defaults=self.options.default_sampling,
            strict=self.options.strict_sampling,
        )
        return capability, document, payload

    async def _send(self, capability: ModelCapability, payload: Payload) -> Any:
        client = self.options.client_for(capability.family)
        payload_dict = payload.model_dump(exclude_none=True)
        if logger.isEnabledFor(logging.INFO):
            input_tokens = estimate_tokens(payload_dict["messages"], capability.model)
            logger.info(
                f"Sending request to {capability.family.value}/{capability.model}: "
                f"~{input_tokens} input tokens, "
                f"max output {payload_dict.get(capability.max_tokens_param)}"
            )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Payload: {redact_payload(payload_dict)}")
        return await client.query(payload)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze a document (or answer a prompt / chat) and return a structured result.

        Raises:
            InvalidRequest: unknown model, bad encoding or media type, missing client.
            DocumentTooLarge: oversize document with truncation disabled.
        """
        logger.info(f"Analyzing {request!r}")
        return await self._execute(request, *self._prepare(request))

    async def _execute(
        self,
        request: AnalysisRequest,
        capability: ModelCapability,
        document: EncodedDocument | None,
        payload: Payload,
    ) -> AnalysisResult:
        try:
            envelope = await self._send(capability, payload)
        except ProviderCallFailed as e:
            logger.error(f"Provider call failed, returning fallback result: {e}")
            logger.debug("Provider failure cause", exc_info=e.cause)
            return fallback.provider_failure(e, model=capability.model)

        result = normalize(envelope).model_copy(
            update={
                "model": capability.model,
                "truncated": document is not None and document.truncated,
            }
        )
        if request.require_mnemonics:
            result = fallback.ensure_mnemonics(result)
        logger.info(
            f"Analysis complete: {len(result.summary)} chars of summary, "
            f"{len(result.mnemonics)} mnemonics"
        )
        return result

    async def analyze_batch(
        self,
        requests: Sequence[AnalysisRequest],
        max_concurrent: int | None = None,
    ) -> list[AnalysisResult]:
        """
        Run analyze() over many requests concurrently. Results keep input order.

        Every request is validated and encoded before the first provider call, so an
        InvalidRequest or DocumentTooLarge anywhere in the batch raises with no calls made.
        Provider failures become fallback results as usual.
        """
        prepared = [(request, *self._prepare(request)) for request in requests]
        semaphore = asyncio.Semaphore(max_concurrent) if max_concurrent else None
        logger.info(
            f"Executing {len(requests)} analyses with max_concurrent={max_concurrent or 'unlimited'}"
        )
        tasks = [self._maybe_with_semaphore(item, semaphore) for item in prepared]
        return list(await asyncio.gather(*tasks))

    async def _maybe_with_semaphore(
        self, item: tuple, semaphore: asyncio.Semaphore | None
    ) -> AnalysisResult:
        if semaphore is None:
            return await self._execute(*item)
        async with semaphore:
            return await self._execute(*item)

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        sampling: SamplingParams | None = None,
    ) -> str:
        """
        Plain chat completion; returns the response text.
        Unlike analyze(), provider failures propagate as ProviderCallFailed.
        """
        request = AnalysisRequest(
            model=model,
            messages=tuple(messages),
            sampling=sampling or SamplingParams(),
        )
        capability, _, payload = self._prepare(request)
        envelope = await self._send(capability, payload)
        return extract_text(envelope)

    async def generate_mnemonics(
        self, summary: str, model: str, count: int = 5
    ) -> list[MnemonicEntry]:
        messages = [
            ChatMessage.system(MNEMONICS_SYSTEM_PROMPT),
            ChatMessage.user(
                MNEMONICS_PROMPT.render({"summary": summary, "count": count})
            ),
        ]
        try:
            text = await self.complete(messages, model)
        except ProviderCallFailed as e:
            logger.error(f"Mnemonic generation failed, using samba defaults: {e}")
            return list(fallback.SAMBA_MNEMONICS)

        mnemonics = normalize(text, MNEMONIC_LIST_STRATEGIES).mnemonics
        if not mnemonics:
            logger.warning("No mnemonics parsed from response; using samba defaults.")
            return list(fallback.SAMBA_MNEMONICS)
        return mnemonics[:count]
