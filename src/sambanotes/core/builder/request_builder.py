"""
Request Builder: AnalysisRequest + resolved capability (+ guarded document) -> ProviderPayload.

Two message conventions:
- inline (OPENAI, GOOGLE, PERPLEXITY): chat turns map 1:1, system turns included; a document
  is interpolated into the final user prompt.
- hoisting (ANTHROPIC): the first system turn moves to `system`; a document becomes a typed
  `document` block next to a text instruction block.

Sampling parameters the model does not accept are dropped (or rejected when strict).
"""

from __future__ import annotations
from sambanotes.core.clients.anthropic.adapter import document_message, split_system
from sambanotes.core.clients.anthropic.payload import AnthropicPayload
from sambanotes.core.clients.google.payload import GooglePayload
from sambanotes.core.clients.openai.adapter import (
    convert_messages_to_openai,
    inline_document,
)
from sambanotes.core.clients.openai.payload import OpenAIPayload
from sambanotes.core.clients.perplexity.payload import PerplexityPayload
from sambanotes.core.clients.payload_base import Payload
from sambanotes.core.guard.validation import EncodedDocument
from sambanotes.core.model.models.capability import ModelCapability
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.core.prompt.templates import (
    DEFAULT_ANALYSIS_PROMPT,
    RESPONSE_FORMAT_INSTRUCTIONS,
    TRUNCATION_NOTICE,
)
from sambanotes.domain.exceptions.exceptions import InvalidRequest
from sambanotes.domain.request.analysis_request import AnalysisRequest
from sambanotes.domain.request.sampling_params import SamplingParams
from pydantic import ValidationError
from typing import Any
import logging

logger = logging.getLogger(__name__)

INLINE_PAYLOADS: dict[ProviderFamily, type[OpenAIPayload]] = {
    ProviderFamily.OPENAI: OpenAIPayload,
    ProviderFamily.GOOGLE: GooglePayload,
    ProviderFamily.PERPLEXITY: PerplexityPayload,
}


def select_sampling(
    request: AnalysisRequest,
    capability: ModelCapability,
    defaults: SamplingParams,
    strict: bool = False,
) -> dict[str, float | int]:
    """
    Merge caller sampling over defaults and keep only what the model accepts.
    Strict mode rejects caller-supplied parameters the model does not accept; defaults are
    always dropped quietly.
    """
    requested = request.sampling.provided()
    rejected = sorted(k for k in requested if not capability.accepts(k))
    if rejected:
        if strict:
            raise InvalidRequest(
                f"Model {capability.model} does not accept: {', '.join(rejected)}."
            )
        logger.debug(f"Dropping unsupported sampling params for {capability.model}: {rejected}")

    merged = request.sampling.merged_over(defaults).provided()
    return {k: v for k, v in merged.items() if capability.accepts(k)}


def compose_instruction(request: AnalysisRequest, document: EncodedDocument | None) -> str:
    """
    Instruction text for document and prompt-only requests: caller prompt (or the default),
    the response format, and a truncation notice when the document was cut.
    """
    parts = [request.prompt.strip() or DEFAULT_ANALYSIS_PROMPT]
    parts.append(RESPONSE_FORMAT_INSTRUCTIONS.render())
    if document is not None and document.truncated:
        parts.append(
            TRUNCATION_NOTICE.render(
                {"kept": document.length, "original": document.original_length}
            )
        )
    return "\n\n".join(parts)


def _final_instruction(
    request: AnalysisRequest, document: EncodedDocument | None
) -> str | None:
    """
    Chat requests get the caller prompt verbatim (if any); everything else gets the composed instruction.
    """
    if document is None and request.is_chat:
        return request.prompt.strip() or None
    return compose_instruction(request, document)


def _inline_messages(
    request: AnalysisRequest, document: EncodedDocument | None
) -> list[dict[str, Any]]:
    messages = convert_messages_to_openai(request.messages)
    instruction = _final_instruction(request, document)
    if document is not None:
        messages.append({"role": "user", "content": inline_document(instruction, document)})
    elif instruction is not None:
        messages.append({"role": "user", "content": instruction})
    return messages


def _anthropic_messages(
    request: AnalysisRequest, document: EncodedDocument | None
) -> tuple[str | None, list[dict[str, Any]]]:
    system, messages = split_system(request.messages)
    instruction = _final_instruction(request, document)
    if document is not None:
        messages.append(document_message(instruction, document))
    elif instruction is not None:
        messages.append({"role": "user", "content": instruction})
    return system, messages


def build_payload(
    request: AnalysisRequest,
    capability: ModelCapability,
    document: EncodedDocument | None = None,
    defaults: SamplingParams | None = None,
    strict: bool = False,
) -> Payload:
    """
    Construct the provider payload for a resolved model.
    Raises InvalidRequest if the payload violates the provider's parameter bounds.
    """
    sampling = select_sampling(request, capability, defaults or SamplingParams(), strict)
    fields: dict[str, Any] = dict(sampling)
    fields[capability.max_tokens_param] = (
        request.sampling.max_tokens or capability.default_max_tokens
    )

    match capability.family:
        case ProviderFamily.ANTHROPIC:
            payload_cls = AnthropicPayload
            system, messages = _anthropic_messages(request, document)
            fields["system"] = system
        case ProviderFamily.OPENAI | ProviderFamily.GOOGLE | ProviderFamily.PERPLEXITY:
            payload_cls = INLINE_PAYLOADS[capability.family]
            messages = _inline_messages(request, document)
        case _:
            raise InvalidRequest(f"Unsupported provider family: {capability.family!r}")

    try:
        return payload_cls(model=capability.model, messages=messages, **fields)
    except ValidationError as e:
        raise InvalidRequest(
            f"Invalid parameters for {capability.model}: {e.errors(include_url=False)}"
        ) from e
