import pytest

from tests.factories import (
    AnalysisRequestFactory,
    ChatRequestFactory,
    EncodedDocumentFactory,
    SamplingParamsFactory,
)
from sambanotes.core.builder.request_builder import build_payload, select_sampling
from sambanotes.core.clients.anthropic.payload import AnthropicPayload
from sambanotes.core.clients.google.payload import GooglePayload
from sambanotes.core.clients.openai.payload import OpenAIPayload
from sambanotes.core.clients.perplexity.payload import PerplexityPayload
from sambanotes.core.prompt.templates import DEFAULT_ANALYSIS_PROMPT
from sambanotes.domain.exceptions.exceptions import InvalidRequest
from sambanotes.domain.request.analysis_request import DocumentEncoding
from sambanotes.domain.request.chat_message import Role
from sambanotes.domain.request.sampling_params import SamplingParams


# Chat role handling
@pytest.mark.parametrize("model", ["gpt-4o", "gemini-2.0-flash-exp", "sonar"])
def test_inline_families_keep_every_message_in_order(capabilities, model):
    request = ChatRequestFactory(model=model)
    payload = build_payload(request, capabilities.resolve(model))

    assert payload.messages == [
        {"role": m.role.value, "content": m.content} for m in request.messages
    ]
    assert "system" not in payload.model_dump(exclude_none=True)


def test_hoisting_family_moves_only_the_first_system_message(capabilities):
    request = ChatRequestFactory(model="SONNET")
    payload = build_payload(request, capabilities.resolve("SONNET"))

    first_system, user, assistant, second_system, last_user = request.messages
    assert isinstance(payload, AnthropicPayload)
    assert payload.system == first_system.content
    assert payload.messages == [
        {"role": "user", "content": user.content},
        {"role": "assistant", "content": assistant.content},
        {"role": "user", "content": second_system.content},
        {"role": "user", "content": last_user.content},
    ]
    assert len(payload.messages) == len(request.messages) - 1


def test_chat_prompt_is_appended_verbatim(capabilities):
    request = ChatRequestFactory(prompt="One more thing?")
    payload = build_payload(request, capabilities.resolve("GPT_4O"))

    assert payload.messages[-1] == {"role": "user", "content": "One more thing?"}
    assert len(payload.messages) == len(request.messages) + 1


# Payload types
@pytest.mark.parametrize(
    "model, payload_cls",
    [
        ("GPT_4O", OpenAIPayload),
        ("SONNET", AnthropicPayload),
        ("GEMINI_FLASH_WEB", GooglePayload),
        ("PERPLEXITY_SMALL", PerplexityPayload),
    ],
)
def test_payload_type_follows_family(capabilities, model, payload_cls):
    payload = build_payload(AnalysisRequestFactory(model=model), capabilities.resolve(model))
    assert type(payload) is payload_cls


# Documents
def test_inline_family_interpolates_base64_document(capabilities):
    request = AnalysisRequestFactory(prompt="Explain the breaks.")
    document = EncodedDocumentFactory()
    payload = build_payload(request, capabilities.resolve("GPT_4O"), document=document)

    assert len(payload.messages) == 1
    message = payload.messages[0]
    assert message["role"] == "user"
    assert message["content"].startswith("Explain the breaks.")
    assert "File name: batucada.pdf" in message["content"]
    assert f"Base64 PDF content: {document.content}" in message["content"]
    assert "```json" in message["content"]


def test_inline_family_interpolates_text_document(capabilities):
    request = AnalysisRequestFactory(prompt="Explain.")
    document = EncodedDocumentFactory(
        content="Surdo: X-X-", encoding=DocumentEncoding.TEXT, media_type="text/plain"
    )
    payload = build_payload(request, capabilities.resolve("sonar"), document=document)

    content = payload.messages[0]["content"]
    assert "Document content:\nSurdo: X-X-" in content
    assert "Base64" not in content


def test_hoisting_family_sends_typed_document_block(capabilities):
    request = AnalysisRequestFactory(model="SONNET", prompt="Explain the breaks.")
    document = EncodedDocumentFactory()
    payload = build_payload(request, capabilities.resolve("SONNET"), document=document)

    assert payload.system is None
    [message] = payload.messages
    document_block, text_block = message["content"]
    assert document_block == {
        "type": "document",
        "source": {
            "type": "base64",
            "media_type": "application/pdf",
            "data": document.content,
        },
        "title": "batucada.pdf",
    }
    assert text_block["type"] == "text"
    assert text_block["text"].startswith("Explain the breaks.")


def test_hoisting_family_text_document_block(capabilities):
    document = EncodedDocumentFactory(
        content="plain notes",
        encoding=DocumentEncoding.TEXT,
        media_type="text/markdown",
        filename=None,
    )
    payload = build_payload(
        AnalysisRequestFactory(model="SONNET"), capabilities.resolve("SONNET"), document=document
    )
    block = payload.messages[0]["content"][0]
    assert block == {
        "type": "document",
        "source": {"type": "text", "media_type": "text/plain", "data": "plain notes"},
    }


def test_empty_prompt_uses_default_instruction(capabilities):
    payload = build_payload(
        AnalysisRequestFactory(prompt="   "),
        capabilities.resolve("GPT_4O"),
        document=EncodedDocumentFactory(),
    )
    assert payload.messages[0]["content"].startswith(DEFAULT_ANALYSIS_PROMPT)


def test_truncated_document_is_disclosed_to_the_model(capabilities):
    document = EncodedDocumentFactory(content="JVBERi0xLj", original_length=20, truncated=True)
    payload = build_payload(
        AnalysisRequestFactory(), capabilities.resolve("GPT_4O"), document=document
    )
    assert "cut to its first 10 of 20 characters" in payload.messages[0]["content"]


def test_untruncated_document_has_no_notice(capabilities):
    payload = build_payload(
        AnalysisRequestFactory(), capabilities.resolve("GPT_4O"), document=EncodedDocumentFactory()
    )
    assert "too large" not in payload.messages[0]["content"]


# Sampling
def test_caller_sampling_wins_over_defaults(capabilities):
    request = AnalysisRequestFactory(sampling=SamplingParams(temperature=0.9))
    payload = build_payload(
        request,
        capabilities.resolve("GPT_4O"),
        defaults=SamplingParams(temperature=0.1, top_p=0.7),
    )
    assert payload.temperature == 0.9
    assert payload.top_p == 0.7


def test_unsupported_sampling_is_dropped(capabilities):
    request = AnalysisRequestFactory(model="O1", sampling=SamplingParamsFactory())
    payload = build_payload(
        request, capabilities.resolve("O1"), defaults=SamplingParams(temperature=0.1)
    )
    dumped = payload.model_dump(exclude_none=True)
    assert "temperature" not in dumped
    assert "top_p" not in dumped
    assert "max_tokens" not in dumped
    assert dumped["max_completion_tokens"] == 4096


def test_top_k_only_reaches_models_that_accept_it(capabilities):
    request = AnalysisRequestFactory(sampling=SamplingParams(top_k=40))
    assert "top_k" not in select_sampling(request, capabilities.resolve("GPT_4O"), SamplingParams())
    assert select_sampling(request, capabilities.resolve("sonar"), SamplingParams()) == {"top_k": 40}


def test_strict_sampling_rejects_caller_params(capabilities):
    request = AnalysisRequestFactory(model="O1", sampling=SamplingParams(temperature=0.5))
    with pytest.raises(InvalidRequest, match="temperature"):
        build_payload(request, capabilities.resolve("O1"), strict=True)


def test_strict_sampling_still_drops_defaults(capabilities):
    request = AnalysisRequestFactory(model="O1")
    payload = build_payload(
        request,
        capabilities.resolve("O1"),
        defaults=SamplingParams(temperature=0.1, top_p=0.7),
        strict=True,
    )
    assert payload.model_dump(exclude_none=True).keys() == {
        "model",
        "messages",
        "max_completion_tokens",
    }


def test_max_tokens_from_request_or_capability(capabilities):
    default = build_payload(AnalysisRequestFactory(model="sonar"), capabilities.resolve("sonar"))
    assert default.max_tokens == 1024

    request = AnalysisRequestFactory(model="sonar", sampling=SamplingParams(max_tokens=256))
    assert build_payload(request, capabilities.resolve("sonar")).max_tokens == 256


def test_provider_bounds_raise_invalid_request(capabilities):
    request = AnalysisRequestFactory(model="SONNET", sampling=SamplingParams(temperature=1.5))
    with pytest.raises(InvalidRequest, match="claude-3-5-sonnet"):
        build_payload(request, capabilities.resolve("SONNET"))


def test_builder_does_not_mutate_request(capabilities):
    request = ChatRequestFactory(model="SONNET")
    before = request.model_dump()
    build_payload(request, capabilities.resolve("SONNET"))
    assert request.model_dump() == before
    assert request.messages[0].role is Role.SYSTEM
