from __future__ import annotations
from sambanotes.core.guard.validation import EncodedDocument
from sambanotes.core.prompt.templates import INLINE_DOCUMENT
from sambanotes.domain.request.chat_message import ChatMessage
from collections.abc import Sequence
from typing import Any


def convert_message_to_openai(message: ChatMessage) -> dict[str, Any]:
    """
    Pure function to adapt a ChatMessage into an OpenAI-compatible dictionary.
    Used by the OpenAI, Google and Perplexity families; system messages stay inline.
    """
    return {"role": message.role.value, "content": message.content}


def convert_messages_to_openai(messages: Sequence[ChatMessage]) -> list[dict[str, Any]]:
    return [convert_message_to_openai(m) for m in messages]


def inline_document(instruction: str, document: EncodedDocument) -> str:
    """
    The chat-completions dialect has no document block; the document is interpolated
    into the user prompt instead (base64 for PDFs, verbatim for text).
    """
    return INLINE_DOCUMENT.render(
        {
            "instruction": instruction,
            "filename": document.filename,
            "encoding": document.encoding.value,
            "content": document.content,
        }
    )
