from __future__ import annotations
from sambanotes.core.guard.validation import EncodedDocument
from sambanotes.domain.request.analysis_request import DocumentEncoding
from sambanotes.domain.request.chat_message import ChatMessage, Role
from collections.abc import Sequence
from typing import Any


def convert_message_to_anthropic(message: ChatMessage) -> dict[str, Any]:
    """
    Pure function to adapt a ChatMessage into an Anthropic-compatible dictionary.

    Anthropic has no system role inside `messages`. The first system message is hoisted by
    split_system(); any system message that reaches this function is sent as a user turn.
    """
    match message.role:
        case Role.SYSTEM | Role.USER:
            return {"role": "user", "content": message.content}
        case Role.ASSISTANT:
            return {"role": "assistant", "content": message.content}
        case _:
            raise ValueError(f"Unknown role for Anthropic Adapter: {message.role!r}")


def split_system(
    messages: Sequence[ChatMessage],
) -> tuple[str | None, list[dict[str, Any]]]:
    """
    Hoist exactly the first system message into the dedicated `system` field.
    Every other message, later system messages included, keeps its position in the list.
    """
    system: str | None = None
    converted: list[dict[str, Any]] = []
    for message in messages:
        if system is None and message.role is Role.SYSTEM:
            system = message.content
            continue
        converted.append(convert_message_to_anthropic(message))
    return system, converted


def document_block(document: EncodedDocument) -> dict[str, Any]:
    """
    Typed document block. PDFs travel as base64, text documents as plain text.
    """
    match document.encoding:
        case DocumentEncoding.BASE64:
            source = {
                "type": "base64",
                "media_type": document.media_type,
                "data": document.content,
            }
        case DocumentEncoding.TEXT:
            source = {
                "type": "text",
                "media_type": "text/plain",
                "data": document.content,
            }
    block: dict[str, Any] = {"type": "document", "source": source}
    if document.filename:
        block["title"] = document.filename
    return block


def document_message(instruction: str, document: EncodedDocument) -> dict[str, Any]:
    """
    User turn carrying the document block followed by the text instruction.
    """
    return {
        "role": "user",
        "content": [
            document_block(document),
            {"type": "text", "text": instruction},
        ],
    }
