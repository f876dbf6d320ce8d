"""
Helpers for logging provider payloads without leaking document contents.
"""

from __future__ import annotations
from typing import Any
import re

BASE64_PDF_LABEL = re.compile(r"Base64 PDF content:\s*\S+")
# "%PDF-" base64-encodes to "JVBERi0"
BASE64_PDF_RUN = re.compile(r"JVBERi0[A-Za-z0-9+/=]*")
OMITTED = "[PDF_BASE64_CONTENT_OMITTED]"
MAX_LOGGED_CHARS = 2000


def redact_text(text: str, max_chars: int = MAX_LOGGED_CHARS) -> str:
    text = BASE64_PDF_LABEL.sub("Base64 PDF content: [CONTENT_OMITTED]", text)
    text = BASE64_PDF_RUN.sub(OMITTED, text)
    if len(text) > max_chars:
        text = f"{text[:max_chars]}... [{len(text) - max_chars} more chars]"
    return text


def _redact_block(block: Any) -> Any:
    if not isinstance(block, dict):
        return block
    match block.get("type"):
        case "document":
            source = dict(block.get("source", {}))
            data = source.get("data", "")
            source["data"] = f"[DOCUMENT_CONTENT_OMITTED: {len(data)} chars]"
            return {**block, "source": source}
        case "text":
            return {**block, "text": redact_text(block.get("text", ""))}
        case _:
            return block


def redact_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Copy of a payload dict with document data and inlined base64 removed from every message.
    """
    redacted = dict(payload)
    messages = []
    for message in payload.get("messages", []):
        content = message.get("content")
        if isinstance(content, str):
            content = redact_text(content)
        elif isinstance(content, list):
            content = [_redact_block(block) for block in content]
        messages.append({**message, "content": content})
    redacted["messages"] = messages
    if isinstance(redacted.get("system"), str):
        redacted["system"] = redact_text(redacted["system"])
    return redacted


def _get_encoding(model: str):
    import tiktoken

    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        return tiktoken.get_encoding("cl100k_base")


def estimate_tokens(messages: list[dict[str, Any]], model: str) -> int:
    """
    Estimate input tokens for a list of provider message dicts.

    ChatML accounting: 3 tokens of framing per message plus its role and content,
    and 3 tokens priming the reply. Models tiktoken does not know (Claude, Gemini,
    Sonar) are counted with cl100k_base, which is an approximation only.
    Document blocks count by the encoded length of their data.
    """
    encoding = _get_encoding(model)

    def count(text: str) -> int:
        return len(encoding.encode(text, disallowed_special=()))

    tokens_per_message = 3
    tokens_reply_primer = 3

    total = 0
    for message in messages:
        total += tokens_per_message
        total += count(str(message.get("role", "")))
        content = message.get("content")
        if isinstance(content, str):
            total += count(content)
        elif isinstance(content, list):
            for block in content:
                if not isinstance(block, dict):
                    continue
                match block.get("type"):
                    case "text":
                        total += count(block.get("text", ""))
                    case "document":
                        total += count(block.get("source", {}).get("data", ""))
    total += tokens_reply_primer
    return total
