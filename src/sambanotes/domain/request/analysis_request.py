"""
AnalysisRequest is the single input to the orchestration layer.

Two shapes share the same type:
- document + prompt: `document` is set (PDF bytes / base64 string, or UTF-8 text), `prompt` is the instruction
- multi-turn chat: `messages` is set; `prompt`, if given, is appended as a final user turn

Encoding and media type are kept as plain strings so that a bad tag is reported as
InvalidRequest by the validator rather than as a pydantic error at construction time.
"""

from __future__ import annotations
from sambanotes.domain.request.chat_message import ChatMessage
from sambanotes.domain.request.sampling_params import SamplingParams
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from typing_extensions import override


class DocumentEncoding(str, Enum):
    BASE64 = "base64"
    TEXT = "text"


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model id or alias, e.g. 'SONNET' or 'gpt-4o'")
    prompt: str = ""
    document: bytes | str | None = None
    document_encoding: str = DocumentEncoding.BASE64.value
    media_type: str = "application/pdf"
    filename: str | None = None
    messages: tuple[ChatMessage, ...] = ()
    sampling: SamplingParams = Field(default_factory=SamplingParams)
    truncate: bool | None = Field(
        default=None,
        description="Per-call truncation policy; None defers to AnalyzerOptions.",
    )
    require_mnemonics: bool = False

    @property
    def has_document(self) -> bool:
        return self.document is not None

    @property
    def is_chat(self) -> bool:
        return bool(self.messages)

    @override
    def __repr__(self) -> str:
        size = len(self.document) if self.document is not None else 0
        return (
            f"AnalysisRequest(model={self.model!r}, encoding={self.document_encoding!r}, "
            f"document_size={size}, messages={len(self.messages)}, sampling={self.sampling!r})"
        )
