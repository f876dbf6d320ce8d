"""
Pre-call input validation and document encoding.
Everything here raises InvalidRequest and runs before any provider is contacted.
"""

from __future__ import annotations
from sambanotes.domain.request.analysis_request import AnalysisRequest, DocumentEncoding
from sambanotes.domain.exceptions.exceptions import InvalidRequest
from pydantic import BaseModel, ConfigDict
import base64
import binascii
import logging

logger = logging.getLogger(__name__)

ALLOWED_MEDIA_TYPES: dict[DocumentEncoding, frozenset[str]] = {
    DocumentEncoding.BASE64: frozenset({"application/pdf"}),
    DocumentEncoding.TEXT: frozenset({"text/plain", "text/markdown"}),
}

PDF_MAGIC = b"%PDF"


class EncodedDocument(BaseModel):
    """
    A document ready for embedding: base64 text for binary documents, plain text otherwise.
    `original_length` is the encoded length before any truncation.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    encoding: DocumentEncoding
    media_type: str
    filename: str | None = None
    original_length: int
    truncated: bool = False

    @property
    def length(self) -> int:
        return len(self.content)


def parse_encoding(tag: str) -> DocumentEncoding:
    try:
        return DocumentEncoding(tag)
    except ValueError:
        raise InvalidRequest(
            f"Unsupported document encoding {tag!r}; expected one of "
            f"{', '.join(e.value for e in DocumentEncoding)}."
        ) from None


def validate_request(request: AnalysisRequest) -> None:
    """
    Structural checks that do not depend on the resolved model.
    """
    if not request.has_document and not request.is_chat and not request.prompt.strip():
        raise InvalidRequest("Request has no document, no prompt and no messages.")
    if not request.has_document:
        return
    encoding = parse_encoding(request.document_encoding)
    if request.media_type not in ALLOWED_MEDIA_TYPES[encoding]:
        raise InvalidRequest(
            f"Unsupported document type {request.media_type!r} for {encoding.value} encoding; "
            f"allowed: {', '.join(sorted(ALLOWED_MEDIA_TYPES[encoding]))}."
        )
    if (
        encoding is DocumentEncoding.BASE64
        and isinstance(request.document, bytes)
        and not request.document.startswith(PDF_MAGIC)
    ):
        name = f" {request.filename}" if request.filename else ""
        raise InvalidRequest(f"Document{name} is not a PDF (missing %PDF header).")


def encode_document(request: AnalysisRequest) -> EncodedDocument:
    """
    Produce the encoded form that the size guard measures and the builder embeds.
    """
    if request.document is None:
        raise InvalidRequest("Request carries no document to encode.")
    encoding = parse_encoding(request.document_encoding)
    document = request.document

    match encoding:
        case DocumentEncoding.BASE64:
            if isinstance(document, bytes):
                content = base64.b64encode(document).decode("ascii")
            else:
                content = document.strip()
                try:
                    base64.b64decode(content, validate=True)
                except (binascii.Error, ValueError):
                    raise InvalidRequest(
                        "Document string is not valid base64."
                    ) from None
        case DocumentEncoding.TEXT:
            if isinstance(document, bytes):
                try:
                    content = document.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise InvalidRequest(
                        f"Text document is not valid UTF-8: {e}"
                    ) from None
            else:
                content = document

    logger.debug(
        f"Encoded document {request.filename or '<unnamed>'} as {encoding.value}: {len(content)} chars"
    )
    return EncodedDocument(
        content=content,
        encoding=encoding,
        media_type=request.media_type,
        filename=request.filename,
        original_length=len(content),
    )
