from __future__ import annotations
from sambanotes.core.guard.validation import EncodedDocument
from sambanotes.core.model.models.capability import ModelCapability
from sambanotes.domain.exceptions.exceptions import DocumentTooLarge
import logging

logger = logging.getLogger(__name__)


def enforce_size(
    document: EncodedDocument, capability: ModelCapability, truncate: bool
) -> EncodedDocument:
    """
    Return the document unchanged if it fits the model's ceiling, a flagged copy cut to the
    ceiling if truncation is enabled, or raise DocumentTooLarge.

    The cut is a raw character cut; it is not content-aware.
    """
    limit = capability.max_document_chars
    if document.length <= limit:
        return document

    if not truncate:
        logger.warning(
            f"Document of {document.length} chars exceeds {capability.model} ceiling of {limit}; truncation disabled."
        )
        raise DocumentTooLarge(model=capability.model, size=document.length, limit=limit)

    logger.warning(
        f"Truncating document from {document.length} to {limit} chars for {capability.model}."
    )
    return document.model_copy(update={"content": document.content[:limit], "truncated": True})
