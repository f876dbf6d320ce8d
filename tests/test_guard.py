import base64

import pytest

from tests.factories import SAMPLE_PDF, AnalysisRequestFactory, EncodedDocumentFactory, TextRequestFactory
from sambanotes.core.guard.size_guard import enforce_size
from sambanotes.core.guard.validation import encode_document, validate_request
from sambanotes.core.model.models.capability import ModelCapability
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.domain.exceptions.exceptions import DocumentTooLarge, InvalidRequest
from sambanotes.domain.request.analysis_request import AnalysisRequest, DocumentEncoding

TEN_CHARS = ModelCapability(
    model="ten",
    family=ProviderFamily.OPENAI,
    max_document_chars=10,
    default_max_tokens=100,
)


# Size guard
def test_document_within_ceiling_is_returned_unchanged():
    document = EncodedDocumentFactory(content="0123456789")
    assert enforce_size(document, TEN_CHARS, truncate=False) is document


def test_oversize_without_truncation_raises():
    document = EncodedDocumentFactory(content="x" * 11)
    with pytest.raises(DocumentTooLarge) as exc_info:
        enforce_size(document, TEN_CHARS, truncate=False)
    assert exc_info.value.size == 11
    assert exc_info.value.limit == 10
    assert exc_info.value.model == "ten"


def test_oversize_with_truncation_is_cut_and_flagged():
    document = EncodedDocumentFactory(content="abcdefghijklmnopqrst")
    guarded = enforce_size(document, TEN_CHARS, truncate=True)

    assert guarded.content == "abcdefghij"
    assert guarded.truncated is True
    assert guarded.original_length == 20
    assert document.truncated is False


# Validation
def test_valid_pdf_request_passes():
    validate_request(AnalysisRequestFactory())
    validate_request(TextRequestFactory(media_type="text/markdown"))


def test_empty_request_is_rejected():
    with pytest.raises(InvalidRequest):
        validate_request(AnalysisRequest(model="GPT_4O"))


def test_unknown_encoding_is_rejected():
    with pytest.raises(InvalidRequest, match="encoding"):
        validate_request(AnalysisRequestFactory(document_encoding="hex"))


@pytest.mark.parametrize(
    "encoding, media_type",
    [("base64", "image/png"), ("text", "application/pdf"), ("base64", "text/plain")],
)
def test_media_type_must_match_encoding(encoding, media_type):
    request = AnalysisRequestFactory(document_encoding=encoding, media_type=media_type)
    with pytest.raises(InvalidRequest, match="Unsupported document type"):
        validate_request(request)


def test_bytes_without_pdf_header_are_rejected():
    request = AnalysisRequestFactory(document=b"PK\x03\x04 not a pdf")
    with pytest.raises(InvalidRequest, match="batucada.pdf is not a PDF"):
        validate_request(request)


# Encoding
def test_pdf_bytes_are_base64_encoded():
    document = encode_document(AnalysisRequestFactory())
    assert document.encoding is DocumentEncoding.BASE64
    assert base64.b64decode(document.content) == SAMPLE_PDF
    assert document.content.startswith("JVBERi0")
    assert document.original_length == document.length
    assert document.truncated is False


def test_base64_string_is_taken_as_encoded():
    encoded = base64.b64encode(SAMPLE_PDF).decode()
    document = encode_document(AnalysisRequestFactory(document=f"  {encoded}\n"))
    assert document.content == encoded


def test_invalid_base64_string_is_rejected():
    with pytest.raises(InvalidRequest, match="base64"):
        encode_document(AnalysisRequestFactory(document="not base64 at all!"))


def test_text_bytes_are_decoded():
    document = encode_document(TextRequestFactory(document="Caixa: xxXx".encode("utf-8")))
    assert document.content == "Caixa: xxXx"
    assert document.encoding is DocumentEncoding.TEXT


def test_undecodable_text_is_rejected():
    with pytest.raises(InvalidRequest, match="UTF-8"):
        encode_document(TextRequestFactory(document=b"\xff\xfe\xfa"))
