# Orchestration classes
from sambanotes.core.analyzer.analyzer_sync import AnalyzerSync
from sambanotes.core.notation.notation import NotationData, extract_notation

# Primitives: request / result models
from sambanotes.domain.request.analysis_request import AnalysisRequest, DocumentEncoding
from sambanotes.domain.request.chat_message import ChatMessage, Role
from sambanotes.domain.request.sampling_params import SamplingParams
from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry

# Configs
from sambanotes.domain.config.analyzer_options import AnalyzerOptions

# Errors
from sambanotes.domain.exceptions.exceptions import (
    DocumentTooLarge,
    InvalidRequest,
    ProviderCallFailed,
    SambaNotesError,
)

Analyzer = AnalyzerSync  # Alias for easier imports


def analyze(
    request: AnalysisRequest, options: AnalyzerOptions | None = None
) -> AnalysisResult:
    """
    One-shot analysis; builds default options from settings when none are given.
    """
    return AnalyzerSync(options).analyze(request)


__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "Analyzer",
    "AnalyzerOptions",
    "AnalyzerSync",
    "ChatMessage",
    "DocumentEncoding",
    "DocumentTooLarge",
    "InvalidRequest",
    "MnemonicEntry",
    "NotationData",
    "ProviderCallFailed",
    "Role",
    "SambaNotesError",
    "SamplingParams",
    "analyze",
    "extract_notation",
]
