# Orchestration classes
from sambanotes.core.analyzer.analyzer_async import AnalyzerAsync

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


async def analyze(request: AnalysisRequest, options: AnalyzerOptions) -> AnalysisResult:
    return await AnalyzerAsync(options).analyze(request)


__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "AnalyzerAsync",
    "AnalyzerOptions",
    "ChatMessage",
    "DocumentEncoding",
    "DocumentTooLarge",
    "InvalidRequest",
    "MnemonicEntry",
    "ProviderCallFailed",
    "Role",
    "SambaNotesError",
    "SamplingParams",
    "analyze",
]
