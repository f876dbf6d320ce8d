"""
Fallback Policy: fixed placeholder results that keep the caller's rendering path unconditional.

- provider_failure(): summary explains the failure, mnemonics are a fixed error/tip list
- ensure_mnemonics(): keeps the summary, fills an empty mnemonic list with DEFAULT_MNEMONICS
- SAMBA_MNEMONICS: substitute for generate_mnemonics() when the model gives nothing usable
"""

from __future__ import annotations
from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry
from sambanotes.domain.result.error import ErrorInfo
import logging

logger = logging.getLogger(__name__)

PROVIDER_FAILURE_SUMMARY = (
    "An error occurred during processing. Please try again with a different file."
)

PROVIDER_FAILURE_MNEMONICS: tuple[MnemonicEntry, ...] = (
    MnemonicEntry(text="Error in processing", pattern="Error", description="processing failure"),
    MnemonicEntry(text="Please try again", pattern="Error", description="retry recommendation"),
    MnemonicEntry(text="Use smaller files", pattern="Tip", description="file size recommendation"),
    MnemonicEntry(text="Text format preferred", pattern="Tip", description="file format recommendation"),
    MnemonicEntry(text="Contact support if needed", pattern="Support", description="get help"),
)

DEFAULT_MNEMONICS: tuple[MnemonicEntry, ...] = (
    MnemonicEntry(text="DUM ka DUM ka", pattern="Basic Pattern", description="Simple samba rhythm"),
)

SAMBA_MNEMONICS: tuple[MnemonicEntry, ...] = (
    MnemonicEntry(text="BUM - pause - BUM - pause", pattern="Surdo"),
    MnemonicEntry(text="chi-chi-chi-CHI-chi-chi-CHI", pattern="Caixa"),
    MnemonicEntry(text="para-papa-para-papa", pattern="Repinique"),
    MnemonicEntry(text="chi-ka chi-ka chi-KA-KA", pattern="Tamborim"),
    MnemonicEntry(text="TING-ting TING-ting", pattern="Agogo"),
)


def provider_failure(exc: BaseException, model: str | None = None) -> AnalysisResult:
    return AnalysisResult(
        summary=PROVIDER_FAILURE_SUMMARY,
        mnemonics=list(PROVIDER_FAILURE_MNEMONICS),
        model=model,
        fallback=True,
        error=ErrorInfo.from_exception(exc, code="provider_error", category="server"),
    )


def ensure_mnemonics(result: AnalysisResult) -> AnalysisResult:
    if result.mnemonics:
        return result
    logger.info("No mnemonics in response; substituting the default mnemonic.")
    return result.model_copy(
        update={"mnemonics": list(DEFAULT_MNEMONICS), "fallback": True}
    )
