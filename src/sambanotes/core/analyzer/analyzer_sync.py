from __future__ import annotations
from sambanotes.core.analyzer.analyzer_async import AnalyzerAsync
from sambanotes.utils.event_loop import warn_if_loop_running
from typing import TYPE_CHECKING, Any
import asyncio
import logging

if TYPE_CHECKING:
    from collections.abc import Coroutine, Sequence
    from sambanotes.domain.config.analyzer_options import AnalyzerOptions
    from sambanotes.domain.request.analysis_request import AnalysisRequest
    from sambanotes.domain.request.chat_message import ChatMessage
    from sambanotes.domain.request.sampling_params import SamplingParams
    from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry

logger = logging.getLogger(__name__)


class AnalyzerSync:
    """
    Synchronous wrapper for AnalyzerAsync, for scripts and the CLI.
    Each call runs its own event loop; do not use from inside a running loop.
    """

    def __init__(self, options: AnalyzerOptions | None = None):
        if options is None:
            from sambanotes.config import settings

            options = settings.default_analyzer_options()
        self._impl = AnalyzerAsync(options)

    @property
    def options(self) -> AnalyzerOptions:
        return self._impl.options

    def _run_sync(self, coroutine: Coroutine[Any, Any, Any]) -> Any:
        # stacklevel 3: _run_sync -> public method -> user code
        warn_if_loop_running(f"AnalyzerSync.{coroutine.__name__}", stacklevel=3)
        return asyncio.run(coroutine)

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        return self._run_sync(self._impl.analyze(request))

    def analyze_batch(
        self, requests: Sequence[AnalysisRequest], max_concurrent: int | None = None
    ) -> list[AnalysisResult]:
        return self._run_sync(self._impl.analyze_batch(requests, max_concurrent))

    def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        sampling: SamplingParams | None = None,
    ) -> str:
        return self._run_sync(self._impl.complete(messages, model, sampling))

    def generate_mnemonics(
        self, summary: str, model: str, count: int = 5
    ) -> list[MnemonicEntry]:
        return self._run_sync(self._impl.generate_mnemonics(summary, model, count))
