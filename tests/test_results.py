from tests.factories import MnemonicEntryFactory
from sambanotes.core.fallback.fallback import ensure_mnemonics, provider_failure
from sambanotes.domain.exceptions.exceptions import ProviderCallFailed
from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry
from sambanotes.domain.result.error import ErrorInfo


def test_to_payload_omits_missing_fields():
    result = AnalysisResult(
        summary="S",
        mnemonics=[MnemonicEntryFactory(), MnemonicEntry(text="pa-ra")],
        model="gpt-4o",
    )
    assert result.to_payload() == {
        "aiSummary": "S",
        "mnemonics": [
            {"text": "BUM - pause - BUM - pause", "pattern": "Surdo", "description": "Steady pulse"},
            {"text": "pa-ra"},
        ],
    }


def test_mnemonic_str():
    assert str(MnemonicEntryFactory()) == "Surdo: BUM - pause - BUM - pause"
    assert str(MnemonicEntry(text="pa-ra")) == "pa-ra"


def test_error_info_includes_cause_type():
    error = ProviderCallFailed(provider="openai", model="gpt-4o", cause=TimeoutError("slow"))
    info = ErrorInfo.from_exception(error, code="provider_error", category="server")
    assert "TimeoutError" in info.message
    assert "SERVER - provider_error" in str(info)


def test_provider_failure_result_is_renderable():
    error = ProviderCallFailed(provider="anthropic", model="m", cause=OSError("x"))
    result = provider_failure(error, model="m")
    assert result.fallback is True
    assert len(result.mnemonics) == 5
    assert result.to_payload()["aiSummary"] == result.summary


def test_ensure_mnemonics_leaves_non_empty_results():
    result = AnalysisResult(summary="S", mnemonics=[MnemonicEntryFactory()])
    assert ensure_mnemonics(result) is result
