"""
Output of the orchestration layer.
`mnemonics` is never None: an unparseable response gives an empty list, a provider failure
gives the fallback list.
"""

from __future__ import annotations
from sambanotes.domain.result.error import ErrorInfo
from pydantic import BaseModel, ConfigDict, Field


class MnemonicEntry(BaseModel):
    """A short memorable phrase plus optional pattern label and description."""

    model_config = ConfigDict(frozen=True)

    text: str
    pattern: str | None = None
    description: str | None = None

    def __str__(self) -> str:
        if self.pattern:
            return f"{self.pattern}: {self.text}"
        return self.text


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    mnemonics: list[MnemonicEntry] = Field(default_factory=list)

    # Call metadata
    model: str | None = None
    truncated: bool = False
    fallback: bool = False
    error: ErrorInfo | None = None

    def to_payload(self) -> dict:
        """
        Shape consumed by the web layer: {aiSummary, mnemonics: [{text, pattern?, description?}]}.
        """
        return {
            "aiSummary": self.summary,
            "mnemonics": [m.model_dump(exclude_none=True) for m in self.mnemonics],
        }
