"""
Response Normalizer: provider envelope -> plain text -> AnalysisResult.

Text extraction:
1. a string envelope is used as-is
2. a sequence of content blocks contributes the text of its text-typed blocks, in order
3. anything else is serialized as a debug string

Structured extraction runs an ordered list of locator strategies over the text. Each
strategy returns a candidate JSON span or None; the first candidate wins and is parsed.
A missing candidate or a parse failure is not an error: the whole text becomes the summary
and the mnemonic list is empty. Free-form model output is expected, not exceptional.

Everything here is pure; the same envelope always gives the same result.
"""

from __future__ import annotations
from sambanotes.domain.result.analysis_result import AnalysisResult, MnemonicEntry
from collections.abc import Callable, Sequence
from pydantic import BaseModel
from typing import Any
import json
import logging
import re

logger = logging.getLogger(__name__)

LocatorStrategy = Callable[[str], str | None]

# Optional language tag, optional newline, lazy interior up to the closing fence
FENCED_BLOCK_PATTERN = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\n?(.*?)```", re.DOTALL)


# Text extraction
def _block_field(block: Any, name: str) -> Any:
    if isinstance(block, dict):
        return block.get(name)
    return getattr(block, name, None)


def extract_text(envelope: Any) -> str:
    if envelope is None:
        return ""
    if isinstance(envelope, str):
        return envelope
    if isinstance(envelope, (list, tuple)):
        parts = []
        for block in envelope:
            if _block_field(block, "type") != "text":
                continue
            text = _block_field(block, "text")
            if isinstance(text, str):
                parts.append(text)
        return "".join(parts)
    # Last resort: unrecognized shape
    if isinstance(envelope, BaseModel):
        return envelope.model_dump_json()
    try:
        return json.dumps(envelope, default=str)
    except (TypeError, ValueError):
        return repr(envelope)


# Locator strategies
def from_fenced_block(text: str) -> str | None:
    """
    Interior of the first ``` fenced block that looks like JSON.
    """
    for match in FENCED_BLOCK_PATTERN.finditer(text):
        interior = match.group(1).strip()
        if interior.startswith(("{", "[")):
            return interior
    return None


def _span(text: str, opening: str, closing: str) -> str | None:
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def from_brace_span(text: str) -> str | None:
    """
    Slice from the first '{' to the last '}'.
    """
    return _span(text, "{", "}")


def from_bracket_span(text: str) -> str | None:
    """
    Slice from the first '[' to the last ']'; for responses that are a bare JSON array.
    """
    return _span(text, "[", "]")


DEFAULT_STRATEGIES: tuple[LocatorStrategy, ...] = (from_fenced_block, from_brace_span)
MNEMONIC_LIST_STRATEGIES: tuple[LocatorStrategy, ...] = (
    from_fenced_block,
    from_bracket_span,
)


def locate_json(
    text: str, strategies: Sequence[LocatorStrategy] = DEFAULT_STRATEGIES
) -> str | None:
    for strategy in strategies:
        candidate = strategy(text)
        if candidate is not None:
            return candidate
    return None


# Interpretation
def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_mnemonics(items: Any) -> list[MnemonicEntry]:
    """
    Map a JSON array to MnemonicEntry objects. Strings become {text}; objects read
    `mnemonic` (or `text`), and pass `pattern` / `description` through. Unusable items are skipped.
    """
    if not isinstance(items, list):
        return []
    entries = []
    for item in items:
        if isinstance(item, str):
            text = item.strip()
            if text:
                entries.append(MnemonicEntry(text=text))
        elif isinstance(item, dict):
            text = item.get("mnemonic") or item.get("text")
            if not isinstance(text, str) or not text.strip():
                continue
            entries.append(
                MnemonicEntry(
                    text=text.strip(),
                    pattern=_optional_str(item.get("pattern")),
                    description=_optional_str(item.get("description")),
                )
            )
    return entries


def interpret(data: Any, text: str) -> AnalysisResult:
    match data:
        case dict():
            summary = data.get("summary")
            if not isinstance(summary, str):
                summary = data.get("analysis")
            if not isinstance(summary, str):
                summary = text
            return AnalysisResult(
                summary=summary, mnemonics=parse_mnemonics(data.get("mnemonics"))
            )
        case list():
            return AnalysisResult(summary=text, mnemonics=parse_mnemonics(data))
        case _:
            return AnalysisResult(summary=text)


def normalize(
    envelope: Any, strategies: Sequence[LocatorStrategy] = DEFAULT_STRATEGIES
) -> AnalysisResult:
    text = extract_text(envelope)
    candidate = locate_json(text, strategies)
    if candidate is None:
        return AnalysisResult(summary=text)
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Response JSON did not parse ({e}); using full text as summary.")
        return AnalysisResult(summary=text)
    return interpret(data, text)
