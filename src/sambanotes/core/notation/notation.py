"""
Lightweight extraction from plain-text samba notation (no model call involved).
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
import re

# Runs of hits (x/X), rests (o/O) and holds (-); letters on either side mean it is part of a word
PATTERN_REGEX = re.compile(r"(?<![A-Za-z])[xXoO-]{2,}(?![A-Za-z])")
BREAK_REGEX = re.compile(r"break|parada|stop|solo", re.IGNORECASE)
INSTRUMENTS = (
    "surdo",
    "caixa",
    "repinique",
    "tamborim",
    "agogo",
    "cuica",
    "ganza",
    "chocalho",
)


class NotationData(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    patterns: list[str] = Field(default_factory=list)
    instruments: list[str] = Field(default_factory=list)
    breaks: list[str] = Field(default_factory=list)


def extract_patterns(text: str) -> list[str]:
    return [p for p in PATTERN_REGEX.findall(text) if p.strip("-")]


def extract_instruments(text: str) -> list[str]:
    lowered = text.lower()
    return [instrument for instrument in INSTRUMENTS if instrument in lowered]


def extract_breaks(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if BREAK_REGEX.search(line)]


def extract_notation(text: str) -> NotationData:
    return NotationData(
        text=text,
        patterns=extract_patterns(text),
        instruments=extract_instruments(text),
        breaks=extract_breaks(text),
    )
