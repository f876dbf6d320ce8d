from tests.factories import SAMPLE_NOTATION
from sambanotes.core.notation.notation import extract_notation, extract_patterns


def test_extract_notation():
    text = SAMPLE_NOTATION + "Everyone plays the solo\n"
    data = extract_notation(text)

    assert data.patterns == ["X-X-o-o-", "xxXx", "xxXx"]
    assert data.instruments == ["surdo", "caixa"]
    assert data.breaks == ["Break: stop on 4", "Everyone plays the solo"]
    assert data.text == text


def test_letters_inside_words_are_not_patterns():
    assert extract_patterns("solo, stop, Surdo, chocalho, agogo") == []


def test_dash_only_runs_are_ignored():
    assert extract_patterns("|----|x-x-|") == ["x-x-"]


def test_empty_text():
    data = extract_notation("")
    assert data.patterns == []
    assert data.instruments == []
    assert data.breaks == []
