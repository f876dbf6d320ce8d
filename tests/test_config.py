import pytest

from sambanotes.config import load_settings
from sambanotes.core.clients.anthropic.client import AnthropicClient
from sambanotes.core.model.models.provider import ProviderFamily

ENV_VARS = ("SAMBANOTES_PREFERRED_MODEL", "SAMBANOTES_TRUNCATE", "SAMBANOTES_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_settings_file(tmp_path):
    settings = load_settings(tmp_path / "missing.toml")

    assert settings.preferred_model == "GPT_4O"
    assert settings.truncate_oversize is False
    assert settings.log_level == "w"
    assert settings.paths["SETTINGS_TOML_PATH"] == tmp_path / "missing.toml"
    sampling = settings.default_sampling()
    assert (sampling.temperature, sampling.top_p) == (0.1, 0.7)


def test_settings_file_overrides_defaults(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        "[settings]\n"
        'preferred_model = "SONNET"\n'
        "truncate_oversize = true\n"
        "temperature = 0.3\n"
    )

    settings = load_settings(path)

    assert settings.preferred_model == "SONNET"
    assert settings.truncate_oversize is True
    assert settings.default_sampling().temperature == 0.3
    assert settings.default_sampling().top_p == 0.7


def test_environment_overrides_settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.toml"
    path.write_text('[settings]\npreferred_model = "SONNET"\n')
    monkeypatch.setenv("SAMBANOTES_PREFERRED_MODEL", "O1")
    monkeypatch.setenv("SAMBANOTES_TRUNCATE", "yes")
    monkeypatch.setenv("SAMBANOTES_LOG_LEVEL", "DEBUG")

    settings = load_settings(path)

    assert settings.preferred_model == "O1"
    assert settings.truncate_oversize is True
    assert settings.log_level == "d"


def test_default_analyzer_options(tmp_path):
    options = load_settings(tmp_path / "missing.toml").default_analyzer_options()

    assert set(options.clients) == set(ProviderFamily)
    assert isinstance(options.client_for(ProviderFamily.ANTHROPIC), AnthropicClient)
    assert "gpt-4o" in options.capabilities
    assert options.default_sampling.temperature == 0.1
    assert options.truncate_oversize is False
    assert options.strict_sampling is False
