"""
Configuration hierarchy:
1. Explicit parameters to functions / methods
2. Environment variables (highest priority of the ambient sources)
3. settings.toml in the XDG config directory
4. Defaults (lowest priority)

None of the files are required.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from xdg_base_dirs import xdg_config_home
from typing import TYPE_CHECKING
import logging
import os
import sys
import tomllib

if TYPE_CHECKING:
    from sambanotes.domain.config.analyzer_options import AnalyzerOptions
    from sambanotes.domain.request.sampling_params import SamplingParams

logger = logging.getLogger(__name__)

# Directory
CONFIG_DIR = Path(xdg_config_home()) / "sambanotes"

# File path
SETTINGS_TOML_PATH = CONFIG_DIR / "settings.toml"

# Version
try:
    __version__ = version("sambanotes")
except PackageNotFoundError:
    __version__ = "unknown"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d (%(funcName)s) - %(message)s"
LOG_LEVELS = {"d": logging.DEBUG, "i": logging.INFO, "w": logging.WARNING}
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "anthropic")

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    preferred_model: str = "GPT_4O"
    truncate_oversize: bool = False
    strict_sampling: bool = False
    # The web app pinned these for chat completions
    default_temperature: float | None = 0.1
    default_top_p: float | None = 0.7
    log_level: str = "w"
    version: str = __version__
    paths: dict[str, Path] = field(default_factory=dict)

    def default_sampling(self) -> SamplingParams:
        from sambanotes.domain.request.sampling_params import SamplingParams

        return SamplingParams(
            temperature=self.default_temperature, top_p=self.default_top_p
        )

    def default_analyzer_options(self) -> AnalyzerOptions:
        """
        Assemble AnalyzerOptions from settings: packaged capability table, SDK clients.
        """
        from sambanotes.domain.config.analyzer_options import AnalyzerOptions

        return AnalyzerOptions.with_default_clients(
            truncate_oversize=self.truncate_oversize,
            strict_sampling=self.strict_sampling,
            default_sampling=self.default_sampling(),
        )


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE


def load_settings(settings_path: Path = SETTINGS_TOML_PATH) -> Settings:
    # Defaults (lowest priority)
    settings = Settings(
        paths={
            "CONFIG_DIR": CONFIG_DIR,
            "SETTINGS_TOML_PATH": settings_path,
        }
    )

    # Config file (medium priority)
    if settings_path.exists():
        with settings_path.open("rb") as f:
            toml_dict = tomllib.load(f).get("settings", {})
        settings.preferred_model = toml_dict.get("preferred_model", settings.preferred_model)
        settings.truncate_oversize = _parse_bool(
            toml_dict.get("truncate_oversize", settings.truncate_oversize)
        )
        settings.strict_sampling = _parse_bool(
            toml_dict.get("strict_sampling", settings.strict_sampling)
        )
        settings.default_temperature = toml_dict.get(
            "temperature", settings.default_temperature
        )
        settings.default_top_p = toml_dict.get("top_p", settings.default_top_p)
        settings.log_level = toml_dict.get("log_level", settings.log_level)
    else:
        logger.debug(f"No settings file at {settings_path}; using defaults.")

    # Environment variables (highest priority)
    if os.getenv("SAMBANOTES_PREFERRED_MODEL"):
        settings.preferred_model = os.environ["SAMBANOTES_PREFERRED_MODEL"]
    if os.getenv("SAMBANOTES_TRUNCATE"):
        settings.truncate_oversize = _parse_bool(os.environ["SAMBANOTES_TRUNCATE"])
    if os.getenv("SAMBANOTES_LOG_LEVEL"):
        settings.log_level = os.environ["SAMBANOTES_LOG_LEVEL"].lower()[:1]

    return settings


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger once. Library code never calls this; the CLI does.
    If logging is already configured (library usage), the existing setup is respected.
    """
    root = logging.getLogger()
    if root.handlers:
        logger.debug("Logging already configured, using existing setup")
        return

    logging.basicConfig(
        level=LOG_LEVELS.get((level or settings.log_level).lower()[:1], logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    # Silence noisy libraries
    for lib in NOISY_LOGGERS:
        logging.getLogger(lib).setLevel(logging.WARNING)


settings = load_settings()
