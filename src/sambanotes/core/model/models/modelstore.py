"""
Our list of API models is in models.json, in our repo, as is the list of aliases.
Both are read once, at process start, into a CapabilityTable; nothing mutates it afterwards.

models.json is keyed by provider family:
    {"anthropic": [{"model": ..., "max_document_chars": ..., ...}], ...}
aliases.json maps the symbolic names used by the web app (O1, SONNET, ...) to model ids.
"""

from __future__ import annotations
from sambanotes.core.model.models.capability import ModelCapability
from sambanotes.core.model.models.provider import ProviderFamily
from sambanotes.domain.exceptions.exceptions import InvalidRequest
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing_extensions import override
import json
import logging

logger = logging.getLogger(__name__)

# Our data stores
DIR_PATH = Path(__file__).parent
MODELS_PATH = DIR_PATH / "models.json"
ALIASES_PATH = DIR_PATH / "aliases.json"


class CapabilityTable(Mapping[str, ModelCapability]):
    """
    Immutable mapping of model id -> ModelCapability, with alias resolution.
    """

    def __init__(
        self,
        capabilities: Mapping[str, ModelCapability],
        aliases: Mapping[str, str] | None = None,
    ):
        self._capabilities: Mapping[str, ModelCapability] = MappingProxyType(
            dict(capabilities)
        )
        aliases = dict(aliases or {})
        for alias, model in aliases.items():
            if model not in self._capabilities:
                raise ValueError(f"Alias {alias!r} points to unknown model {model!r}")
        self._aliases: Mapping[str, str] = MappingProxyType(aliases)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve(self, model: str) -> ModelCapability:
        """
        Resolve an alias or model id to its capability descriptor.
        Raises InvalidRequest for anything unknown.
        """
        model_id = self._aliases.get(model, model)
        try:
            return self._capabilities[model_id]
        except KeyError:
            raise InvalidRequest(
                f"Unsupported model identifier: {model!r}. "
                f"Known models: {', '.join(sorted(self._capabilities))}; "
                f"aliases: {', '.join(sorted(self._aliases))}."
            ) from None

    def by_family(self, family: ProviderFamily) -> list[ModelCapability]:
        return [c for c in self._capabilities.values() if c.family is family]

    @override
    def __getitem__(self, model: str) -> ModelCapability:
        return self._capabilities[model]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._capabilities)

    @override
    def __len__(self) -> int:
        return len(self._capabilities)

    @override
    def __repr__(self) -> str:
        return f"CapabilityTable(models={list(self._capabilities)!r}, aliases={len(self._aliases)})"


class ModelStore:
    """
    Loads the packaged model and alias data.
    """

    @classmethod
    def models(cls, path: Path = MODELS_PATH) -> dict[str, list[dict]]:
        """
        Raw contents of models.json, keyed by provider family.
        """
        with open(path) as f:
            return json.load(f)

    @classmethod
    def aliases(cls, path: Path = ALIASES_PATH) -> dict[str, str]:
        """Definitive list of model aliases."""
        with open(path) as f:
            return json.load(f)

    @classmethod
    def list_models(cls) -> list[str]:
        return [spec["model"] for specs in cls.models().values() for spec in specs]

    @classmethod
    def list_providers(cls) -> list[str]:
        return [family.value for family in ProviderFamily]

    @classmethod
    def load(
        cls, models_path: Path = MODELS_PATH, aliases_path: Path = ALIASES_PATH
    ) -> CapabilityTable:
        """
        Build the CapabilityTable. Unknown family keys in models.json are a configuration
        error and raise ValueError.
        """
        capabilities: dict[str, ModelCapability] = {}
        for family_name, specs in cls.models(models_path).items():
            family = ProviderFamily(family_name)
            for spec in specs:
                capability = ModelCapability(family=family, **spec)
                if capability.model in capabilities:
                    logger.warning(
                        f"Duplicate model {capability.model} in {models_path}; keeping the last entry."
                    )
                capabilities[capability.model] = capability
        table = CapabilityTable(capabilities, cls.aliases(aliases_path))
        logger.debug(f"Loaded {len(table)} model capabilities from {models_path}")
        return table
