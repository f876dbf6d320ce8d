"""
Prompt class -- wraps a jinja2 template string and renders it with strict variables.
"""

from __future__ import annotations
from jinja2 import Environment, StrictUndefined, Template, meta
from typing_extensions import override
import logging

logger = logging.getLogger(__name__)

# Throw on undefined variables rather than rendering them as empty strings.
env = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)


class Prompt:
    """
    Takes a jinja2 ready string (note: not an actual Template object; that's created by the class).
    """

    def __init__(self, prompt_string: str):
        self.prompt_string: str = prompt_string
        self.template: Template = env.from_string(prompt_string)
        self.input_schema: set[str] = self._get_input_schema()

    def _get_input_schema(self) -> set[str]:
        """
        Variable names referenced by the template.
        """
        parsed_content = env.parse(self.prompt_string)
        return meta.find_undeclared_variables(parsed_content)

    def render(self, input_variables: dict[str, object] | None = None) -> str:
        input_variables = input_variables or {}
        missing = self.input_schema - input_variables.keys()
        if missing:
            raise ValueError(f"Missing prompt variables: {', '.join(sorted(missing))}")
        return self.template.render(**input_variables).strip()

    @override
    def __repr__(self) -> str:
        return f"Prompt(variables={sorted(self.input_schema)!r}, prompt_string={self.prompt_string[:40]!r})"
