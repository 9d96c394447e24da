"""Prompt renderer: substitutes a validated input record into a template.

Templates are Jinja2 text. Placeholders that reference an absent field render
as an empty string (including attribute chains on absent fields), lists render
as comma-separated values, and `{% if field %}` sections let a template branch
on optional input.
"""

from typing import Any, Dict, Mapping

from jinja2 import ChainableUndefined, Environment, Template


def _finalize(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return value


class PromptRenderer:
    """Renders prompt templates. Deterministic and side-effect free."""

    def __init__(self):
        self._env = Environment(
            undefined=ChainableUndefined,
            autoescape=False,
            finalize=_finalize,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._compiled: Dict[str, Template] = {}

    def _compile(self, prompt_template: str) -> Template:
        template = self._compiled.get(prompt_template)
        if template is None:
            template = self._env.from_string(prompt_template)
            self._compiled[prompt_template] = template
        return template

    def render(self, prompt_template: str, validated_input: Mapping[str, Any]) -> str:
        """Render the exact prompt text sent to the model.

        Args:
            prompt_template: Jinja2 template text
            validated_input: Input record already validated against the flow's schema

        Returns:
            Rendered prompt text

        Raises:
            jinja2.TemplateError: If the template itself is broken
        """
        return self._compile(prompt_template).render(dict(validated_input))
