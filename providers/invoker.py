"""Model invoker backed by an LLMProvider.

Frames the rendered prompt with the JSON Schema of the flow's output, makes
one bounded-time call, and turns the reply into a candidate mapping. Every
failure is classified as a ModelError; nothing is retried here.
"""

import json
from typing import Any, Dict, Optional

import structlog

from config import Settings, settings as default_settings
from contracts.flow import ModelConfig
from contracts.schema import FieldSchema
from engine.errors import ModelError, ModelErrorKind

from .base import LLMProvider, ModelInvoker

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT = """You are Meme Prophet, an AI analyst for meme coins and the wider crypto market.
Follow the user's instructions exactly and answer only with data.

# OUTPUT FORMAT
You MUST respond with a single valid JSON object matching this schema:

```json
{schema}
```
"""

CONTENT_FILTER_FINISH_REASONS = {"content_filter", "content_filtered", "safety"}


def extract_json(response_text: str) -> Any:
    """Parse the JSON payload of a model reply, tolerating markdown fences.

    Raises:
        json.JSONDecodeError: If the reply isn't valid JSON
    """
    text = response_text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        if "```" not in text:
            raise

    # Handle markdown code blocks; an unclosed fence runs to the end
    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3
    end = text.find("```", start)
    if end == -1:
        end = len(text)
    return json.loads(text[start:end].strip())


class LLMModelInvoker(ModelInvoker):
    """ModelInvoker over any LLMProvider."""

    def __init__(self, provider: LLMProvider, config: Optional[Settings] = None):
        """Initialize the invoker.

        Args:
            provider: Provider that performs the actual completion call
            config: Settings for default temperature, token and timeout limits
        """
        self.provider = provider
        self.config = config or default_settings

    def build_system_prompt(self, output_schema: FieldSchema) -> str:
        """System prompt carrying the output schema as JSON Schema."""
        return SYSTEM_PROMPT.format(schema=json.dumps(output_schema.to_json_schema(), indent=2))

    def invoke(
        self,
        prompt_text: str,
        output_schema: FieldSchema,
        model_config: Optional[ModelConfig] = None,
    ) -> Dict[str, Any]:
        """Send the prompt and return the model's candidate object.

        Args:
            prompt_text: Rendered prompt
            output_schema: Schema the reply should match
            model_config: Per-flow overrides (model, temperature, tokens, timeout)

        Returns:
            Parsed JSON object from the reply (not yet validated)

        Raises:
            ModelError: timeout, provider-error, content-filtered or malformed
        """
        import litellm

        model_config = model_config or ModelConfig()
        temperature = (
            model_config.temperature
            if model_config.temperature is not None
            else self.config.temperature
        )
        timeout = model_config.timeout_seconds or self.config.api_timeout_seconds

        try:
            response = self.provider.complete(
                system_prompt=self.build_system_prompt(output_schema),
                user_message=prompt_text,
                model=model_config.model,
                max_tokens=model_config.max_tokens or self.config.max_tokens,
                temperature=temperature,
                timeout=timeout,
            )
        except (litellm.Timeout, TimeoutError) as e:
            logger.warning("model_call_timeout", timeout=timeout)
            raise ModelError(ModelErrorKind.TIMEOUT, f"no reply within {timeout:g}s: {e}") from e
        except litellm.ContentPolicyViolationError as e:
            raise ModelError(ModelErrorKind.CONTENT_FILTERED, str(e)) from e
        except Exception as e:
            logger.warning("model_call_failed", error=str(e), error_type=type(e).__name__)
            raise ModelError(ModelErrorKind.PROVIDER_ERROR, f"{type(e).__name__}: {e}") from e

        logger.info(
            "model_call_finished",
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            cost=response.cost,
        )

        if (response.finish_reason or "").lower() in CONTENT_FILTER_FINISH_REASONS:
            raise ModelError(
                ModelErrorKind.CONTENT_FILTERED,
                f"reply stopped by content filter ({response.finish_reason})",
            )

        try:
            candidate = extract_json(response.content)
        except json.JSONDecodeError as e:
            raise ModelError(ModelErrorKind.MALFORMED, f"reply is not valid JSON: {e}") from e

        if not isinstance(candidate, dict):
            raise ModelError(
                ModelErrorKind.MALFORMED,
                f"expected a JSON object, got {type(candidate).__name__}",
            )
        return candidate
