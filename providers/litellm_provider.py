"""LiteLLM-backed provider. Single implementation for all model calls."""

from typing import Optional

import structlog

from .base import LLMProvider, LLMResponse

logger = structlog.get_logger(__name__)


# Map provider + optional model -> LiteLLM model string (OpenAI can omit the prefix);
# the None entry is the provider default
MODEL_ALIASES = {
    "anthropic": {
        None: "anthropic/claude-sonnet-4-20250514",
        "claude-sonnet": "anthropic/claude-sonnet-4-20250514",
        "claude-haiku": "anthropic/claude-3-5-haiku-20241022",
    },
    "openai": {
        None: "gpt-4o-mini",
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
    },
    "gemini": {
        None: "gemini/gemini-2.0-flash",
        "gemini-2.0-flash": "gemini/gemini-2.0-flash",
        "gemini-2.5-flash": "gemini/gemini-2.5-flash",
        "gemini-2.5-pro": "gemini/gemini-2.5-pro",
    },
    "deepseek": {
        None: "deepseek/deepseek-chat",
        "deepseek-chat": "deepseek/deepseek-chat",
    },
}

_PROVIDER_SYNONYMS = {"claude": "anthropic", "gpt": "openai", "google": "gemini"}


def _match_alias(aliases: dict, model_lower: str) -> Optional[str]:
    # Prefer longest alias match first (e.g. gpt-4o-mini before gpt-4o)
    for alias in sorted((a for a in aliases if a), key=len, reverse=True):
        if model_lower == alias or model_lower.startswith(alias + "-") or model_lower.startswith(alias + "."):
            return aliases[alias]
    return None


def to_litellm_model(provider_name: Optional[str], model: Optional[str]) -> str:
    """Map provider + model to a LiteLLM model string."""
    if provider_name:
        key = provider_name.lower()
        key = _PROVIDER_SYNONYMS.get(key, key)
        if key not in MODEL_ALIASES:
            raise ValueError(
                f"Unknown provider: {provider_name}. Available: {list(MODEL_ALIASES)}"
            )
        aliases = MODEL_ALIASES[key]
        if not model:
            return aliases[None]
        matched = _match_alias(aliases, model.lower())
        if matched:
            return matched
        # no alias match: OpenAI works without a prefix, the rest need one
        return model if key == "openai" else f"{key}/{model}"
    if model:
        model_lower = model.lower()
        for aliases in MODEL_ALIASES.values():
            matched = _match_alias(aliases, model_lower)
            if matched:
                return matched
        return model
    return MODEL_ALIASES["openai"][None]


class LiteLLMProvider(LLMProvider):
    """Single provider that delegates to litellm.completion()."""

    def __init__(
        self,
        default_model: str,
        json_mode: bool = True,
        num_retries: int = 0,
    ):
        """Initialize with the LiteLLM model string to use by default.

        Args:
            default_model: LiteLLM model string (e.g. gpt-4o-mini, anthropic/claude-sonnet-4-20250514).
            json_mode: Ask for a JSON object reply where the model supports it.
            num_retries: Retries performed by litellm itself on transient errors.
        """
        self._default_model = default_model
        self._json_mode = json_mode
        self._num_retries = num_retries

    @property
    def name(self) -> str:
        return "litellm"

    @property
    def default_model(self) -> str:
        return self._default_model

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> LLMResponse:
        import litellm

        resolved_model = model or self._default_model
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        kwargs = {
            "model": resolved_model,
            "messages": messages,
            "max_tokens": max_tokens,
            "num_retries": self._num_retries,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if timeout is not None:
            kwargs["timeout"] = timeout
        if self._json_mode:
            kwargs["response_format"] = {"type": "json_object"}
            kwargs["drop_params"] = True  # models without JSON mode just ignore it

        response = litellm.completion(**kwargs)

        choice = response.choices[0]
        content = choice.message.content or ""
        finish_reason = getattr(choice, "finish_reason", None)
        usage = getattr(response, "usage", None)
        input_tokens = getattr(usage, "prompt_tokens", 0) or 0
        output_tokens = getattr(usage, "completion_tokens", 0) or 0
        hidden = getattr(response, "_hidden_params", None) or {}
        cost = float(hidden.get("response_cost", 0) or 0)
        model_id = getattr(response, "model", None) or resolved_model

        logger.debug(
            "completion_finished",
            model=model_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=cost,
            finish_reason=finish_reason,
        )

        return LLMResponse(
            content=content,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model_id,
            provider=self.name,
            cost=cost,
            finish_reason=finish_reason,
        )
