"""Factory for creating LLM providers and model invokers."""

from typing import Dict, Optional

from config import Settings, settings as default_settings

from .base import LLMProvider
from .invoker import LLMModelInvoker
from .litellm_provider import LiteLLMProvider, MODEL_ALIASES, to_litellm_model


def get_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    config: Optional[Settings] = None,
) -> LLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: Explicit provider name (anthropic, openai, gemini, deepseek)
        model: Model name - resolved through the alias table when given
        config: Settings; `default_model` is used when neither argument is given

    Returns:
        LLMProvider instance

    Examples:
        get_provider("gemini")          # gemini/gemini-2.0-flash
        get_provider(model="gpt-4o")    # gpt-4o
        get_provider()                  # settings.default_model
    """
    config = config or default_settings
    if provider_name or model:
        default_model = to_litellm_model(provider_name, model)
    else:
        default_model = config.default_model
    return LiteLLMProvider(default_model=default_model, num_retries=config.api_max_retries)


def get_invoker(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    config: Optional[Settings] = None,
) -> LLMModelInvoker:
    """Build the model invoker the flow executor talks to."""
    config = config or default_settings
    return LLMModelInvoker(get_provider(provider_name, model, config), config)


def list_providers() -> Dict[str, str]:
    """Map each known provider to its default LiteLLM model string."""
    return {name: aliases[None] for name, aliases in MODEL_ALIASES.items()}
