"""LLM provider abstraction and the model invoker boundary."""

from .base import LLMProvider, LLMResponse, ModelInvoker
from .factory import get_invoker, get_provider, list_providers
from .invoker import LLMModelInvoker

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "ModelInvoker",
    "LLMModelInvoker",
    "get_provider",
    "get_invoker",
    "list_providers",
]
