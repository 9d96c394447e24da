"""Base LLM provider and model invoker interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from contracts.flow import ModelConfig
from contracts.schema import FieldSchema


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""
    content: str
    input_tokens: int
    output_tokens: int
    model: str
    provider: str
    cost: float = 0.0
    finish_reason: Optional[str] = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default model for this provider."""
        pass

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> LLMResponse:
        """Generate a completion.

        Args:
            system_prompt: System/instruction prompt
            user_message: User message/query
            model: Model to use (defaults to provider's default)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature (provider default if None)
            timeout: Seconds before the call is abandoned

        Returns:
            LLMResponse with content and token counts
        """
        pass


class ModelInvoker(ABC):
    """Boundary to the external generative model.

    Given the rendered prompt and the output schema, returns a structured
    candidate (possibly only partially conforming) or raises ModelError.
    """

    @abstractmethod
    def invoke(
        self,
        prompt_text: str,
        output_schema: FieldSchema,
        model_config: Optional[ModelConfig] = None,
    ) -> Dict[str, Any]:
        pass
