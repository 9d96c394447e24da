"""Flow definition contracts."""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from contracts.schema import FieldKind, FieldSchema


class ModelConfig(BaseModel):
    """Per-flow overrides for the model call. Unset values fall back to settings."""
    model_config = ConfigDict(frozen=True)

    model: Optional[str] = Field(None, description="LiteLLM model string, e.g. gpt-4o or gemini/gemini-2.0-flash")
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: Optional[int] = Field(None, gt=0, description="Maximum tokens in the reply")
    timeout_seconds: Optional[float] = Field(None, gt=0.0, description="Timeout for the model call")


@dataclass(frozen=True)
class FlowDefinition:
    """One named operation: typed input, opaque prompt, typed output.

    Immutable once registered; lives for the lifetime of the process.
    """
    name: str
    input_schema: FieldSchema
    output_schema: FieldSchema
    prompt_template: str
    model_config: ModelConfig = field(default_factory=ModelConfig)
    feature: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("flow name must be a non-empty string")
        for label, schema in (("input", self.input_schema), ("output", self.output_schema)):
            if schema.kind != FieldKind.OBJECT:
                raise ValueError(
                    f"{self.name}: {label} schema must be an object, got {schema.kind.value}"
                )
