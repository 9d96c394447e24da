"""Flow definition and execution engine."""

from .errors import (
    Cancelled,
    DuplicateFlowError,
    FeatureLocked,
    FieldValidationError,
    FlowError,
    InvalidInput,
    MalformedResponse,
    ModelError,
    ModelErrorKind,
    TemplateError,
    UnknownFeature,
    UnknownFlowError,
    UpstreamFailure,
    ValidationReason,
)
from .normalizer import ResponseNormalizer, normalize
from .registry import SchemaRegistry
from .renderer import PromptRenderer
from .executor import FlowExecutor, FlowOutcome, FlowRequest, Stage

__all__ = [
    # Errors
    "FlowError",
    "InvalidInput",
    "TemplateError",
    "UpstreamFailure",
    "MalformedResponse",
    "UnknownFlowError",
    "UnknownFeature",
    "DuplicateFlowError",
    "FeatureLocked",
    "Cancelled",
    "FieldValidationError",
    "ValidationReason",
    "ModelError",
    "ModelErrorKind",
    # Components
    "SchemaRegistry",
    "PromptRenderer",
    "ResponseNormalizer",
    "normalize",
    # Executor
    "FlowExecutor",
    "FlowRequest",
    "FlowOutcome",
    "Stage",
]
