"""Error taxonomy for flow registration, execution and gating.

Component-level errors (FieldValidationError, ModelError) describe what went
wrong inside one step; FlowError subclasses classify the failure of a whole
invocation and carry the stage it stopped in.
"""

from enum import Enum
from typing import Optional


class ValidationReason(str, Enum):
    """Why a value failed schema validation."""
    MISSING = "missing"
    TYPE_MISMATCH = "type-mismatch"
    INVALID_ENUM = "invalid-enum"
    OUT_OF_RANGE = "out-of-range"
    INVALID_LENGTH = "invalid-length"


class FieldValidationError(Exception):
    """A single field failed validation against its schema."""

    def __init__(self, field: str, reason: ValidationReason, detail: str = ""):
        self.field = field
        self.reason = reason
        self.detail = detail
        message = f"{field}: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ModelErrorKind(str, Enum):
    """Failure modes of the external model call."""
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider-error"
    CONTENT_FILTERED = "content-filtered"
    MALFORMED = "malformed"


class ModelError(Exception):
    """The model boundary call failed or returned something unusable."""

    def __init__(self, kind: ModelErrorKind, message: str):
        self.kind = kind
        super().__init__(f"{kind.value}: {message}")


class FlowError(Exception):
    """Base class for every classified flow failure."""

    def __init__(self, message: str, flow_name: Optional[str] = None, stage=None):
        self.flow_name = flow_name
        self.stage = stage
        super().__init__(message)


class InvalidInput(FlowError):
    """Caller input failed the flow's input schema. The model was never called."""

    def __init__(self, flow_name: str, error: FieldValidationError, stage=None):
        self.error = error
        super().__init__(f"{flow_name}: invalid input, {error}", flow_name, stage)


class TemplateError(FlowError):
    """The prompt template could not be rendered."""


class UpstreamFailure(FlowError):
    """The model call failed; the ModelError is surfaced unmodified."""

    def __init__(self, flow_name: str, error: ModelError, stage=None):
        self.error = error
        self.kind = error.kind
        super().__init__(f"{flow_name}: upstream failure, {error}", flow_name, stage)


class MalformedResponse(FlowError):
    """The model reply failed the output schema even after default backfill."""

    def __init__(self, flow_name: str, error: FieldValidationError, stage=None):
        self.error = error
        super().__init__(f"{flow_name}: malformed response, {error}", flow_name, stage)


class UnknownFlowError(FlowError):
    """No flow is registered under the requested name."""

    def __init__(self, flow_name: str):
        super().__init__(f"Unknown flow: {flow_name}", flow_name)


class DuplicateFlowError(FlowError):
    """A flow with the same name is already registered."""

    def __init__(self, flow_name: str):
        super().__init__(f"Flow already registered: {flow_name}", flow_name)


class UnknownFeature(FlowError):
    """A feature id has no access rule."""

    def __init__(self, feature_id: str, flow_name: Optional[str] = None):
        self.feature_id = feature_id
        super().__init__(f"Unknown feature: {feature_id}", flow_name)


class FeatureLocked(FlowError):
    """The caller's tier does not unlock the flow's feature."""

    def __init__(self, flow_name: str, feature_id: str, tier, stage=None):
        self.feature_id = feature_id
        self.tier = tier
        super().__init__(
            f"{flow_name}: feature '{feature_id}' is locked for tier {tier.value}",
            flow_name,
            stage,
        )


class Cancelled(FlowError):
    """The caller abandoned the invocation."""

    def __init__(self, flow_name: str, stage=None):
        stage_name = stage.value if stage is not None else "start"
        super().__init__(f"{flow_name}: cancelled before {stage_name}", flow_name, stage)
