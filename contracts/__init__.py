"""Pydantic contracts for the flow engine.

Schemas, flow definitions and tier rules are all declared through these.
"""

from .schema import (
    FieldKind,
    TimestampFormat,
    FieldSchema,
    string,
    number,
    integer,
    boolean,
    enum,
    array,
    obj,
    timestamp,
)

from .flow import (
    ModelConfig,
    FlowDefinition,
)

from .tier_contracts import (
    Tier,
    AccessRule,
)

__all__ = [
    # Schema
    "FieldKind",
    "TimestampFormat",
    "FieldSchema",
    "string",
    "number",
    "integer",
    "boolean",
    "enum",
    "array",
    "obj",
    "timestamp",
    # Flow
    "ModelConfig",
    "FlowDefinition",
    # Tiers
    "Tier",
    "AccessRule",
]
