"""Runtime-walkable schema declarations for flow inputs and outputs.

A FieldSchema is plain data: the normalizer walks it field by field, the
model invoker renders it as JSON Schema, and flow modules build it with the
small helpers at the bottom of this file.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    """Kind of value a schema node accepts."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"


class TimestampFormat(str, Enum):
    """Rendering of a generated-at timestamp."""
    ISO = "iso"  # 2025-05-16T10:30:00.000Z
    DATE = "date"  # 2025-05-16


class FieldSchema(BaseModel):
    """A node in a schema tree.

    `required=False` without a default means "absent is valid, stays absent";
    `required=False` with a default means "absent is backfilled".
    """
    model_config = ConfigDict(frozen=True)

    kind: FieldKind = Field(..., description="Kind of value accepted")
    required: bool = Field(default=True, description="Whether the field must be present")
    default: Any = Field(default=None, description="Backfill value for an absent optional field")
    description: str = Field(default="", description="Documentation only, never enforced")

    # enum
    values: Optional[Tuple[str, ...]] = Field(None, description="Allowed values for enum kind")
    # array
    items: Optional["FieldSchema"] = Field(None, description="Schema of each array element")
    min_items: Optional[int] = Field(None, ge=0)
    max_items: Optional[int] = Field(None, ge=0)
    # object
    properties: Optional[Dict[str, "FieldSchema"]] = Field(None, description="Named sub-fields for object kind")
    # number
    integer: bool = Field(default=False, description="Only whole numbers are accepted")
    minimum: Optional[float] = Field(None, description="Inclusive lower bound")
    maximum: Optional[float] = Field(None, description="Inclusive upper bound")
    # string
    generated_at: bool = Field(
        default=False,
        description="Generated-at timestamp, always overwritten with the current time",
    )
    timestamp_format: TimestampFormat = Field(default=TimestampFormat.ISO)

    @model_validator(mode="after")
    def _check_declaration(self) -> "FieldSchema":
        if self.default is not None and self.required:
            raise ValueError("a field with a default value cannot be required")
        if self.kind == FieldKind.ENUM and not self.values:
            raise ValueError("enum fields need at least one allowed value")
        if self.kind == FieldKind.ARRAY and self.items is None:
            raise ValueError("array fields need an item schema")
        if self.kind == FieldKind.OBJECT and self.properties is None:
            raise ValueError("object fields need a properties mapping")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"minimum {self.minimum} exceeds maximum {self.maximum}")
        if (
            self.min_items is not None
            and self.max_items is not None
            and self.min_items > self.max_items
        ):
            raise ValueError(f"min_items {self.min_items} exceeds max_items {self.max_items}")
        if self.generated_at and self.kind != FieldKind.STRING:
            raise ValueError("generated-at timestamps must be string fields")
        return self

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def required_fields(self) -> List[str]:
        """Names of required sub-fields of an object schema."""
        if not self.properties:
            return []
        return [name for name, field in self.properties.items() if field.required]

    def to_json_schema(self) -> Dict[str, Any]:
        """Render this node as a JSON Schema fragment.

        Returns:
            Dict suitable for embedding in a model prompt or a structured-output request
        """
        if self.kind == FieldKind.ENUM:
            result: Dict[str, Any] = {"type": "string", "enum": list(self.values)}
        elif self.kind == FieldKind.NUMBER:
            result = {"type": "integer" if self.integer else "number"}
            if self.minimum is not None:
                result["minimum"] = self.minimum
            if self.maximum is not None:
                result["maximum"] = self.maximum
        elif self.kind == FieldKind.ARRAY:
            result = {"type": "array", "items": self.items.to_json_schema()}
            if self.min_items is not None:
                result["minItems"] = self.min_items
            if self.max_items is not None:
                result["maxItems"] = self.max_items
        elif self.kind == FieldKind.OBJECT:
            result = {
                "type": "object",
                "properties": {
                    name: field.to_json_schema() for name, field in self.properties.items()
                },
            }
            required = self.required_fields()
            if required:
                result["required"] = required
        else:
            result = {"type": self.kind.value}
            if self.generated_at:
                result["format"] = (
                    "date" if self.timestamp_format == TimestampFormat.DATE else "date-time"
                )

        if self.description:
            result["description"] = self.description
        if self.has_default:
            result["default"] = self.default
        return result


FieldSchema.model_rebuild()


def _required(required: Optional[bool], default: Any) -> bool:
    if required is None:
        return default is None
    return required


def string(
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[str] = None,
) -> FieldSchema:
    """Declare a string field."""
    return FieldSchema(
        kind=FieldKind.STRING,
        required=_required(required, default),
        default=default,
        description=description,
    )


def number(
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[float] = None,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> FieldSchema:
    """Declare a number field with optional inclusive bounds."""
    return FieldSchema(
        kind=FieldKind.NUMBER,
        required=_required(required, default),
        default=default,
        description=description,
        minimum=minimum,
        maximum=maximum,
    )


def integer(
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> FieldSchema:
    """Declare a whole-number field with optional inclusive bounds."""
    return FieldSchema(
        kind=FieldKind.NUMBER,
        integer=True,
        required=_required(required, default),
        default=default,
        description=description,
        minimum=minimum,
        maximum=maximum,
    )


def boolean(
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[bool] = None,
) -> FieldSchema:
    """Declare a boolean field."""
    return FieldSchema(
        kind=FieldKind.BOOLEAN,
        required=_required(required, default),
        default=default,
        description=description,
    )


def enum(
    values: List[str],
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[str] = None,
) -> FieldSchema:
    """Declare a field restricted to a closed set of string values."""
    return FieldSchema(
        kind=FieldKind.ENUM,
        values=tuple(values),
        required=_required(required, default),
        default=default,
        description=description,
    )


def array(
    items: FieldSchema,
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[list] = None,
    min_items: Optional[int] = None,
    max_items: Optional[int] = None,
) -> FieldSchema:
    """Declare a list field whose elements follow `items`."""
    return FieldSchema(
        kind=FieldKind.ARRAY,
        items=items,
        required=_required(required, default),
        default=default,
        description=description,
        min_items=min_items,
        max_items=max_items,
    )


def obj(
    properties: Dict[str, FieldSchema],
    description: str = "",
    required: Optional[bool] = None,
    default: Optional[dict] = None,
) -> FieldSchema:
    """Declare a nested record."""
    return FieldSchema(
        kind=FieldKind.OBJECT,
        properties=properties,
        required=_required(required, default),
        default=default,
        description=description,
    )


def timestamp(
    description: str = "",
    fmt: TimestampFormat = TimestampFormat.ISO,
) -> FieldSchema:
    """Declare a generated-at timestamp, stamped at normalization time."""
    return FieldSchema(
        kind=FieldKind.STRING,
        generated_at=True,
        timestamp_format=fmt,
        description=description,
    )
