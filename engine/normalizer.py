"""Response normalizer: validates a candidate record against a schema tree.

The same walk validates caller input (before any model call) and model
output (after it). Rules, applied field by field:

1. required and absent or mistyped -> FieldValidationError, no partial result
2. optional, absent, with a default -> backfilled with a copy of the default
3. optional, absent, without a default -> left absent
4. enum value outside the declared set -> invalid-enum, never snapped
5. object and array kinds recurse; a failure at any depth fails the whole walk
6. numeric bounds and array lengths are checked, never clamped

Generated-at timestamps are the one field whose supplied value is ignored:
they are always stamped with the current UTC time.
"""

import copy
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import structlog

from contracts.schema import FieldKind, FieldSchema, TimestampFormat
from engine.errors import FieldValidationError, ValidationReason

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime, fmt: TimestampFormat) -> str:
    """Render a generated-at timestamp in UTC."""
    moment = moment.astimezone(timezone.utc)
    if fmt == TimestampFormat.DATE:
        return moment.date().isoformat()
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ResponseNormalizer:
    """Validates and normalizes records against FieldSchema trees.

    Stateless apart from the clock, so one instance can be shared across
    threads.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the normalizer.

        Args:
            clock: Returns the current time for generated-at fields (default: UTC now)
        """
        self._clock = clock or utc_now

    def normalize(self, candidate: Any, schema: FieldSchema) -> Dict[str, Any]:
        """Validate `candidate` against an object schema.

        Args:
            candidate: Raw record, usually parsed model JSON or caller input
            schema: Object-kind schema to validate against

        Returns:
            A new, fully normalized dict. The candidate is never mutated.

        Raises:
            FieldValidationError: On the first field that fails validation
        """
        return self._normalize_object(candidate, schema, "", self._clock())

    def validate_value(self, value: Any, schema: FieldSchema, path: str = "$") -> Any:
        """Validate a single present value against a node of any kind."""
        return self._normalize_value(value, schema, path, self._clock())

    def check_defaults(self, schema: FieldSchema, path: str = "") -> None:
        """Verify every declared default conforms to its own field schema.

        Raises:
            FieldValidationError: If a default does not fit its field
        """
        if schema.kind == FieldKind.ARRAY:
            self.check_defaults(schema.items, f"{path}[]")
            return
        if schema.kind != FieldKind.OBJECT:
            return
        for name, field in schema.properties.items():
            field_path = _join(path, name)
            if field.has_default:
                self.validate_value(field.default, field, field_path)
            self.check_defaults(field, field_path)

    def _normalize_object(
        self,
        value: Any,
        schema: FieldSchema,
        path: str,
        now: datetime,
    ) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise FieldValidationError(
                path or "$",
                ValidationReason.TYPE_MISMATCH,
                f"expected object, got {type(value).__name__}",
            )

        result: Dict[str, Any] = {}
        for name, field in schema.properties.items():
            field_path = _join(path, name)

            if field.generated_at:
                result[name] = format_timestamp(now, field.timestamp_format)
                continue

            raw = value.get(name)
            if raw is None:
                if field.required:
                    raise FieldValidationError(field_path, ValidationReason.MISSING)
                if field.has_default:
                    logger.debug("default_backfilled", field=field_path)
                    result[name] = self._normalize_value(
                        copy.deepcopy(field.default), field, field_path, now
                    )
                continue

            result[name] = self._normalize_value(raw, field, field_path, now)
        return result

    def _normalize_value(self, value: Any, schema: FieldSchema, path: str, now: datetime) -> Any:
        kind = schema.kind

        if kind == FieldKind.OBJECT:
            return self._normalize_object(value, schema, path, now)

        if kind == FieldKind.ARRAY:
            if not isinstance(value, (list, tuple)):
                raise _mismatch(path, "array", value)
            if schema.min_items is not None and len(value) < schema.min_items:
                raise FieldValidationError(
                    path,
                    ValidationReason.INVALID_LENGTH,
                    f"{len(value)} items, at least {schema.min_items} required",
                )
            if schema.max_items is not None and len(value) > schema.max_items:
                raise FieldValidationError(
                    path,
                    ValidationReason.INVALID_LENGTH,
                    f"{len(value)} items, at most {schema.max_items} allowed",
                )
            return [
                self._normalize_value(item, schema.items, f"{path}[{index}]", now)
                for index, item in enumerate(value)
            ]

        if kind == FieldKind.ENUM:
            if not isinstance(value, str) or value not in schema.values:
                raise FieldValidationError(
                    path,
                    ValidationReason.INVALID_ENUM,
                    f"{value!r} not in {list(schema.values)}",
                )
            return value

        if kind == FieldKind.NUMBER:
            return _check_number(value, schema, path)

        if kind == FieldKind.BOOLEAN:
            if not isinstance(value, bool):
                raise _mismatch(path, "boolean", value)
            return value

        if not isinstance(value, str):
            raise _mismatch(path, "string", value)
        return value


def _check_number(value: Any, schema: FieldSchema, path: str):
    # bool is an int subclass but never a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(path, "number", value)
    if isinstance(value, float) and not math.isfinite(value):
        raise _mismatch(path, "finite number", value)
    if schema.integer and isinstance(value, float):
        if not value.is_integer():
            raise _mismatch(path, "integer", value)
        value = int(value)
    if schema.minimum is not None and value < schema.minimum:
        raise FieldValidationError(
            path, ValidationReason.OUT_OF_RANGE, f"{value} < minimum {schema.minimum:g}"
        )
    if schema.maximum is not None and value > schema.maximum:
        raise FieldValidationError(
            path, ValidationReason.OUT_OF_RANGE, f"{value} > maximum {schema.maximum:g}"
        )
    return value


def _mismatch(path: str, expected: str, value: Any) -> FieldValidationError:
    return FieldValidationError(
        path,
        ValidationReason.TYPE_MISMATCH,
        f"expected {expected}, got {type(value).__name__}",
    )


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def normalize(
    candidate: Any,
    schema: FieldSchema,
    clock: Optional[Callable[[], datetime]] = None,
) -> Dict[str, Any]:
    """Convenience function for one-off normalization.

    Args:
        candidate: Raw record to validate
        schema: Object-kind schema
        clock: Optional clock for generated-at fields

    Returns:
        Normalized record
    """
    return ResponseNormalizer(clock=clock).normalize(candidate, schema)
