"""
Schema validation of parsed candidates against a stage's artifact model.

Structural typing only: required fields, closed enums, numeric ranges and
minimum string lengths. Any single violation fails the whole candidate; the
first offending field is reported as the structural error.
"""

import logging
from typing import Any, Generic, Type

from pydantic import ValidationError as PydanticValidationError

from .results import SchemaFailure, SchemaResult, SchemaSuccess, StructuralError, T

logger = logging.getLogger(__name__)

_ACTUAL_MAX_CHARS = 80


def format_path(loc: tuple) -> str:
    """Render a pydantic error location as a dotted path."""
    if not loc:
        return "root"
    return ".".join(str(part) for part in loc)


def _render_actual(error: dict) -> str:
    if error["type"] == "missing":
        return "missing"
    text = repr(error.get("input"))
    if len(text) > _ACTUAL_MAX_CHARS:
        text = text[: _ACTUAL_MAX_CHARS - 3] + "..."
    return f"{type(error.get('input')).__name__} {text}"


def _render_expected(error: dict) -> str:
    ctx = error.get("ctx") or {}
    error_type = error["type"]
    if error_type == "missing":
        return "required field"
    if error_type in ("enum", "literal_error"):
        return f"one of {ctx.get('expected')}"
    if error_type == "greater_than_equal":
        return f">= {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"<= {ctx.get('le')}"
    if error_type == "greater_than":
        return f"> {ctx.get('gt')}"
    if error_type in ("string_too_short", "too_short"):
        return f"at least {ctx.get('min_length')} {'characters' if error_type == 'string_too_short' else 'items'}"
    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        return error_type.split("_")[0]
    return error_type


class SchemaValidator(Generic[T]):
    """
    Validate a parsed dict against an artifact model.

    Never raises on invalid input; returns SchemaSuccess or SchemaFailure.
    """

    def __init__(self, model: Type[T], error_limit: int = 10):
        """
        Args:
            model: Artifact model class for the stage
            error_limit: Max additional error lines kept for corrective context
        """
        self.model = model
        self.error_limit = error_limit

    def validate(self, data: Any) -> SchemaResult:
        if not isinstance(data, dict):
            return SchemaFailure(
                error=StructuralError(
                    path="root",
                    message="Top-level value must be a JSON object",
                    expected="object",
                    actual=type(data).__name__,
                )
            )

        try:
            artifact = self.model.model_validate(data)
        except PydanticValidationError as e:
            errors = e.errors(include_url=False)
            first = errors[0]
            structural = StructuralError(
                path=format_path(first["loc"]),
                message=first["msg"],
                expected=_render_expected(first),
                actual=_render_actual(first),
            )
            others = tuple(
                f"{format_path(err['loc'])}: {err['msg']}"
                for err in errors[1 : self.error_limit + 1]
            )
            logger.debug(
                f"Schema validation failed for {self.model.__name__} "
                f"with {len(errors)} error(s), first at {structural.path}"
            )
            return SchemaFailure(error=structural, error_count=len(errors), other_errors=others)

        logger.debug(f"Schema validation passed for {self.model.__name__}")
        return SchemaSuccess(artifact=artifact)
