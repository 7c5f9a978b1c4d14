"""Lenient base model shared by every analysis output.

Model output is untrusted: fields go missing, come back as ``null`` or
arrive with the wrong shape. ``AnalysisModel`` replaces anything that does
not fit a field with that field's default, so validation of a dict never
leaves a result partially undefined.
"""

from __future__ import annotations

import math
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel


def finite_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None (``json`` yields inf/nan)."""
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _loosen(value: Any, default: Any) -> Any:
    """Coerce ``value`` toward the type of ``default``, or return ``default``."""
    if value is None:
        return default
    if isinstance(default, BaseModel):
        return value if isinstance(value, (dict, BaseModel)) else default
    if isinstance(default, list):
        return value if isinstance(value, list) else default
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1")
        return default
    if isinstance(default, int):
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        number = finite_number(value)
        return default if number is None else int(number)
    if isinstance(default, float):
        if isinstance(value, bool):
            return default
        number = finite_number(value)
        return default if number is None else number
    if isinstance(default, str):
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, bool)):
            return str(value)
        return default
    return value


class AnalysisModel(BaseModel):
    """Base for all model-facing schemas.

    Accepts both ``snake_case`` and ``camelCase`` keys and serializes with
    camelCase aliases (``model_dump(by_alias=True)``) for the HTTP layer.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _require_mapping(cls, data: Any) -> Any:
        if isinstance(data, (dict, BaseModel)):
            return data
        return {}

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_loose(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name or "")
        if field is None or field.is_required():
            return value
        value = _loosen(value, field.get_default(call_default_factory=True))
        if isinstance(value, list) and get_args(field.annotation) == (str,):
            # list[str]: keep scalars, drop nested structures
            value = [str(item) for item in value if isinstance(item, (str, int, float))]
        return value


class Diagnostic(AnalysisModel):
    """A synthetic entry describing why a result is degraded."""

    kind: str = "parse-error"  # "parse-error", "schema-error", "upstream-error"
    message: str = ""


class AnalysisOutput(AnalysisModel):
    """Common root of every StructuredAnalysis."""

    diagnostics: list[Diagnostic] = []
