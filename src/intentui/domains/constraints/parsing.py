"""Validation of per-section constraint overrides from tool arguments.

Overrides arrive as nested JSON, for example::

    {"device": {"viewport": "tablet"}, "accessibility": {"screen_reader": true}}

Every section and field is checked against a pydantic model before it is
applied, so a value such as ``"false"`` is coerced to a real boolean and
unknown fields or enum values are rejected instead of being stored on
the frozen dataclasses as-is.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
)

from ..shared.kernel import (
    AvailableSpaceLiteral,
    ConnectionLiteral,
    DensityLiteral,
    JourneyPhaseLiteral,
    OrientationLiteral,
    ThemeLiteral,
    UrgencyLiteral,
    ViewportLiteral,
    WcagLiteral,
    format_validation_error,
)
from .value_objects import ConstraintSet


class DeviceOverrides(BaseModel):
    model_config = ConfigDict(extra="forbid")

    viewport: Optional[ViewportLiteral] = None
    has_touch: Optional[bool] = None
    has_mouse: Optional[bool] = None
    has_keyboard: Optional[bool] = None
    width: Optional[PositiveInt] = None
    height: Optional[PositiveInt] = None
    connection: Optional[ConnectionLiteral] = None
    orientation: Optional[OrientationLiteral] = None


class AccessibilityOverrides(BaseModel):
    model_config = ConfigDict(extra="forbid")

    screen_reader: Optional[bool] = None
    high_contrast: Optional[bool] = None
    reduced_motion: Optional[bool] = None
    large_text: Optional[bool] = None
    voice_control: Optional[bool] = None
    wcag_level: Optional[WcagLiteral] = None


class DesignSystemOverrides(BaseModel):
    model_config = ConfigDict(extra="forbid")

    density: Optional[DensityLiteral] = None
    theme: Optional[ThemeLiteral] = None
    brand_variant: Optional[str] = None


class ContextOverrides(BaseModel):
    model_config = ConfigDict(extra="forbid")

    urgency: Optional[UrgencyLiteral] = None
    journey_phase: Optional[JourneyPhaseLiteral] = None
    available_space: Optional[AvailableSpaceLiteral] = None
    nesting_level: Optional[NonNegativeInt] = None


class ConstraintOverrides(BaseModel):
    """All four sections; each one optional."""
    model_config = ConfigDict(extra="forbid")

    device: Optional[DeviceOverrides] = None
    accessibility: Optional[AccessibilityOverrides] = None
    design_system: Optional[DesignSystemOverrides] = None
    context: Optional[ContextOverrides] = None


def apply_overrides(
    constraints: ConstraintSet, overrides: Mapping[str, Mapping[str, Any]]
) -> ConstraintSet:
    """Apply nested per-section field overrides.

    Fields left out (or given as null) keep their current value.

    Example: ``{"device": {"viewport": "tablet"}, "context": {"urgency": "high"}}``

    Raises:
        ValueError: Unknown section or field, or an invalid value
    """
    try:
        validated = ConstraintOverrides.model_validate(overrides)
    except ValidationError as exc:
        raise ValueError(
            f"Invalid constraint override {format_validation_error(exc)}"
        ) from exc

    for section in ("device", "accessibility", "design_system", "context"):
        model = getattr(validated, section)
        if model is None:
            continue
        fields = model.model_dump(exclude_none=True)
        if fields:
            updated = replace(getattr(constraints, section), **fields)
            constraints = replace(constraints, **{section: updated})
    return constraints


__all__ = [
    "DeviceOverrides",
    "AccessibilityOverrides",
    "DesignSystemOverrides",
    "ContextOverrides",
    "ConstraintOverrides",
    "apply_overrides",
]
