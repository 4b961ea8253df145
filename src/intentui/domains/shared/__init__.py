"""Shared kernel for the intentui bounded contexts."""
from .kernel import (
    ActionLiteral, PurposeLiteral, IconHintLiteral, SeverityLiteral,
    ConstraintPreset,
    ViewportLiteral, ConnectionLiteral, OrientationLiteral, WcagLiteral,
    DensityLiteral, ThemeLiteral, UrgencyLiteral, JourneyPhaseLiteral,
    AvailableSpaceLiteral,
    VALID_ACTIONS, VALID_PURPOSES, VALID_PRESETS,
    format_validation_error,
)

__all__ = [
    "ActionLiteral", "PurposeLiteral", "IconHintLiteral", "SeverityLiteral",
    "ConstraintPreset",
    "ViewportLiteral", "ConnectionLiteral", "OrientationLiteral", "WcagLiteral",
    "DensityLiteral", "ThemeLiteral", "UrgencyLiteral", "JourneyPhaseLiteral",
    "AvailableSpaceLiteral",
    "VALID_ACTIONS", "VALID_PURPOSES", "VALID_PRESETS",
    "format_validation_error",
]
