"""Constraint Bounded Context.

Immutable snapshots of the rendering context (device, accessibility,
design system, urgency) and pure combinators that derive new ones.
"""
from .value_objects import (
    Viewport, ConnectionSpeed, Orientation, WcagLevel, Density, Theme,
    JourneyPhase, Urgency, AvailableSpace,
    DeviceConstraints, AccessibilityConstraints, DesignSystemConstraints,
    ContextConstraints, ConstraintSet,
)
from .modifiers import (
    PRESETS,
    create_default_constraints,
    with_mobile_device, with_screen_reader, with_high_urgency,
    with_compact_density, with_dark_theme, with_reduced_motion,
    apply_presets, calculate_constraint_specificity,
)
from .parsing import ConstraintOverrides, apply_overrides

__all__ = [
    "Viewport", "ConnectionSpeed", "Orientation", "WcagLevel", "Density",
    "Theme", "JourneyPhase", "Urgency", "AvailableSpace",
    "DeviceConstraints", "AccessibilityConstraints",
    "DesignSystemConstraints", "ContextConstraints", "ConstraintSet",
    "PRESETS", "create_default_constraints",
    "with_mobile_device", "with_screen_reader", "with_high_urgency",
    "with_compact_density", "with_dark_theme", "with_reduced_motion",
    "apply_presets", "calculate_constraint_specificity",
    "ConstraintOverrides", "apply_overrides",
]
