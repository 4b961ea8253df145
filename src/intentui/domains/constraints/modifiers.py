"""ConstraintSet factory and pure combinators.

Every combinator returns a new ConstraintSet; the input is never touched.
Combinators compose in any order:

    >>> c = with_screen_reader(with_mobile_device(create_default_constraints()))
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable

from .value_objects import (
    AvailableSpace,
    ConstraintSet,
    Density,
    JourneyPhase,
    Orientation,
    Theme,
    Urgency,
    Viewport,
    WcagLevel,
)

logger = logging.getLogger(__name__)


def create_default_constraints() -> ConstraintSet:
    """Deterministic desktop defaults."""
    return ConstraintSet()


def with_mobile_device(constraints: ConstraintSet) -> ConstraintSet:
    """Phone-sized touch device without a mouse."""
    return replace(
        constraints,
        device=replace(
            constraints.device,
            viewport=Viewport.MOBILE,
            has_touch=True,
            has_mouse=False,
            width=375,
            height=667,
            orientation=Orientation.PORTRAIT,
        ),
    )


def with_screen_reader(constraints: ConstraintSet) -> ConstraintSet:
    return replace(
        constraints,
        accessibility=replace(
            constraints.accessibility,
            screen_reader=True,
            wcag_level=WcagLevel.AAA,
        ),
    )


def with_high_urgency(constraints: ConstraintSet) -> ConstraintSet:
    """Critical urgency in a critical journey phase."""
    return replace(
        constraints,
        context=replace(
            constraints.context,
            urgency=Urgency.CRITICAL,
            journey_phase=JourneyPhase.CRITICAL,
        ),
    )


def with_compact_density(constraints: ConstraintSet) -> ConstraintSet:
    return replace(
        constraints,
        design_system=replace(constraints.design_system, density=Density.COMPACT),
    )


def with_dark_theme(constraints: ConstraintSet) -> ConstraintSet:
    return replace(
        constraints,
        design_system=replace(constraints.design_system, theme=Theme.DARK),
    )


def with_reduced_motion(constraints: ConstraintSet) -> ConstraintSet:
    return replace(
        constraints,
        accessibility=replace(constraints.accessibility, reduced_motion=True),
    )


PRESETS: Dict[str, Callable[[ConstraintSet], ConstraintSet]] = {
    "mobile": with_mobile_device,
    "screen-reader": with_screen_reader,
    "high-urgency": with_high_urgency,
    "compact": with_compact_density,
    "dark": with_dark_theme,
    "reduced-motion": with_reduced_motion,
}


def apply_presets(
    constraints: ConstraintSet, presets: Iterable[str]
) -> ConstraintSet:
    """Apply named presets in order.

    Raises:
        ValueError: If a preset name is unknown
    """
    for name in presets:
        key = name.strip().lower().replace("_", "-")
        modifier = PRESETS.get(key)
        if modifier is None:
            raise ValueError(
                f"Unknown constraint preset '{name}'. Valid: {sorted(PRESETS)}"
            )
        constraints = modifier(constraints)
        logger.debug("Applied constraint preset %s", key)
    return constraints


def calculate_constraint_specificity(constraints: ConstraintSet) -> int:
    """Count how far a set departs from the defaults.

    Used for diagnostics only: higher means more specialised context.
    """
    score = 0
    if constraints.device.viewport is Viewport.MOBILE:
        score += 2
    if constraints.device.has_touch:
        score += 1

    if constraints.accessibility.screen_reader:
        score += 3
    if constraints.accessibility.high_contrast:
        score += 2
    if constraints.accessibility.reduced_motion:
        score += 1
    if constraints.accessibility.wcag_level is WcagLevel.AAA:
        score += 2

    if constraints.context.urgency is Urgency.CRITICAL:
        score += 3
    if constraints.context.available_space is AvailableSpace.INLINE:
        score += 2
    score += constraints.context.nesting_level
    return score
