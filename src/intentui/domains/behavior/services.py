"""Trait Deriver.

Turns an Intention into behavior traits, then widens that set according
to the rendering context. Both steps are pure table lookups plus
independent predicates, so results never depend on call order.

Output ordering: base traits keep their derived order; traits added by
enhancement are appended in catalog order. The result is an ordered set
(a tuple without duplicates).
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Tuple, Union

from ..constraints.value_objects import ConstraintSet, Density
from ..intention.value_objects import (
    Intention,
    IntentionAction,
    IntentionPurpose,
    IntentionSubject,
    SelectionConstraints,
    TextInputConstraints,
)
from .value_objects import TRAIT_ORDER, BehaviorTrait

logger = logging.getLogger(__name__)

T = BehaviorTrait

SEARCHABLE_OPTION_THRESHOLD = 5
MULTILINE_LENGTH_THRESHOLD = 200

_FALLBACK_TRAITS: Tuple[BehaviorTrait, ...] = (T.DISPLAYABLE,)

ACTION_TRAITS: Dict[IntentionAction, Tuple[BehaviorTrait, ...]] = {
    IntentionAction.CHOOSE_ONE: (T.SELECTABLE, T.FOCUSABLE),
    IntentionAction.CHOOSE_MANY: (T.SELECTABLE, T.TOGGLEABLE, T.FOCUSABLE),
    IntentionAction.PROVIDE_TEXT: (T.EDITABLE, T.FOCUSABLE, T.VALIDATABLE),
    IntentionAction.PROVIDE_DATA: (T.EDITABLE, T.FOCUSABLE, T.VALIDATABLE),
    IntentionAction.CONFIRM: (T.CLICKABLE, T.FOCUSABLE, T.DISMISSABLE),
    IntentionAction.ACKNOWLEDGE: (T.DISPLAYABLE, T.DISMISSABLE, T.CLICKABLE, T.FOCUSABLE),
    IntentionAction.REVIEW: (T.DISPLAYABLE,),
    IntentionAction.NAVIGATE: (T.CLICKABLE, T.FOCUSABLE),
    IntentionAction.WAIT: (T.DISPLAYABLE, T.LOADABLE),
    IntentionAction.ALERT: (T.DISPLAYABLE, T.DISMISSABLE, T.EMPHASIZED),
}

PURPOSE_TRAITS: Dict[IntentionPurpose, Tuple[BehaviorTrait, ...]] = {
    IntentionPurpose.ALERT: (T.MODAL_BLOCKING, T.EMPHASIZED),
}


def _ordered_union(*groups: Iterable[BehaviorTrait]) -> Tuple[BehaviorTrait, ...]:
    seen: Dict[BehaviorTrait, None] = {}
    for group in groups:
        for trait in group:
            seen.setdefault(trait, None)
    return tuple(seen)


def action_to_traits(action: Union[IntentionAction, str]) -> Tuple[BehaviorTrait, ...]:
    """Base traits for an action.

    Total: unknown actions fall back to displayable and are logged, never
    raised, so a new action upstream degrades to an informational display.
    """
    try:
        key = IntentionAction(action)
    except ValueError:
        logger.debug("No trait mapping for action %r, using fallback", action)
        return _FALLBACK_TRAITS
    return ACTION_TRAITS.get(key, _FALLBACK_TRAITS)


def purpose_to_traits(purpose: Union[IntentionPurpose, str]) -> Tuple[BehaviorTrait, ...]:
    try:
        return PURPOSE_TRAITS.get(IntentionPurpose(purpose), ())
    except ValueError:
        return ()


def subject_to_traits(subject: IntentionSubject) -> Tuple[BehaviorTrait, ...]:
    """Traits implied by the shape of the subject's constraints."""
    constraints = subject.constraints
    traits: List[BehaviorTrait] = []
    if isinstance(constraints, SelectionConstraints):
        if constraints.option_count > SEARCHABLE_OPTION_THRESHOLD:
            traits.extend((T.SEARCHABLE, T.SCROLLABLE))
        if constraints.has_disabled_options:
            traits.append(T.DISABLEABLE)
    elif isinstance(constraints, TextInputConstraints):
        if (constraints.max_length or 0) > MULTILINE_LENGTH_THRESHOLD:
            traits.append(T.SCROLLABLE)
    return tuple(traits)


def derive_base_traits(intention: Intention) -> Tuple[BehaviorTrait, ...]:
    """Action traits, then purpose traits, then subject traits."""
    return _ordered_union(
        action_to_traits(intention.action),
        purpose_to_traits(intention.purpose),
        subject_to_traits(intention.subject),
    )


# ============================================================
# Constraint enhancement
# ============================================================

# Each enhancement is (predicate, traits-to-add). Predicates see the base
# traits and the constraints, never the output of another enhancement.
Enhancement = Tuple[
    Callable[[frozenset, ConstraintSet], bool],
    Tuple[BehaviorTrait, ...],
]

ENHANCEMENTS: Tuple[Enhancement, ...] = (
    (
        lambda traits, c: c.device.is_mobile and c.density is not Density.COMPACT,
        (T.LARGE_TARGET, T.SINGLE_COLUMN),
    ),
    (lambda traits, c: c.device.has_touch, (T.CLICKABLE,)),
    (lambda traits, c: c.device.has_mouse and not c.device.has_touch, (T.HOVERABLE,)),
    (
        lambda traits, c: c.accessibility.screen_reader,
        (T.FOCUSABLE, T.LABELLED_GROUP, T.SEQUENTIAL_NAVIGATION),
    ),
    (lambda traits, c: c.urgency.is_elevated, (T.MODAL_BLOCKING, T.EMPHASIZED)),
    (
        lambda traits, c: c.density is Density.COMPACT and T.SELECTABLE in traits,
        (T.COLLAPSIBLE,),
    ),
)


def enhance_traits_for_constraints(
    base: Iterable[Union[BehaviorTrait, str]],
    constraints: ConstraintSet,
) -> Tuple[BehaviorTrait, ...]:
    """Widen base traits for the given context.

    The result is always a superset of ``base`` and applying it twice
    gives the same result as applying it once.
    """
    base_traits = _ordered_union(BehaviorTrait.coerce(t) for t in base)
    present = frozenset(base_traits)

    added = set()
    for predicate, traits in ENHANCEMENTS:
        if predicate(present, constraints):
            added.update(traits)
    added -= present

    return base_traits + tuple(sorted(added, key=TRAIT_ORDER.__getitem__))


def sort_traits(traits: Iterable[BehaviorTrait]) -> Tuple[BehaviorTrait, ...]:
    """Traits in catalog order, deduplicated."""
    return tuple(sorted(set(traits), key=TRAIT_ORDER.__getitem__))
