"""Behavior Bounded Context.

Behavior traits, the primitive catalog that names them, and the
deriver that maps intentions and context onto trait sets.
"""
from .value_objects import (
    BehaviorTrait, BehaviorPrimitive, KeyBinding, TraitCategory, UnknownTrait,
    TRAIT_ORDER,
)
from .aggregates import BehaviorCatalog
from .services import (
    ACTION_TRAITS, PURPOSE_TRAITS,
    SEARCHABLE_OPTION_THRESHOLD, MULTILINE_LENGTH_THRESHOLD,
    action_to_traits, purpose_to_traits, subject_to_traits,
    derive_base_traits, enhance_traits_for_constraints, sort_traits,
)

__all__ = [
    "BehaviorTrait", "BehaviorPrimitive", "KeyBinding", "TraitCategory", "UnknownTrait",
    "TRAIT_ORDER",
    "BehaviorCatalog",
    "ACTION_TRAITS", "PURPOSE_TRAITS",
    "SEARCHABLE_OPTION_THRESHOLD", "MULTILINE_LENGTH_THRESHOLD",
    "action_to_traits", "purpose_to_traits", "subject_to_traits",
    "derive_base_traits", "enhance_traits_for_constraints", "sort_traits",
]
