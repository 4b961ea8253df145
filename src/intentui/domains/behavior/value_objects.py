"""Behavior Domain Value Objects.

Behavior traits are the atoms of interaction: they describe what an
element *does* (can be selected, accepts text, blocks the page) and never
how it looks. Declaration order of BehaviorTrait is the catalog order
used anywhere traits are listed for output.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class UnknownTrait(KeyError):
    """Raised when a trait lookup misses the catalog."""

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return str(self.args[0]) if self.args else "Unknown trait"


class TraitCategory(str, Enum):
    INTERACTION = "interaction"
    INPUT = "input"
    DISPLAY = "display"
    PRESENTATION = "presentation"


class BehaviorTrait(str, Enum):
    """A single interaction capability."""
    # Interaction
    CLICKABLE = "clickable"
    SELECTABLE = "selectable"
    TOGGLEABLE = "toggleable"
    DRAGGABLE = "draggable"
    DROPPABLE = "droppable"

    # Input
    EDITABLE = "editable"
    FOCUSABLE = "focusable"
    SCROLLABLE = "scrollable"
    SEARCHABLE = "searchable"
    VALIDATABLE = "validatable"

    # Display / state
    DISPLAYABLE = "displayable"
    COLLAPSIBLE = "collapsible"
    DISMISSABLE = "dismissable"
    HOVERABLE = "hoverable"
    LOADABLE = "loadable"
    DISABLEABLE = "disableable"

    # Added by context (device, accessibility, urgency)
    LARGE_TARGET = "large-target"
    SINGLE_COLUMN = "single-column"
    LABELLED_GROUP = "labelled-group"
    SEQUENTIAL_NAVIGATION = "sequential-navigation"
    MODAL_BLOCKING = "modal-blocking"
    EMPHASIZED = "emphasized"

    @classmethod
    def coerce(cls, value: Union["BehaviorTrait", str]) -> "BehaviorTrait":
        """Accept a trait or its string value.

        Raises:
            UnknownTrait: If the value names no trait
        """
        try:
            return cls(value)
        except ValueError:
            raise UnknownTrait(
                f"Unknown behavior trait '{value}'. "
                f"Valid: {[t.value for t in cls]}"
            ) from None


# Position of each trait in catalog order, for stable sorting.
TRAIT_ORDER = {trait: index for index, trait in enumerate(BehaviorTrait)}


@dataclass(frozen=True)
class KeyBinding:
    """A key (or chord) and the abstract action it triggers."""
    key: str
    action: str

    def to_dict(self) -> dict:
        return {"key": self.key, "action": self.action}


@dataclass(frozen=True)
class BehaviorPrimitive:
    """Static metadata about one trait.

    Attributes:
        trait: The trait described
        name: Display name used in explanations
        description: One-sentence summary
        category: Grouping for diagnostics
        requires: Traits this one cannot work without
        conflicts: Traits that must not be combined with this one
        aria_role: ARIA role the trait implies, if any
        aria_attributes: ARIA attributes a renderer should manage
        keyboard: Expected key bindings
        events: Abstract events the element emits
    """
    trait: BehaviorTrait
    name: str
    description: str
    category: TraitCategory
    requires: FrozenSet[BehaviorTrait] = frozenset()
    conflicts: FrozenSet[BehaviorTrait] = frozenset()
    aria_role: Optional[str] = None
    aria_attributes: Tuple[str, ...] = ()
    keyboard: Tuple[KeyBinding, ...] = ()
    events: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError(f"BehaviorPrimitive for {self.trait} needs a name")
        object.__setattr__(
            self, "requires", frozenset(BehaviorTrait.coerce(t) for t in self.requires)
        )
        object.__setattr__(
            self, "conflicts", frozenset(BehaviorTrait.coerce(t) for t in self.conflicts)
        )
        object.__setattr__(self, "aria_attributes", tuple(self.aria_attributes))
        object.__setattr__(self, "keyboard", tuple(self.keyboard))
        object.__setattr__(self, "events", tuple(self.events))
        if self.trait in self.requires | self.conflicts:
            raise ValueError(f"Trait '{self.trait.value}' cannot require or conflict with itself")
        overlap = self.requires & self.conflicts
        if overlap:
            raise ValueError(
                f"Trait '{self.trait.value}' both requires and conflicts with "
                f"{sorted(t.value for t in overlap)}"
            )

    def to_dict(self) -> dict:
        return {
            "trait": self.trait.value,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "requires": [t.value for t in sorted(self.requires, key=TRAIT_ORDER.__getitem__)],
            "conflicts": [t.value for t in sorted(self.conflicts, key=TRAIT_ORDER.__getitem__)],
            "aria_role": self.aria_role,
            "aria_attributes": list(self.aria_attributes),
            "keyboard": [k.to_dict() for k in self.keyboard],
            "events": list(self.events),
        }
