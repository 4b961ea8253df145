"""Affinity Domain Value Objects.

An AffinityRule says: "when an element has these traits, lacks those,
and the context satisfies this condition, manifest it as this pattern".
Rules are plain data; the AffinityRuleSet aggregate does the matching.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional, Union

from ..behavior.value_objects import BehaviorTrait
from ..constraints.value_objects import ConstraintSet, Density, Urgency, Viewport


class ManifestationPattern(str, Enum):
    """Abstract interaction patterns. Never names a concrete widget."""
    # Single selection
    RADIO_GROUP = "radio-group"
    TOUCH_OPTION_LIST = "touch-option-list"
    DROPDOWN_SELECT = "dropdown-select"
    SEARCHABLE_SELECT = "searchable-select"
    SEQUENTIAL_OPTION_GROUP = "sequential-option-group"

    # Multiple selection
    CHECKBOX_GROUP = "checkbox-group"
    TOUCH_CHECKLIST = "touch-checklist"
    MULTI_SELECT_DROPDOWN = "multi-select-dropdown"
    SEARCHABLE_MULTI_SELECT = "searchable-multi-select"
    LABELLED_CHECKBOX_GROUP = "labelled-checkbox-group"

    # Input
    TEXT_FIELD = "text-field"
    TEXT_AREA = "text-area"

    # Actions and confirmation
    ACTION_BUTTON = "action-button"
    CONFIRMATION_DIALOG = "confirmation-dialog"
    INLINE_CONFIRMATION = "inline-confirmation"

    # Display
    INFO_REGION = "info-region"
    SUMMARY_CARD = "summary-card"
    STATUS_INDICATOR = "status-indicator"
    ALERT_BANNER = "alert-banner"
    STATUS_MESSAGE = "status-message"

    GENERIC = "generic"


MULTI_SELECT_PATTERNS: FrozenSet[str] = frozenset(p.value for p in (
    ManifestationPattern.CHECKBOX_GROUP,
    ManifestationPattern.TOUCH_CHECKLIST,
    ManifestationPattern.MULTI_SELECT_DROPDOWN,
    ManifestationPattern.SEARCHABLE_MULTI_SELECT,
    ManifestationPattern.LABELLED_CHECKBOX_GROUP,
))


def _always(_: ConstraintSet) -> bool:
    return True


@dataclass(frozen=True)
class ConstraintCondition:
    """Declarative predicate over a ConstraintSet.

    Every field that is set must hold; unset fields are unconstrained.
    An empty condition matches everything.

    Examples:
        >>> ConstraintCondition(viewports=frozenset({Viewport.MOBILE}))
        >>> ConstraintCondition(screen_reader=True)
    """
    viewports: Optional[FrozenSet[Viewport]] = None
    screen_reader: Optional[bool] = None
    urgency: Optional[FrozenSet[Urgency]] = None
    density: Optional[Density] = None

    def __call__(self, constraints: ConstraintSet) -> bool:
        if self.viewports is not None and constraints.viewport not in self.viewports:
            return False
        if self.screen_reader is not None and constraints.screen_reader != self.screen_reader:
            return False
        if self.urgency is not None and constraints.urgency not in self.urgency:
            return False
        if self.density is not None and constraints.density is not self.density:
            return False
        return True

    def describe(self) -> str:
        parts = []
        if self.viewports is not None:
            parts.append("viewport in " + "/".join(sorted(v.value for v in self.viewports)))
        if self.screen_reader is not None:
            parts.append(f"screen_reader={self.screen_reader}")
        if self.urgency is not None:
            parts.append("urgency in " + "/".join(sorted(u.value for u in self.urgency)))
        if self.density is not None:
            parts.append(f"density={self.density.value}")
        return ", ".join(parts) or "any"


ConstraintPredicate = Callable[[ConstraintSet], bool]


@dataclass(frozen=True)
class AffinityRule:
    """One declarative matching rule.

    Attributes:
        id: Unique, stable identifier (appears in resolutions)
        name: Human-readable name used in explanations
        pattern: Manifestation pattern produced when this rule wins.
            Built-in values come from ManifestationPattern; any other
            non-empty string works once a render builder is registered.
        required_traits: All must be present
        excluded_traits: None may be present
        constraint_predicate: Extra condition on the context
        priority: Higher wins; ties break on specificity then declaration order
    """
    id: str
    name: str
    pattern: str
    required_traits: FrozenSet[BehaviorTrait] = frozenset()
    excluded_traits: FrozenSet[BehaviorTrait] = frozenset()
    constraint_predicate: ConstraintPredicate = field(default=_always, compare=False)
    priority: float = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("AffinityRule.id must not be empty")
        pattern = self.pattern.value if isinstance(self.pattern, ManifestationPattern) else self.pattern
        if not isinstance(pattern, str) or not pattern:
            raise ValueError(f"Rule '{self.id}' needs a non-empty pattern")
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(
            self, "required_traits", frozenset(BehaviorTrait.coerce(t) for t in self.required_traits)
        )
        object.__setattr__(
            self, "excluded_traits", frozenset(BehaviorTrait.coerce(t) for t in self.excluded_traits)
        )
        overlap = self.required_traits & self.excluded_traits
        if overlap:
            raise ValueError(
                f"Rule '{self.id}' both requires and excludes {sorted(t.value for t in overlap)}"
            )

    @property
    def specificity(self) -> int:
        return len(self.required_traits)

    def matches(self, traits: FrozenSet[BehaviorTrait], constraints: ConstraintSet) -> bool:
        return (
            self.required_traits <= traits
            and not (self.excluded_traits & traits)
            and bool(self.constraint_predicate(constraints))
        )

    def to_dict(self) -> dict:
        predicate = self.constraint_predicate
        condition = predicate.describe() if isinstance(predicate, ConstraintCondition) else (
            "any" if predicate is _always else getattr(predicate, "__name__", "custom")
        )
        return {
            "id": self.id,
            "name": self.name,
            "pattern": self.pattern,
            "required_traits": sorted(t.value for t in self.required_traits),
            "excluded_traits": sorted(t.value for t in self.excluded_traits),
            "condition": condition,
            "priority": None if math.isinf(self.priority) else self.priority,
        }


DEFAULT_RULE = AffinityRule(
    id="default",
    name="Default",
    pattern=ManifestationPattern.GENERIC,
    priority=float("-inf"),
)


def rule(
    id: str,
    name: str,
    pattern: Union[ManifestationPattern, str],
    requires: Iterable[BehaviorTrait],
    excludes: Iterable[BehaviorTrait] = (),
    when: Optional[ConstraintPredicate] = None,
    priority: float = 0,
) -> AffinityRule:
    """Shorthand used by the rule declarations."""
    return AffinityRule(
        id=id,
        name=name,
        pattern=pattern,
        required_traits=frozenset(requires),
        excluded_traits=frozenset(excludes),
        constraint_predicate=when or _always,
        priority=priority,
    )
