"""Render Instruction Builder.

Pattern-keyed builders turn (traits, subject, constraints) into generic
presentation and accessibility directives. The output only ever contains
pattern tags, trait tags, ARIA attributes and data attributes; nothing
here names a concrete component library.

Adding a pattern means registering a new builder. Registered builders are
never replaced.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..affinity.value_objects import ManifestationPattern
from ..behavior.value_objects import TRAIT_ORDER, BehaviorTrait
from ..constraints.value_objects import ConstraintSet
from ..intention.value_objects import (
    AlertConstraints,
    IntentionSubject,
    SelectionConstraints,
    TextInputConstraints,
)
from .value_objects import RenderInstructions, UnresolvedPattern

logger = logging.getLogger(__name__)

T = BehaviorTrait
P = ManifestationPattern

RenderBuilder = Callable[
    [Tuple[BehaviorTrait, ...], IntentionSubject, ConstraintSet],
    RenderInstructions,
]


def class_names_for(pattern: str, traits: Iterable[BehaviorTrait]) -> Tuple[str, ...]:
    """Pattern tag followed by trait tags in catalog order."""
    ordered = sorted(set(traits), key=TRAIT_ORDER.__getitem__)
    return (f"pattern-{pattern}",) + tuple(f"trait-{t.value}" for t in ordered)


def base_data_attributes(pattern: str, constraints: ConstraintSet) -> Dict[str, str]:
    return {
        "data-pattern": pattern,
        "data-viewport": constraints.viewport.value,
        "data-density": constraints.density.value,
        "data-theme": constraints.design_system.theme.value,
        "data-urgency": constraints.urgency.value,
    }


def _subject_data_attributes(subject: IntentionSubject, constraints: ConstraintSet) -> Dict[str, str]:
    data: Dict[str, str] = {}
    sc = subject.constraints
    if isinstance(sc, SelectionConstraints):
        data["data-option-count"] = str(sc.option_count)
    elif isinstance(sc, TextInputConstraints) and sc.max_length is not None:
        data["data-max-length"] = str(sc.max_length)
    elif isinstance(sc, AlertConstraints):
        data["data-severity"] = sc.severity.value
    if constraints.accessibility.reduced_motion:
        data["data-reduced-motion"] = "true"
    return data


def _is_required(subject: IntentionSubject) -> bool:
    sc = subject.constraints
    return isinstance(sc, (SelectionConstraints, TextInputConstraints)) and sc.required


@dataclass(frozen=True)
class PatternTemplate:
    """Declarative description of a pattern's ARIA semantics.

    Attributes:
        role: ARIA role
        multiselectable: Emit aria-multiselectable
        live: aria-live politeness, if the pattern announces itself
        modal: Emit aria-modal when the modal-blocking trait is present
        busy: Emit aria-busy
        orientable: Emit aria-orientation for single-column/sequential layouts
        autocomplete: Emit aria-autocomplete
        combobox: Emit the collapsed combobox state
    """
    role: str
    multiselectable: bool = False
    live: Optional[str] = None
    modal: bool = False
    busy: bool = False
    orientable: bool = False
    autocomplete: bool = False
    combobox: bool = False

    def build(
        self,
        pattern: str,
        traits: Tuple[BehaviorTrait, ...],
        subject: IntentionSubject,
        constraints: ConstraintSet,
    ) -> RenderInstructions:
        present = frozenset(traits)
        aria: Dict[str, str] = {"role": self.role, "aria-label": subject.label}
        if subject.description:
            aria["aria-description"] = subject.description
        if _is_required(subject):
            aria["aria-required"] = "true"
        if self.multiselectable:
            aria["aria-multiselectable"] = "true"
        if self.orientable and present & {T.SINGLE_COLUMN, T.SEQUENTIAL_NAVIGATION}:
            aria["aria-orientation"] = "vertical"
        if self.modal and T.MODAL_BLOCKING in present:
            aria["aria-modal"] = "true"
        if self.live:
            aria["aria-live"] = self.live
        if self.busy:
            aria["aria-busy"] = "true"
        if self.combobox:
            aria["aria-expanded"] = "false"
            aria["aria-haspopup"] = "listbox"
        if self.autocomplete:
            aria["aria-autocomplete"] = "list"

        data = base_data_attributes(pattern, constraints)
        data.update(_subject_data_attributes(subject, constraints))
        return RenderInstructions(
            class_names=class_names_for(pattern, traits),
            aria=aria,
            data_attributes=data,
        )

    def as_builder(self, pattern: str) -> RenderBuilder:
        def builder(traits, subject, constraints):
            return self.build(pattern, traits, subject, constraints)

        builder.__name__ = f"build_{pattern.replace('-', '_')}"
        return builder


_BUILTIN_TEMPLATES: Dict[ManifestationPattern, PatternTemplate] = {
    P.RADIO_GROUP: PatternTemplate("radiogroup", orientable=True),
    P.TOUCH_OPTION_LIST: PatternTemplate("radiogroup", orientable=True),
    P.DROPDOWN_SELECT: PatternTemplate("combobox", combobox=True),
    P.SEARCHABLE_SELECT: PatternTemplate("combobox", combobox=True, autocomplete=True),
    P.SEQUENTIAL_OPTION_GROUP: PatternTemplate("radiogroup", orientable=True),

    P.CHECKBOX_GROUP: PatternTemplate("group", multiselectable=True, orientable=True),
    P.TOUCH_CHECKLIST: PatternTemplate("group", multiselectable=True, orientable=True),
    P.MULTI_SELECT_DROPDOWN: PatternTemplate("combobox", multiselectable=True, combobox=True),
    P.SEARCHABLE_MULTI_SELECT: PatternTemplate(
        "combobox", multiselectable=True, combobox=True, autocomplete=True
    ),
    P.LABELLED_CHECKBOX_GROUP: PatternTemplate("group", multiselectable=True, orientable=True),

    P.TEXT_FIELD: PatternTemplate("textbox"),
    P.TEXT_AREA: PatternTemplate("textbox"),

    P.ACTION_BUTTON: PatternTemplate("button"),
    P.CONFIRMATION_DIALOG: PatternTemplate("alertdialog", modal=True),
    P.INLINE_CONFIRMATION: PatternTemplate("group"),

    P.INFO_REGION: PatternTemplate("region"),
    P.SUMMARY_CARD: PatternTemplate("region"),
    P.STATUS_INDICATOR: PatternTemplate("status", live="polite", busy=True),
    P.ALERT_BANNER: PatternTemplate("alert", live="assertive"),
    P.STATUS_MESSAGE: PatternTemplate("status", live="polite"),

    P.GENERIC: PatternTemplate("group"),
}


class RenderInstructionRegistry:
    """pattern -> builder table.

    Invariants:
        - One builder per pattern
        - A registered builder is never replaced
    """

    def __init__(self) -> None:
        self._builders: Dict[str, RenderBuilder] = {}

    def register(self, pattern: Union[ManifestationPattern, str], builder: RenderBuilder) -> None:
        """Register a builder for a new pattern.

        Raises:
            ValueError: If the pattern already has a builder
        """
        key = pattern.value if isinstance(pattern, ManifestationPattern) else pattern
        if not key:
            raise ValueError("Pattern name must not be empty")
        if key in self._builders:
            raise ValueError(f"Pattern '{key}' already has a render builder")
        self._builders[key] = builder

    def build(
        self,
        pattern: Union[ManifestationPattern, str],
        traits: Tuple[BehaviorTrait, ...],
        subject: IntentionSubject,
        constraints: ConstraintSet,
    ) -> RenderInstructions:
        """Run the builder for a pattern.

        Raises:
            UnresolvedPattern: If no builder is registered
        """
        key = pattern.value if isinstance(pattern, ManifestationPattern) else pattern
        builder = self._builders.get(key)
        if builder is None:
            logger.error("No render builder for pattern '%s'", key)
            raise UnresolvedPattern(f"No render builder registered for pattern '{key}'")
        return builder(tuple(traits), subject, constraints)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(self._builders)

    @property
    def builders(self) -> Mapping[str, RenderBuilder]:
        return MappingProxyType(self._builders)

    def __contains__(self, pattern: object) -> bool:
        key = pattern.value if isinstance(pattern, ManifestationPattern) else pattern
        return key in self._builders

    @classmethod
    def with_builtins(cls) -> "RenderInstructionRegistry":
        registry = cls()
        for pattern, template in _BUILTIN_TEMPLATES.items():
            registry.register(pattern, template.as_builder(pattern.value))
        return registry


_BUILTIN_REGISTRY: Optional[RenderInstructionRegistry] = None


def get_builtin_render_registry() -> RenderInstructionRegistry:
    global _BUILTIN_REGISTRY
    if _BUILTIN_REGISTRY is None:
        _BUILTIN_REGISTRY = RenderInstructionRegistry.with_builtins()
    return _BUILTIN_REGISTRY


def build_render_instructions(
    pattern: Union[ManifestationPattern, str],
    traits: Tuple[BehaviorTrait, ...],
    subject: IntentionSubject,
    constraints: ConstraintSet,
) -> RenderInstructions:
    return get_builtin_render_registry().build(pattern, traits, subject, constraints)
