"""Behavior Domain Aggregate Root.

The BehaviorCatalog owns one BehaviorPrimitive per BehaviorTrait. It is
built once and read-only afterwards. The resolver uses it to put
human-readable trait names into explanations; renderers and tools use
its dependency, ARIA, keyboard and event metadata.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from .value_objects import (
    TRAIT_ORDER,
    BehaviorPrimitive,
    BehaviorTrait,
    KeyBinding,
    TraitCategory,
    UnknownTrait,
)


class BehaviorCatalog:
    """Read-only trait -> primitive lookup.

    Invariants:
        - At most one primitive per trait
        - Contents never change after construction
    """

    def __init__(self, primitives: Iterable[BehaviorPrimitive]) -> None:
        entries = {}
        for primitive in primitives:
            if primitive.trait in entries:
                raise ValueError(f"Duplicate primitive for trait '{primitive.trait.value}'")
            entries[primitive.trait] = primitive
        self._primitives: Mapping[BehaviorTrait, BehaviorPrimitive] = MappingProxyType(entries)

    def lookup(self, trait: Union[BehaviorTrait, str]) -> BehaviorPrimitive:
        """Return the primitive for a trait.

        Raises:
            UnknownTrait: If the trait is unknown or has no primitive
        """
        key = BehaviorTrait.coerce(trait)
        try:
            return self._primitives[key]
        except KeyError:
            raise UnknownTrait(f"No behavior primitive registered for '{key.value}'") from None

    def describe(self, traits: Iterable[Union[BehaviorTrait, str]]) -> List[str]:
        """Primitive names for the given traits, in the order given."""
        return [self.lookup(t).name for t in traits]

    def required_closure(
        self, traits: Iterable[Union[BehaviorTrait, str]]
    ) -> Tuple[BehaviorTrait, ...]:
        """The traits plus everything they transitively require, in catalog order."""
        pending = [BehaviorTrait.coerce(t) for t in traits]
        closure = set()
        while pending:
            trait = pending.pop()
            if trait in closure:
                continue
            closure.add(trait)
            pending.extend(self.lookup(trait).requires)
        return tuple(sorted(closure, key=TRAIT_ORDER.__getitem__))

    def conflicts_in(
        self, traits: Iterable[Union[BehaviorTrait, str]]
    ) -> List[Tuple[BehaviorTrait, BehaviorTrait]]:
        """(trait, conflicting trait) pairs present together in traits."""
        present = [BehaviorTrait.coerce(t) for t in traits]
        members = set(present)
        pairs = []
        for trait in present:
            for other in sorted(self.lookup(trait).conflicts, key=TRAIT_ORDER.__getitem__):
                if other in members:
                    pairs.append((trait, other))
        return pairs

    def are_compatible(self, traits: Iterable[Union[BehaviorTrait, str]]) -> bool:
        return not self.conflicts_in(traits)

    def aria_for(self, traits: Iterable[Union[BehaviorTrait, str]]) -> Dict[str, Any]:
        """Combined ARIA hints for a trait list.

        The role of the last trait that carries one wins, so callers
        should list the most specific trait last. Attributes are merged
        without duplicates in first-seen order.
        """
        role = None
        attributes: List[str] = []
        for trait in traits:
            primitive = self.lookup(trait)
            if primitive.aria_role:
                role = primitive.aria_role
            for attribute in primitive.aria_attributes:
                if attribute not in attributes:
                    attributes.append(attribute)
        return {"role": role, "attributes": attributes}

    def keyboard_for(
        self, traits: Iterable[Union[BehaviorTrait, str]]
    ) -> Tuple[KeyBinding, ...]:
        bindings: List[KeyBinding] = []
        for trait in traits:
            for binding in self.lookup(trait).keyboard:
                if binding not in bindings:
                    bindings.append(binding)
        return tuple(bindings)

    def events_for(self, traits: Iterable[Union[BehaviorTrait, str]]) -> Tuple[str, ...]:
        events: List[str] = []
        for trait in traits:
            for event in self.lookup(trait).events:
                if event not in events:
                    events.append(event)
        return tuple(events)

    def by_category(self, category: TraitCategory) -> Tuple[BehaviorPrimitive, ...]:
        return tuple(p for p in self._primitives.values() if p.category is category)

    @property
    def traits(self) -> Tuple[BehaviorTrait, ...]:
        return tuple(self._primitives)

    def __contains__(self, trait: object) -> bool:
        try:
            return BehaviorTrait(trait) in self._primitives
        except ValueError:
            return False

    def __iter__(self) -> Iterator[BehaviorPrimitive]:
        return iter(self._primitives.values())

    def __len__(self) -> int:
        return len(self._primitives)

    @classmethod
    def with_builtins(cls) -> "BehaviorCatalog":
        """Create a catalog with a primitive for every BehaviorTrait."""
        return cls(_builtin_primitives())


def _keys(*pairs: Tuple[str, str]) -> Tuple[KeyBinding, ...]:
    return tuple(KeyBinding(key, action) for key, action in pairs)


def _builtin_primitives() -> List[BehaviorPrimitive]:
    """Declaration order matches BehaviorTrait."""
    T, C = BehaviorTrait, TraitCategory
    return [
        # ── Interaction ──────────────────────────────────────
        BehaviorPrimitive(
            T.CLICKABLE, "Clickable",
            "Element can be clicked or tapped to trigger an action", C.INTERACTION,
            requires={T.FOCUSABLE}, aria_role="button", aria_attributes=("aria-pressed",),
            keyboard=_keys(("Enter", "activate"), ("Space", "activate")),
            events=("onClick", "onKeyDown"),
        ),
        BehaviorPrimitive(
            T.SELECTABLE, "Selectable",
            "Element can be selected from a group of options", C.INTERACTION,
            requires={T.FOCUSABLE}, aria_role="option", aria_attributes=("aria-selected",),
            keyboard=_keys(("Enter", "select"), ("Space", "select")),
            events=("onSelect", "onChange"),
        ),
        BehaviorPrimitive(
            T.TOGGLEABLE, "Toggleable",
            "Element can switch between two states", C.INTERACTION,
            requires={T.FOCUSABLE, T.CLICKABLE}, aria_role="switch",
            aria_attributes=("aria-checked",),
            keyboard=_keys(("Space", "toggle")),
            events=("onToggle", "onChange"),
        ),
        BehaviorPrimitive(
            T.DRAGGABLE, "Draggable",
            "Element can be picked up and moved", C.INTERACTION,
            requires={T.FOCUSABLE}, conflicts={T.EDITABLE},
            aria_attributes=("aria-grabbed", "aria-dropeffect"),
            keyboard=_keys(("Space", "grab"), ("Escape", "cancel")),
            events=("onDragStart", "onDrag", "onDragEnd"),
        ),
        BehaviorPrimitive(
            T.DROPPABLE, "Droppable",
            "Element can receive dropped items", C.INTERACTION,
            aria_attributes=("aria-dropeffect",),
            events=("onDragEnter", "onDragOver", "onDrop"),
        ),

        # ── Input ────────────────────────────────────────────
        BehaviorPrimitive(
            T.EDITABLE, "Editable",
            "Element accepts text input", C.INPUT,
            requires={T.FOCUSABLE}, conflicts={T.DRAGGABLE}, aria_role="textbox",
            aria_attributes=("aria-multiline", "aria-placeholder"),
            keyboard=_keys(("Any", "type")),
            events=("onChange", "onInput", "onBlur"),
        ),
        BehaviorPrimitive(
            T.FOCUSABLE, "Focusable",
            "Element can receive keyboard focus", C.INPUT,
            aria_attributes=("tabindex",),
            keyboard=_keys(("Tab", "focus-next"), ("Shift+Tab", "focus-previous")),
            events=("onFocus", "onBlur"),
        ),
        BehaviorPrimitive(
            T.SCROLLABLE, "Scrollable",
            "Element can scroll its content", C.INPUT,
            aria_attributes=("aria-orientation",),
            keyboard=_keys(
                ("ArrowUp", "scroll-up"), ("ArrowDown", "scroll-down"),
                ("PageUp", "page-up"), ("PageDown", "page-down"),
            ),
            events=("onScroll",),
        ),
        BehaviorPrimitive(
            T.SEARCHABLE, "Searchable",
            "Element can filter its options by typed text", C.INPUT,
            requires={T.FOCUSABLE}, aria_attributes=("aria-autocomplete", "aria-controls"),
            keyboard=_keys(("Any", "filter"), ("Escape", "clear")),
            events=("onSearch", "onChange"),
        ),
        BehaviorPrimitive(
            T.VALIDATABLE, "Validatable",
            "Element has validation states (valid/invalid/pending)", C.INPUT,
            aria_attributes=("aria-invalid", "aria-errormessage", "aria-describedby"),
            events=("onValidate", "onError"),
        ),

        # ── Display / state ──────────────────────────────────
        BehaviorPrimitive(
            T.DISPLAYABLE, "Displayable",
            "Element shows information to the user", C.DISPLAY,
            aria_role="region", aria_attributes=("aria-label", "aria-live"),
        ),
        BehaviorPrimitive(
            T.COLLAPSIBLE, "Collapsible",
            "Element can expand and collapse to show/hide content", C.DISPLAY,
            requires={T.FOCUSABLE, T.CLICKABLE}, aria_role="button",
            aria_attributes=("aria-expanded", "aria-controls"),
            keyboard=_keys(("Enter", "toggle"), ("Space", "toggle")),
            events=("onExpand", "onCollapse"),
        ),
        BehaviorPrimitive(
            T.DISMISSABLE, "Dismissable",
            "Element can be closed or hidden by the user", C.DISPLAY,
            aria_attributes=("aria-hidden",),
            keyboard=_keys(("Escape", "dismiss")),
            events=("onDismiss", "onClose"),
        ),
        BehaviorPrimitive(
            T.HOVERABLE, "Hoverable",
            "Element responds to mouse hover", C.DISPLAY,
            events=("onMouseEnter", "onMouseLeave"),
        ),
        BehaviorPrimitive(
            T.LOADABLE, "Loadable",
            "Element has loading and loaded states", C.DISPLAY,
            aria_role="status", aria_attributes=("aria-busy", "aria-live"),
            events=("onLoadStart", "onLoadComplete", "onLoadError"),
        ),
        BehaviorPrimitive(
            T.DISABLEABLE, "Disableable",
            "Element can be disabled to prevent interaction", C.DISPLAY,
            aria_attributes=("aria-disabled",),
        ),

        # ── Context-derived presentation ─────────────────────
        BehaviorPrimitive(
            T.LARGE_TARGET, "Large target",
            "Hit areas are sized for touch input", C.PRESENTATION,
        ),
        BehaviorPrimitive(
            T.SINGLE_COLUMN, "Single column",
            "Content is laid out in one vertical column", C.PRESENTATION,
        ),
        BehaviorPrimitive(
            T.LABELLED_GROUP, "Labelled group",
            "Related controls are announced as one named group", C.PRESENTATION,
            aria_role="group", aria_attributes=("aria-labelledby",),
        ),
        BehaviorPrimitive(
            T.SEQUENTIAL_NAVIGATION, "Sequential navigation",
            "Items are reached one at a time in reading order", C.PRESENTATION,
            requires={T.FOCUSABLE}, aria_attributes=("aria-orientation",),
            keyboard=_keys(
                ("ArrowDown", "focus-next-item"), ("ArrowUp", "focus-previous-item"),
                ("Home", "focus-first-item"), ("End", "focus-last-item"),
            ),
        ),
        BehaviorPrimitive(
            T.MODAL_BLOCKING, "Modal blocking",
            "Element blocks the rest of the page until answered", C.PRESENTATION,
            requires={T.FOCUSABLE}, aria_role="dialog", aria_attributes=("aria-modal",),
            keyboard=_keys(("Tab", "trap-focus")),
            events=("onOpen", "onClose"),
        ),
        BehaviorPrimitive(
            T.EMPHASIZED, "Emphasized",
            "Element is visually and audibly prioritised", C.PRESENTATION,
            aria_attributes=("aria-live",),
        ),
    ]
