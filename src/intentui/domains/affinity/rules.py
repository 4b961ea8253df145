"""Built-in affinity rules.

Declaration order matters only as the final tie-breaker. Every
single-select rule excludes ``toggleable`` so that a choose-many
intention can never land on a single-select pattern.
"""
from __future__ import annotations

from typing import List

from ..behavior.value_objects import BehaviorTrait
from ..constraints.value_objects import Density, Urgency, Viewport
from .value_objects import AffinityRule, ConstraintCondition, ManifestationPattern, rule

T = BehaviorTrait
P = ManifestationPattern

POINTER_VIEWPORTS = ConstraintCondition(viewports=frozenset({Viewport.DESKTOP, Viewport.TABLET}))
COMPACT = ConstraintCondition(density=Density.COMPACT)
SCREEN_READER = ConstraintCondition(screen_reader=True)
CALM = ConstraintCondition(urgency=frozenset({Urgency.LOW, Urgency.MEDIUM}))


def _selection_rules() -> List[AffinityRule]:
    return [
        rule("single-select-radio", "Single select: radio group", P.RADIO_GROUP,
             requires={T.SELECTABLE, T.FOCUSABLE},
             excludes={T.TOGGLEABLE, T.SEARCHABLE, T.COLLAPSIBLE},
             when=POINTER_VIEWPORTS, priority=10),
        rule("single-select-touch", "Single select: touch option list", P.TOUCH_OPTION_LIST,
             requires={T.SELECTABLE, T.LARGE_TARGET},
             excludes={T.TOGGLEABLE, T.SEARCHABLE},
             priority=15),
        rule("single-select-dropdown", "Single select: dropdown", P.DROPDOWN_SELECT,
             requires={T.SELECTABLE, T.COLLAPSIBLE},
             excludes={T.TOGGLEABLE},
             when=COMPACT, priority=12),
        rule("single-select-searchable", "Single select: searchable", P.SEARCHABLE_SELECT,
             requires={T.SELECTABLE, T.SEARCHABLE},
             excludes={T.TOGGLEABLE},
             priority=20),
        rule("single-select-sequential", "Single select: sequential group", P.SEQUENTIAL_OPTION_GROUP,
             requires={T.SELECTABLE, T.SEQUENTIAL_NAVIGATION},
             excludes={T.TOGGLEABLE},
             when=SCREEN_READER, priority=25),

        rule("multi-select-checkbox", "Multi select: checkbox group", P.CHECKBOX_GROUP,
             requires={T.SELECTABLE, T.TOGGLEABLE, T.FOCUSABLE},
             priority=10),
        rule("multi-select-touch", "Multi select: touch checklist", P.TOUCH_CHECKLIST,
             requires={T.SELECTABLE, T.TOGGLEABLE, T.LARGE_TARGET},
             priority=15),
        rule("multi-select-dropdown", "Multi select: dropdown", P.MULTI_SELECT_DROPDOWN,
             requires={T.SELECTABLE, T.TOGGLEABLE, T.COLLAPSIBLE},
             when=COMPACT, priority=12),
        rule("multi-select-searchable", "Multi select: searchable", P.SEARCHABLE_MULTI_SELECT,
             requires={T.SELECTABLE, T.TOGGLEABLE, T.SEARCHABLE},
             priority=20),
        rule("multi-select-labelled", "Multi select: labelled checkbox group", P.LABELLED_CHECKBOX_GROUP,
             requires={T.SELECTABLE, T.TOGGLEABLE, T.LABELLED_GROUP, T.SEQUENTIAL_NAVIGATION},
             when=SCREEN_READER, priority=25),
    ]


def _input_rules() -> List[AffinityRule]:
    return [
        rule("text-input", "Text input", P.TEXT_FIELD,
             requires={T.EDITABLE, T.FOCUSABLE}, priority=10),
        rule("text-area", "Multi-line text input", P.TEXT_AREA,
             requires={T.EDITABLE, T.FOCUSABLE, T.SCROLLABLE}, priority=15),
    ]


def _action_rules() -> List[AffinityRule]:
    return [
        rule("primary-action", "Primary action", P.ACTION_BUTTON,
             requires={T.CLICKABLE, T.FOCUSABLE},
             excludes={T.SELECTABLE, T.EDITABLE, T.DISMISSABLE, T.DISPLAYABLE},
             priority=10),
        rule("urgent-confirmation", "Urgent confirmation", P.CONFIRMATION_DIALOG,
             requires={T.CLICKABLE, T.FOCUSABLE, T.DISMISSABLE, T.MODAL_BLOCKING},
             excludes={T.SELECTABLE, T.EDITABLE, T.DISPLAYABLE},
             priority=20),
        rule("inline-confirmation", "Inline confirmation", P.INLINE_CONFIRMATION,
             requires={T.CLICKABLE, T.FOCUSABLE, T.DISMISSABLE},
             excludes={T.MODAL_BLOCKING, T.SELECTABLE, T.EDITABLE, T.DISPLAYABLE},
             when=CALM, priority=15),
    ]


def _display_rules() -> List[AffinityRule]:
    return [
        rule("info-display", "Information display", P.INFO_REGION,
             requires={T.DISPLAYABLE},
             excludes={T.EDITABLE, T.DISMISSABLE, T.LOADABLE},
             priority=5),
        rule("summary-card", "Summary card", P.SUMMARY_CARD,
             requires={T.DISPLAYABLE, T.HOVERABLE},
             excludes={T.EDITABLE, T.CLICKABLE, T.DISMISSABLE, T.LOADABLE},
             priority=10),
        rule("loading-state", "Loading state", P.STATUS_INDICATOR,
             requires={T.DISPLAYABLE, T.LOADABLE}, priority=15),
        rule("alert-message", "Alert message", P.ALERT_BANNER,
             requires={T.DISPLAYABLE, T.DISMISSABLE, T.EMPHASIZED}, priority=20),
        rule("status-message", "Status message", P.STATUS_MESSAGE,
             requires={T.DISPLAYABLE, T.DISMISSABLE},
             excludes={T.EMPHASIZED}, priority=10),
    ]


def builtin_rules() -> List[AffinityRule]:
    """All built-in rules in declaration order."""
    return _selection_rules() + _input_rules() + _action_rules() + _display_rules()
