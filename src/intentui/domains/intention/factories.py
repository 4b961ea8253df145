"""Validating factory helpers for common intentions.

Callers should prefer these over assembling Intention objects by hand:
they pick the matching subject-constraints variant and purpose for each
kind of decision point.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from .value_objects import (
    AlertConstraints,
    AlertSeverity,
    ConfirmationConstraints,
    IconHint,
    Intention,
    IntentionAction,
    IntentionPurpose,
    IntentionSubject,
    MalformedIntention,
    ProgressConstraints,
    ReviewConstraints,
    SelectionConstraints,
    SelectionOption,
    TextInputConstraints,
)

OptionLike = Union[SelectionOption, Mapping[str, Any]]

SELECTION_ACTIONS = frozenset({IntentionAction.CHOOSE_ONE, IntentionAction.CHOOSE_MANY})
INPUT_ACTIONS = frozenset({IntentionAction.PROVIDE_TEXT, IntentionAction.PROVIDE_DATA})
DISPLAY_ACTIONS = frozenset({IntentionAction.REVIEW, IntentionAction.ALERT, IntentionAction.WAIT})
CONFIRMATION_ACTIONS = frozenset({IntentionAction.CONFIRM, IntentionAction.ACKNOWLEDGE})


def create_selection_intention(
    options: Iterable[OptionLike],
    label: str,
    *,
    multi_select: bool = False,
    required: bool = True,
    description: Optional[str] = None,
    subject_type: str = "item",
) -> Intention:
    """Create a choose-one (or choose-many) intention.

    Args:
        options: SelectionOption objects or mappings with value/label keys
        label: Prompt shown to the user
        multi_select: Allow several options to be chosen
        required: A choice must be made
        description: Optional help text
        subject_type: Domain noun for what is being chosen

    Raises:
        MalformedIntention: Empty label, no options, duplicate values
    """
    constraints = SelectionConstraints(options=tuple(options), required=required)
    return Intention(
        action=IntentionAction.CHOOSE_MANY if multi_select else IntentionAction.CHOOSE_ONE,
        subject=IntentionSubject(
            type=subject_type,
            label=label,
            constraints=constraints,
            description=description,
        ),
        purpose=IntentionPurpose.REQUEST,
    )


def create_text_input_intention(
    label: str,
    *,
    required: bool = False,
    max_length: Optional[int] = None,
    min_length: Optional[int] = None,
    description: Optional[str] = None,
    placeholder: Optional[str] = None,
    pattern: Optional[str] = None,
) -> Intention:
    """Create a provide-text intention."""
    return Intention(
        action=IntentionAction.PROVIDE_TEXT,
        subject=IntentionSubject(
            type="text",
            label=label,
            constraints=TextInputConstraints(
                required=required,
                max_length=max_length,
                min_length=min_length,
                placeholder=placeholder,
                pattern=pattern,
            ),
            description=description,
        ),
        purpose=IntentionPurpose.REQUEST,
    )


def create_confirmation_intention(
    label: str,
    *,
    description: Optional[str] = None,
    urgent: bool = False,
    destructive: bool = False,
) -> Intention:
    """Create a confirm intention.

    Urgent confirmations carry the alert purpose and a warning icon hint so
    they resolve to a blocking dialog on every device.
    """
    return Intention(
        action=IntentionAction.CONFIRM,
        subject=IntentionSubject(
            type="action",
            label=label,
            constraints=ConfirmationConstraints(urgent=urgent, destructive=destructive),
            description=description,
            icon_hint=IconHint.WARNING if urgent else IconHint.QUESTION,
        ),
        purpose=IntentionPurpose.ALERT if urgent else IntentionPurpose.CONFIRM,
    )


def create_alert_intention(
    message: str,
    *,
    severity: Union[AlertSeverity, str] = AlertSeverity.INFO,
    dismissable: bool = False,
) -> Intention:
    """Create an alert (or acknowledge, when dismissable) intention."""
    constraints = AlertConstraints(severity=severity, dismissable=dismissable)
    severity = constraints.severity
    urgent = severity in (AlertSeverity.ERROR, AlertSeverity.WARNING)
    return Intention(
        action=IntentionAction.ACKNOWLEDGE if dismissable else IntentionAction.ALERT,
        subject=IntentionSubject(
            type="notification",
            label=message,
            constraints=constraints,
            icon_hint=IconHint(severity.value),
        ),
        purpose=IntentionPurpose.ALERT if urgent else IntentionPurpose.INFORM,
    )


def create_review_intention(
    data: Any,
    label: str,
    *,
    description: Optional[str] = None,
) -> Intention:
    """Create a review intention over opaque read-only data."""
    return Intention(
        action=IntentionAction.REVIEW,
        subject=IntentionSubject(
            type="data",
            label=label,
            constraints=ReviewConstraints(data=data),
            description=description,
        ),
        purpose=IntentionPurpose.INFORM,
    )


def create_progress_intention(label: str, *, determinate: bool = False) -> Intention:
    """Create a wait intention for an in-flight operation."""
    return Intention(
        action=IntentionAction.WAIT,
        subject=IntentionSubject(
            type="operation",
            label=label,
            constraints=ProgressConstraints(determinate=determinate),
        ),
        purpose=IntentionPurpose.PROGRESS,
    )


# ── Action classification ─────────────────────────────────────


def _as_action(action: Union[IntentionAction, str]) -> Optional[IntentionAction]:
    try:
        return IntentionAction(action)
    except ValueError:
        return None


def is_selection_action(action: Union[IntentionAction, str]) -> bool:
    return _as_action(action) in SELECTION_ACTIONS


def is_input_action(action: Union[IntentionAction, str]) -> bool:
    return _as_action(action) in INPUT_ACTIONS


def is_display_action(action: Union[IntentionAction, str]) -> bool:
    return _as_action(action) in DISPLAY_ACTIONS


def is_confirmation_action(action: Union[IntentionAction, str]) -> bool:
    return _as_action(action) in CONFIRMATION_ACTIONS


__all__ = [
    "MalformedIntention",
    "create_selection_intention",
    "create_text_input_intention",
    "create_confirmation_intention",
    "create_alert_intention",
    "create_review_intention",
    "create_progress_intention",
    "is_selection_action",
    "is_input_action",
    "is_display_action",
    "is_confirmation_action",
]
