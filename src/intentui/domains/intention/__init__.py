"""Intention Bounded Context.

Abstract statements of user intent ("choose one of these", "confirm
this") with action-keyed subject constraints, validating factories, and
parsing of LLM-produced intention payloads.
"""
from .value_objects import (
    MalformedIntention,
    IntentionAction, IntentionPurpose, IconHint, AlertSeverity,
    SelectionOption,
    SelectionConstraints, TextInputConstraints, ConfirmationConstraints,
    AlertConstraints, ReviewConstraints, NavigationConstraints,
    ProgressConstraints, SubjectConstraints, SUBJECT_CONSTRAINTS_BY_ACTION,
    IntentionSubject, FlowContext, Intention,
)
from .factories import (
    create_selection_intention, create_text_input_intention,
    create_confirmation_intention, create_alert_intention,
    create_review_intention, create_progress_intention,
    is_selection_action, is_input_action, is_display_action,
    is_confirmation_action,
)
from .parsing import (
    ParseResult, parse_intention_dict, parse_intention_response,
    extract_and_parse_intention,
)

__all__ = [
    "MalformedIntention",
    "IntentionAction", "IntentionPurpose", "IconHint", "AlertSeverity",
    "SelectionOption",
    "SelectionConstraints", "TextInputConstraints", "ConfirmationConstraints",
    "AlertConstraints", "ReviewConstraints", "NavigationConstraints",
    "ProgressConstraints", "SubjectConstraints", "SUBJECT_CONSTRAINTS_BY_ACTION",
    "IntentionSubject", "FlowContext", "Intention",
    "create_selection_intention", "create_text_input_intention",
    "create_confirmation_intention", "create_alert_intention",
    "create_review_intention", "create_progress_intention",
    "is_selection_action", "is_input_action", "is_display_action",
    "is_confirmation_action",
    "ParseResult", "parse_intention_dict", "parse_intention_response",
    "extract_and_parse_intention",
]
