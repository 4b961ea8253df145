"""Parsing of LLM-produced intention payloads.

An LLM asked to describe a decision point answers with JSON such as::

    {"action": "choose-one",
     "subject": {"type": "severity", "label": "Pick a severity",
                 "constraints": {"options": [{"value": "low", "label": "Low"}]}},
     "purpose": "request"}

The payload is validated with pydantic (enum fields are case-insensitive
via the shared kernel aliases) and converted into a domain Intention.
Parsing never raises for bad input: failures come back as a ParseResult
with an error message suitable for feeding back to the model.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..shared.kernel import (
    ActionLiteral,
    IconHintLiteral,
    PurposeLiteral,
    SeverityLiteral,
    format_validation_error,
)
from .value_objects import (
    SUBJECT_CONSTRAINTS_BY_ACTION,
    AlertConstraints,
    ConfirmationConstraints,
    FlowContext,
    Intention,
    IntentionAction,
    IntentionSubject,
    MalformedIntention,
    NavigationConstraints,
    ProgressConstraints,
    ReviewConstraints,
    SelectionConstraints,
    SelectionOption,
    TextInputConstraints,
)

logger = logging.getLogger(__name__)

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_BARE_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


# ============================================================
# Wire models
# ============================================================


class OptionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: str
    label: str
    description: Optional[str] = None
    disabled: bool = False


class ConstraintsPayload(BaseModel):
    """Flat constraint bag as emitted by the model.

    Only the fields relevant to the intention's action are used; the rest
    are ignored when the tagged variant is built.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    options: Optional[List[OptionPayload]] = None
    required: Optional[bool] = None
    min: Optional[int] = Field(default=None, alias="minLength")
    max: Optional[int] = Field(default=None, alias="maxLength")
    pattern: Optional[str] = None
    placeholder: Optional[str] = None
    urgent: bool = False
    destructive: bool = False
    severity: Optional[SeverityLiteral] = None
    dismissable: bool = False
    data: Any = None
    destination: Optional[str] = None
    determinate: bool = False


class SubjectPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str = Field(min_length=1)
    label: str = Field(min_length=1)
    description: Optional[str] = None
    icon_hint: Optional[IconHintLiteral] = Field(default=None, alias="iconHint")
    constraints: Optional[ConstraintsPayload] = None


class FlowPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    step: Optional[int] = None
    total: Optional[int] = None
    can_go_back: Optional[bool] = Field(default=None, alias="canGoBack")


class IntentionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    action: ActionLiteral
    subject: SubjectPayload
    purpose: PurposeLiteral
    flow: Optional[FlowPayload] = None
    display_message: Optional[str] = Field(default=None, alias="displayMessage")


# ============================================================
# Result
# ============================================================


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one payload.

    Attributes:
        success: True when an Intention was produced
        intention: The parsed intention (success only)
        error: Human readable error (failure only)
        raw: The decoded JSON, when decoding itself succeeded
        display_message: Optional free text the model attached
    """
    success: bool
    intention: Optional[Intention] = None
    error: Optional[str] = None
    raw: Any = None
    display_message: Optional[str] = None

    @classmethod
    def failure(cls, error: str, raw: Any = None) -> "ParseResult":
        return cls(success=False, error=error, raw=raw)


def _build_constraints(action: IntentionAction, payload: Optional[ConstraintsPayload]):
    """Pick the constraint variant for the action from the flat payload."""
    variant = SUBJECT_CONSTRAINTS_BY_ACTION[action]
    if payload is None:
        return None
    if variant is SelectionConstraints:
        options = [
            SelectionOption(
                value=o.value, label=o.label,
                description=o.description, disabled=o.disabled,
            )
            for o in payload.options or []
        ]
        return SelectionConstraints(
            options=tuple(options),
            required=True if payload.required is None else payload.required,
        )
    if variant is TextInputConstraints:
        return TextInputConstraints(
            required=bool(payload.required),
            max_length=payload.max,
            min_length=payload.min,
            placeholder=payload.placeholder,
            pattern=payload.pattern,
        )
    if variant is ConfirmationConstraints:
        return ConfirmationConstraints(urgent=payload.urgent, destructive=payload.destructive)
    if variant is AlertConstraints:
        return AlertConstraints(
            severity=payload.severity or "info", dismissable=payload.dismissable
        )
    if variant is ReviewConstraints:
        return ReviewConstraints(data=payload.data)
    if variant is NavigationConstraints:
        return NavigationConstraints(destination=payload.destination)
    return ProgressConstraints(determinate=payload.determinate)


def _build_intention(payload: IntentionPayload) -> Intention:
    action = IntentionAction(payload.action)
    subject = IntentionSubject(
        type=payload.subject.type,
        label=payload.subject.label,
        constraints=_build_constraints(action, payload.subject.constraints),
        description=payload.subject.description,
        icon_hint=payload.subject.icon_hint,
    )
    flow = None
    if payload.flow is not None:
        flow = FlowContext(
            id=payload.flow.id or "flow",
            sequence=payload.flow.step,
            total_steps=payload.flow.total,
            can_go_back=payload.flow.can_go_back,
        )
    return Intention(action=action, subject=subject, purpose=payload.purpose, flow=flow)


def parse_intention_dict(data: Any) -> ParseResult:
    """Validate an already-decoded payload."""
    if not isinstance(data, dict):
        return ParseResult.failure("Response must be a JSON object", raw=data)
    try:
        payload = IntentionPayload.model_validate(data)
    except ValidationError as exc:
        return ParseResult.failure(format_validation_error(exc), raw=data)
    try:
        intention = _build_intention(payload)
    except MalformedIntention as exc:
        return ParseResult.failure(str(exc), raw=data)
    return ParseResult(
        success=True,
        intention=intention,
        raw=data,
        display_message=payload.display_message,
    )


def parse_intention_response(json_string: str) -> ParseResult:
    """Parse and validate a JSON string into an Intention."""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as exc:
        return ParseResult.failure(f"Invalid JSON: {exc.msg}")
    return parse_intention_dict(data)


def extract_and_parse_intention(text: str) -> ParseResult:
    """Find an intention in mixed prose/JSON output and parse it.

    A fenced code block wins over a bare object.
    """
    match = _CODE_BLOCK_RE.search(text)
    if match:
        return parse_intention_response(match.group(1).strip())
    match = _BARE_OBJECT_RE.search(text)
    if match:
        return parse_intention_response(match.group(0))
    logger.debug("No JSON object found in %d chars of model output", len(text))
    return ParseResult.failure("No JSON object found in response")
