"""Intention Domain Value Objects.

An Intention states *what* the user wants to do, never *how* it should
look. All types here are immutable and validated on construction, so an
Intention that exists is always well formed.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, Union


class MalformedIntention(ValueError):
    """Raised when an Intention (or one of its parts) fails validation."""


class IntentionAction(str, Enum):
    """What the user is being asked to do."""
    CHOOSE_ONE = "choose-one"
    CHOOSE_MANY = "choose-many"
    PROVIDE_TEXT = "provide-text"
    PROVIDE_DATA = "provide-data"
    CONFIRM = "confirm"
    ACKNOWLEDGE = "acknowledge"
    REVIEW = "review"
    NAVIGATE = "navigate"
    WAIT = "wait"
    ALERT = "alert"


class IntentionPurpose(str, Enum):
    """Why the interaction exists from the user's point of view."""
    INFORM = "inform"
    REQUEST = "request"
    CONFIRM = "confirm"
    ALERT = "alert"
    PROGRESS = "progress"


class IconHint(str, Enum):
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    QUESTION = "question"
    ACTION = "action"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class SelectionOption:
    """One choice offered by a selection intention.

    Attributes:
        value: Machine value reported back when chosen
        label: Human readable text
        description: Optional secondary text
        disabled: Option is shown but cannot be chosen
    """
    value: str
    label: str
    description: Optional[str] = None
    disabled: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise MalformedIntention("SelectionOption.value must be a non-empty string")
        if not isinstance(self.label, str) or not self.label.strip():
            raise MalformedIntention(
                f"SelectionOption '{self.value}' must have a non-empty label"
            )

    @classmethod
    def coerce(cls, raw: Union["SelectionOption", Mapping[str, Any]]) -> "SelectionOption":
        """Build an option from a mapping with value/label keys."""
        if isinstance(raw, SelectionOption):
            return raw
        if not isinstance(raw, Mapping):
            raise MalformedIntention(
                f"Selection option must be a mapping or SelectionOption, got {type(raw).__name__}"
            )
        return cls(
            value=raw.get("value", ""),
            label=raw.get("label", ""),
            description=raw.get("description"),
            disabled=bool(raw.get("disabled", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value, "label": self.label}
        if self.description:
            data["description"] = self.description
        if self.disabled:
            data["disabled"] = True
        return data


# ============================================================
# Subject constraints: one variant per action family.
# ============================================================


@dataclass(frozen=True)
class SelectionConstraints:
    """Constraints for choose-one / choose-many.

    Invariants:
        - At least one option
        - Option values are unique
    """
    options: Tuple[SelectionOption, ...]
    required: bool = True

    kind: ClassVar[str] = "selection"

    def __post_init__(self) -> None:
        # Accept any iterable of options but store a tuple.
        object.__setattr__(
            self, "options", tuple(SelectionOption.coerce(o) for o in self.options)
        )
        if not self.options:
            raise MalformedIntention("Selection requires at least one option")
        values = [o.value for o in self.options]
        if len(set(values)) != len(values):
            raise MalformedIntention(f"Selection option values must be unique: {values}")

    @property
    def option_count(self) -> int:
        return len(self.options)

    @property
    def has_disabled_options(self) -> bool:
        return any(o.disabled for o in self.options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "options": [o.to_dict() for o in self.options],
            "required": self.required,
        }


@dataclass(frozen=True)
class TextInputConstraints:
    """Constraints for provide-text / provide-data."""
    required: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    placeholder: Optional[str] = None
    pattern: Optional[str] = None

    kind: ClassVar[str] = "text"

    def __post_init__(self) -> None:
        for name in ("max_length", "min_length"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or value < 0):
                raise MalformedIntention(f"{name} must be a non-negative integer, got {value!r}")
        if (
            self.max_length is not None
            and self.min_length is not None
            and self.min_length > self.max_length
        ):
            raise MalformedIntention(
                f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
            )
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise MalformedIntention(f"Invalid input pattern {self.pattern!r}: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "required": self.required}
        for name in ("max_length", "min_length", "placeholder", "pattern"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


@dataclass(frozen=True)
class ConfirmationConstraints:
    urgent: bool = False
    destructive: bool = False

    kind: ClassVar[str] = "confirmation"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "urgent": self.urgent, "destructive": self.destructive}


@dataclass(frozen=True)
class AlertConstraints:
    severity: AlertSeverity = AlertSeverity.INFO
    dismissable: bool = False

    kind: ClassVar[str] = "alert"

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "severity", AlertSeverity(self.severity))
        except ValueError as exc:
            raise MalformedIntention(
                f"Unknown alert severity {self.severity!r}. "
                f"Valid: {[s.value for s in AlertSeverity]}"
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "severity": self.severity.value,
            "dismissable": self.dismissable,
        }


def _freeze(value: Any) -> Any:
    """Read-only deep copy: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, (tuple, frozenset)):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class ReviewConstraints:
    """Read-only data presented for review. Opaque to the engine.

    ``data`` is deep-copied into read-only containers and left out of the
    hash, so review intentions stay hashable whatever they carry.
    """
    data: Any = field(default=None, hash=False)

    kind: ClassVar[str] = "review"

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _freeze(self.data))

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "data": _thaw(self.data)}


@dataclass(frozen=True)
class NavigationConstraints:
    destination: Optional[str] = None

    kind: ClassVar[str] = "navigation"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        if self.destination:
            data["destination"] = self.destination
        return data


@dataclass(frozen=True)
class ProgressConstraints:
    determinate: bool = False

    kind: ClassVar[str] = "progress"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "determinate": self.determinate}


SubjectConstraints = Union[
    SelectionConstraints,
    TextInputConstraints,
    ConfirmationConstraints,
    AlertConstraints,
    ReviewConstraints,
    NavigationConstraints,
    ProgressConstraints,
]

SUBJECT_CONSTRAINTS_BY_ACTION: Dict[IntentionAction, Type[Any]] = {
    IntentionAction.CHOOSE_ONE: SelectionConstraints,
    IntentionAction.CHOOSE_MANY: SelectionConstraints,
    IntentionAction.PROVIDE_TEXT: TextInputConstraints,
    IntentionAction.PROVIDE_DATA: TextInputConstraints,
    IntentionAction.CONFIRM: ConfirmationConstraints,
    IntentionAction.ACKNOWLEDGE: AlertConstraints,
    IntentionAction.ALERT: AlertConstraints,
    IntentionAction.REVIEW: ReviewConstraints,
    IntentionAction.NAVIGATE: NavigationConstraints,
    IntentionAction.WAIT: ProgressConstraints,
}

# Actions whose subject is meaningless without constraints.
_CONSTRAINTS_REQUIRED = frozenset({
    IntentionAction.CHOOSE_ONE,
    IntentionAction.CHOOSE_MANY,
})


@dataclass(frozen=True)
class IntentionSubject:
    """The thing the intention is about.

    Attributes:
        type: Domain noun (e.g. "severity", "account", "text")
        label: Human readable label; drives aria-label downstream
        constraints: Action-specific constraint variant
        description: Optional longer text
        icon_hint: Optional semantic icon hint
    """
    type: str
    label: str
    constraints: Optional[SubjectConstraints] = None
    description: Optional[str] = None
    icon_hint: Optional[IconHint] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type.strip():
            raise MalformedIntention("Intention subject requires a non-empty type")
        if not isinstance(self.label, str) or not self.label.strip():
            raise MalformedIntention("Intention subject requires a non-empty label")
        if self.icon_hint is not None:
            try:
                object.__setattr__(self, "icon_hint", IconHint(self.icon_hint))
            except ValueError as exc:
                raise MalformedIntention(f"Unknown icon hint {self.icon_hint!r}") from exc

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "label": self.label}
        if self.constraints is not None:
            data["constraints"] = self.constraints.to_dict()
        if self.description:
            data["description"] = self.description
        if self.icon_hint is not None:
            data["icon_hint"] = self.icon_hint.value
        return data


@dataclass(frozen=True)
class FlowContext:
    """Position of an intention inside a multi-step flow."""
    id: str
    parent_id: Optional[str] = None
    sequence: Optional[int] = None
    total_steps: Optional[int] = None
    can_go_back: Optional[bool] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise MalformedIntention("FlowContext.id must not be empty")
        if self.sequence is not None and self.sequence < 0:
            raise MalformedIntention("FlowContext.sequence must be non-negative")
        if (
            self.sequence is not None
            and self.total_steps is not None
            and self.sequence >= self.total_steps
        ):
            raise MalformedIntention(
                f"FlowContext.sequence {self.sequence} outside total_steps {self.total_steps}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class Intention:
    """An abstract statement of user intent.

    Invariants:
        - action and purpose are known enum members
        - subject.constraints, when present, is the variant the action expects
        - selection actions always carry SelectionConstraints

    Examples:
        >>> Intention(
        ...     action=IntentionAction.CONFIRM,
        ...     subject=IntentionSubject(type="action", label="Delete Account"),
        ...     purpose=IntentionPurpose.CONFIRM,
        ... )
    """
    action: IntentionAction
    subject: IntentionSubject
    purpose: IntentionPurpose
    flow: Optional[FlowContext] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "action", IntentionAction(self.action))
        except ValueError as exc:
            raise MalformedIntention(
                f"Unknown intention action {self.action!r}. "
                f"Valid: {[a.value for a in IntentionAction]}"
            ) from exc
        try:
            object.__setattr__(self, "purpose", IntentionPurpose(self.purpose))
        except ValueError as exc:
            raise MalformedIntention(
                f"Unknown intention purpose {self.purpose!r}. "
                f"Valid: {[p.value for p in IntentionPurpose]}"
            ) from exc
        if not isinstance(self.subject, IntentionSubject):
            raise MalformedIntention("Intention.subject must be an IntentionSubject")

        expected = SUBJECT_CONSTRAINTS_BY_ACTION[self.action]
        constraints = self.subject.constraints
        if constraints is None:
            if self.action in _CONSTRAINTS_REQUIRED:
                raise MalformedIntention(
                    f"Action '{self.action.value}' requires {expected.__name__}"
                )
        elif not isinstance(constraints, expected):
            raise MalformedIntention(
                f"Action '{self.action.value}' expects {expected.__name__}, "
                f"got {type(constraints).__name__}"
            )

    @property
    def is_multi_select(self) -> bool:
        return self.action is IntentionAction.CHOOSE_MANY

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "action": self.action.value,
            "subject": self.subject.to_dict(),
            "purpose": self.purpose.value,
        }
        if self.flow is not None:
            data["flow"] = self.flow.to_dict()
        return data
