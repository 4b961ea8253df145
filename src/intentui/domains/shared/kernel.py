"""Shared Kernel - wire-level types shared across bounded contexts.

These aliases are used by the inbound payload models (LLM responses,
MCP tool arguments). They are kept here so that the intention and
constraints contexts agree on the accepted vocabulary without importing
each other's value objects.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, get_args

from pydantic import BeforeValidator, ValidationError


# ============================================================
# Literal type aliases with BeforeValidator for case-insensitive
# normalization.  Produces flat {"enum": [...]} in JSON Schema
# while accepting wrong-case input at runtime.
# ============================================================


def _normalize_str(v: Any) -> Any:
    """Normalize string input: strip whitespace, lowercase."""
    return v.strip().lower() if isinstance(v, str) else v


def _normalize_token(v: Any) -> Any:
    """Normalize and accept snake_case spellings of kebab-case tokens."""
    v = _normalize_str(v)
    return v.replace("_", "-") if isinstance(v, str) else v


def _normalize_upper(v: Any) -> Any:
    """Normalize string input: strip whitespace, uppercase."""
    return v.strip().upper() if isinstance(v, str) else v


# ── Intention vocabulary ──────────────────────────────────────

ActionLiteral = Annotated[
    Literal[
        "choose-one", "choose-many",
        "provide-text", "provide-data",
        "confirm", "acknowledge", "review",
        "navigate", "wait", "alert",
    ],
    BeforeValidator(_normalize_token),
]

PurposeLiteral = Annotated[
    Literal["inform", "request", "confirm", "alert", "progress"],
    BeforeValidator(_normalize_str),
]

IconHintLiteral = Annotated[
    Literal["warning", "info", "success", "error", "question", "action"],
    BeforeValidator(_normalize_str),
]

SeverityLiteral = Annotated[
    Literal["info", "warning", "error", "success"],
    BeforeValidator(_normalize_str),
]

# ── Constraint presets ────────────────────────────────────────

ConstraintPreset = Annotated[
    Literal[
        "mobile", "screen-reader", "high-urgency",
        "compact", "dark", "reduced-motion",
    ],
    BeforeValidator(_normalize_token),
]

# ── Constraint override fields ────────────────────────────────

ViewportLiteral = Annotated[
    Literal["mobile", "tablet", "desktop"],
    BeforeValidator(_normalize_str),
]

ConnectionLiteral = Annotated[
    Literal["slow", "fast", "offline"],
    BeforeValidator(_normalize_str),
]

OrientationLiteral = Annotated[
    Literal["portrait", "landscape"],
    BeforeValidator(_normalize_str),
]

WcagLiteral = Annotated[
    Literal["A", "AA", "AAA"],
    BeforeValidator(_normalize_upper),
]

DensityLiteral = Annotated[
    Literal["compact", "default", "spacious"],
    BeforeValidator(_normalize_str),
]

ThemeLiteral = Annotated[
    Literal["light", "dark"],
    BeforeValidator(_normalize_str),
]

UrgencyLiteral = Annotated[
    Literal["low", "medium", "high", "critical"],
    BeforeValidator(_normalize_str),
]

JourneyPhaseLiteral = Annotated[
    Literal["onboarding", "active", "critical", "review"],
    BeforeValidator(_normalize_str),
]

AvailableSpaceLiteral = Annotated[
    Literal["inline", "contained", "fullscreen"],
    BeforeValidator(_normalize_str),
]


def format_validation_error(exc: ValidationError) -> str:
    """First pydantic error as "dotted.location: message"."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "payload"
    return f"{location}: {first['msg']}"


def _literal_values(alias: Any) -> tuple:
    """Return the allowed values of an Annotated[Literal[...], ...] alias."""
    return get_args(get_args(alias)[0])


VALID_ACTIONS = _literal_values(ActionLiteral)
VALID_PURPOSES = _literal_values(PurposeLiteral)
VALID_PRESETS = _literal_values(ConstraintPreset)
