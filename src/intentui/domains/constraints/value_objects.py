"""Constraint Domain Value Objects.

A ConstraintSet is a snapshot of the rendering context a decision is
made in. It has no behaviour beyond a few derived read-only properties;
all variation is expressed by building a new set (see modifiers.py).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Viewport(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


class ConnectionSpeed(str, Enum):
    SLOW = "slow"
    FAST = "fast"
    OFFLINE = "offline"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class WcagLevel(str, Enum):
    A = "A"
    AA = "AA"
    AAA = "AAA"


class Density(str, Enum):
    COMPACT = "compact"
    DEFAULT = "default"
    SPACIOUS = "spacious"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class JourneyPhase(str, Enum):
    ONBOARDING = "onboarding"
    ACTIVE = "active"
    CRITICAL = "critical"
    REVIEW = "review"


class Urgency(str, Enum):
    """Urgency of the current decision point, lowest first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def is_elevated(self) -> bool:
        return self in (Urgency.HIGH, Urgency.CRITICAL)


class AvailableSpace(str, Enum):
    INLINE = "inline"
    CONTAINED = "contained"
    FULLSCREEN = "fullscreen"


def _coerce(obj: Any, name: str, enum_cls: type) -> None:
    """Convert a raw string field to its enum on a frozen dataclass."""
    value = getattr(obj, name)
    try:
        object.__setattr__(obj, name, enum_cls(value))
    except ValueError as exc:
        raise ValueError(
            f"Invalid {name} {value!r}. Valid: {[m.value for m in enum_cls]}"
        ) from exc


@dataclass(frozen=True)
class DeviceConstraints:
    """Device capabilities.

    Attributes:
        viewport: Coarse viewport class
        has_touch: Primary pointer is touch
        has_mouse: A fine pointer is available
        has_keyboard: A physical keyboard is available
        width / height: Viewport dimensions in CSS pixels
    """
    viewport: Viewport = Viewport.DESKTOP
    has_touch: bool = False
    has_mouse: bool = True
    has_keyboard: bool = True
    width: int = 1024
    height: int = 768
    connection: ConnectionSpeed = ConnectionSpeed.FAST
    orientation: Orientation = Orientation.LANDSCAPE

    def __post_init__(self) -> None:
        _coerce(self, "viewport", Viewport)
        _coerce(self, "connection", ConnectionSpeed)
        _coerce(self, "orientation", Orientation)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def is_mobile(self) -> bool:
        return self.viewport is Viewport.MOBILE


@dataclass(frozen=True)
class AccessibilityConstraints:
    screen_reader: bool = False
    high_contrast: bool = False
    reduced_motion: bool = False
    large_text: bool = False
    voice_control: bool = False
    wcag_level: WcagLevel = WcagLevel.AA

    def __post_init__(self) -> None:
        _coerce(self, "wcag_level", WcagLevel)


@dataclass(frozen=True)
class DesignSystemConstraints:
    density: Density = Density.DEFAULT
    theme: Theme = Theme.LIGHT
    brand_variant: Optional[str] = None

    def __post_init__(self) -> None:
        _coerce(self, "density", Density)
        _coerce(self, "theme", Theme)


@dataclass(frozen=True)
class ContextConstraints:
    urgency: Urgency = Urgency.MEDIUM
    journey_phase: JourneyPhase = JourneyPhase.ACTIVE
    available_space: AvailableSpace = AvailableSpace.CONTAINED
    nesting_level: int = 0

    def __post_init__(self) -> None:
        _coerce(self, "urgency", Urgency)
        _coerce(self, "journey_phase", JourneyPhase)
        _coerce(self, "available_space", AvailableSpace)
        if self.nesting_level < 0:
            raise ValueError("nesting_level must be non-negative")


@dataclass(frozen=True)
class ConstraintSet:
    """Immutable snapshot of device, accessibility, design and context.

    The default instance is a desktop, mouse-and-keyboard, default-density,
    light-theme, medium-urgency context. Nothing here inspects the running
    environment.
    """
    device: DeviceConstraints = field(default_factory=DeviceConstraints)
    accessibility: AccessibilityConstraints = field(default_factory=AccessibilityConstraints)
    design_system: DesignSystemConstraints = field(default_factory=DesignSystemConstraints)
    context: ContextConstraints = field(default_factory=ContextConstraints)

    @property
    def viewport(self) -> Viewport:
        return self.device.viewport

    @property
    def density(self) -> Density:
        return self.design_system.density

    @property
    def urgency(self) -> Urgency:
        return self.context.urgency

    @property
    def screen_reader(self) -> bool:
        return self.accessibility.screen_reader

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Plain JSON-ready form with enum values flattened."""
        def _section(obj: Any) -> Dict[str, Any]:
            return {
                k: (v.value if isinstance(v, Enum) else v)
                for k, v in obj.__dict__.items()
            }

        return {
            "device": _section(self.device),
            "accessibility": _section(self.accessibility),
            "design_system": _section(self.design_system),
            "context": _section(self.context),
        }
