"""Resolution Domain Value Objects.

A Resolution is the engine's complete answer for one decision point:
the pattern to manifest, the traits it carries, toolkit-neutral render
directives, and the reasoning behind the choice. Everything is frozen and
contains no ids or timestamps, so equal inputs give equal resolutions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ..behavior.value_objects import BehaviorTrait
from ..constraints.value_objects import ConstraintSet
from ..intention.value_objects import Intention


class UnresolvedPattern(LookupError):
    """No render builder is registered for a pattern.

    Indicates a rule catalog that references a pattern nothing can render.
    """


def _freeze(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class RenderInstructions:
    """Generic presentation and accessibility directives.

    Attributes:
        class_names: Ordered opaque tags (pattern tag, then trait tags in
            catalog order)
        aria: ARIA attributes; ``role`` is always present, no value is None
        data_attributes: ``data-*`` attributes, all string valued
    """
    class_names: Tuple[str, ...]
    aria: Mapping[str, str]
    data_attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_names", tuple(self.class_names))
        if "role" not in self.aria:
            raise ValueError("RenderInstructions.aria must include a role")
        for source in (self.aria, self.data_attributes):
            empty = [k for k, v in source.items() if v is None]
            if empty:
                raise ValueError(f"Render attributes must not be None: {empty}")
        object.__setattr__(self, "aria", _freeze(self.aria))
        object.__setattr__(self, "data_attributes", _freeze(self.data_attributes))

    @property
    def role(self) -> str:
        return self.aria["role"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_names": list(self.class_names),
            "aria": dict(self.aria),
            "data_attributes": dict(self.data_attributes),
        }


@dataclass(frozen=True)
class Manifestation:
    pattern: str
    traits: Tuple[BehaviorTrait, ...]
    render: RenderInstructions

    def has_trait(self, trait: BehaviorTrait) -> bool:
        return BehaviorTrait(trait) in self.traits

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "traits": [t.value for t in self.traits],
            "render": self.render.to_dict(),
        }


@dataclass(frozen=True)
class ResolutionReasoning:
    """Why a pattern was chosen.

    Attributes:
        explanation: One human-readable paragraph
        dominant_constraints: Context tags that shaped the result
        confidence: In [0.3, 1.0]; 1.0 iff a single rule won outright
        matched_rule_id: Winning rule ("default" when none matched)
        considered_patterns: Distinct patterns of all matching rules, best first
    """
    explanation: str
    dominant_constraints: Tuple[str, ...]
    confidence: float
    matched_rule_id: str
    considered_patterns: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0.3 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence {self.confidence} outside [0.3, 1.0]")

    @property
    def is_ambiguous(self) -> bool:
        return self.confidence < 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "explanation": self.explanation,
            "dominant_constraints": list(self.dominant_constraints),
            "confidence": self.confidence,
            "matched_rule_id": self.matched_rule_id,
            "considered_patterns": list(self.considered_patterns),
        }


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolve call.

    Attributes:
        source_intention: The intention that was resolved
        applied_constraints: The context it was resolved under
        manifestation: The chosen pattern, traits and render directives
        reasoning: Why that pattern won
        alternatives: Other manifestations of the same pattern (compact,
            emphasized) in a fixed order
    """
    source_intention: Intention
    applied_constraints: ConstraintSet
    manifestation: Manifestation
    reasoning: ResolutionReasoning
    alternatives: Tuple[Manifestation, ...] = ()

    @property
    def pattern(self) -> str:
        return self.manifestation.pattern

    @property
    def confidence(self) -> float:
        return self.reasoning.confidence

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form, e.g. for MCP tool responses."""
        return {
            "source_intention": self.source_intention.to_dict(),
            "applied_constraints": self.applied_constraints.to_dict(),
            "manifestation": self.manifestation.to_dict(),
            "reasoning": self.reasoning.to_dict(),
            "alternatives": [m.to_dict() for m in self.alternatives],
        }
