"""Resolution Domain Service.

The ResolutionEngine turns an (Intention, ConstraintSet) pair into a
Resolution. It coordinates between:
- Trait Deriver (intention -> base traits -> context-enhanced traits)
- AffinityRuleSet (ranked matching rules)
- RenderInstructionRegistry (pattern -> render directives)
- BehaviorCatalog (trait names for the explanation)

The engine holds only read-only collaborators and performs no I/O, so
one instance can serve any number of callers concurrently.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Tuple

from ..affinity.aggregates import AffinityRuleSet, compute_confidence
from ..affinity.value_objects import DEFAULT_RULE, AffinityRule
from ..behavior.aggregates import BehaviorCatalog
from ..behavior.services import derive_base_traits, enhance_traits_for_constraints
from ..behavior.value_objects import BehaviorTrait
from ..constraints.modifiers import with_compact_density
from ..constraints.value_objects import ConstraintSet, Density, Urgency, Viewport
from ..intention.value_objects import Intention
from .events import AmbiguousResolution, DefaultRuleApplied, IntentionResolved
from .render import RenderInstructionRegistry
from .value_objects import Manifestation, Resolution, ResolutionReasoning

logger = logging.getLogger(__name__)


class EventPublisher(Protocol):
    """Protocol for publishing domain events."""
    def publish(self, event: object) -> None: ...


def dominant_constraints_for(constraints: ConstraintSet) -> Tuple[str, ...]:
    """Context tags that shaped the resolution, in a fixed order."""
    tags: List[str] = []
    if constraints.viewport is Viewport.MOBILE:
        tags.append("mobile-viewport")
    if constraints.device.has_touch:
        tags.append("touch-input")
    if constraints.accessibility.screen_reader:
        tags.append("screen-reader")
    if constraints.accessibility.reduced_motion:
        tags.append("reduced-motion")
    if constraints.urgency is Urgency.CRITICAL:
        tags.append("critical-urgency")
    elif constraints.urgency is Urgency.HIGH:
        tags.append("high-urgency")
    if constraints.density is Density.COMPACT:
        tags.append("compact-density")
    return tuple(tags)


def _format_priority(priority: float) -> str:
    return str(int(priority)) if float(priority).is_integer() else str(priority)


def build_explanation(
    intention: Intention,
    winner: AffinityRule,
    traits: Tuple[BehaviorTrait, ...],
    constraints: ConstraintSet,
    catalog: BehaviorCatalog,
) -> str:
    parts = [f'Intent: "{intention.action.value}" on "{intention.subject.label}"']
    if winner is DEFAULT_RULE:
        parts.append("No specific rule matched, using default pattern")
    else:
        parts.append(f'Matched rule: "{winner.name}" (priority {_format_priority(winner.priority)})')
    parts.append(f'Resolved to pattern: "{winner.pattern}"')
    parts.append(f"Traits: {', '.join(catalog.describe(traits))}")
    if constraints.viewport is Viewport.MOBILE:
        parts.append("Optimized for mobile viewport")
    if constraints.accessibility.screen_reader:
        parts.append("Enhanced for screen reader accessibility")
    return ". ".join(parts) + "."


def _distinct_patterns(matches: List[AffinityRule]) -> Tuple[str, ...]:
    seen = {}
    for r in matches:
        seen.setdefault(r.pattern, None)
    return tuple(seen)


@dataclass
class ResolutionEngine:
    """Resolves intentions into manifestations.

    Usage:

        engine = ResolutionEngine.with_builtins()
        resolution = engine.resolve(
            create_selection_intention(options, "Severity"),
            with_mobile_device(create_default_constraints()),
        )
        # resolution.manifestation.pattern == "touch-option-list"

    Hot reload: ``engine.with_rule_set(new_rules)`` returns a new engine;
    the running one keeps its catalog.
    """
    rule_set: AffinityRuleSet
    render_registry: RenderInstructionRegistry
    catalog: BehaviorCatalog
    event_publisher: Optional[EventPublisher] = None

    @classmethod
    def with_builtins(
        cls, event_publisher: Optional[EventPublisher] = None
    ) -> "ResolutionEngine":
        return cls(
            rule_set=AffinityRuleSet.with_builtins(),
            render_registry=RenderInstructionRegistry.with_builtins(),
            catalog=BehaviorCatalog.with_builtins(),
            event_publisher=event_publisher,
        )

    def with_rule_set(self, rule_set: AffinityRuleSet) -> "ResolutionEngine":
        return replace(self, rule_set=rule_set)

    def resolve(self, intention: Intention, constraints: ConstraintSet) -> Resolution:
        """Resolve one intention under one constraint set.

        Args:
            intention: A validated Intention
            constraints: The rendering context

        Returns:
            Resolution with pattern, traits, render directives and reasoning

        Raises:
            UnresolvedPattern: If the winning rule's pattern has no builder

        Resolution algorithm:
            1. Derive base traits from action, purpose and subject
            2. Enhance traits for the constraint set
            3. Rank matching rules (never empty; default rule as fallback)
            4. Take the first rule as winner
            5. Build render instructions for the winner's pattern
            6. Compute confidence and explanation
            7. Build alternative manifestations of the same pattern
        """
        base = derive_base_traits(intention)
        traits = enhance_traits_for_constraints(base, constraints)
        matches = self.rule_set.find_matching_rules(traits, constraints)
        winner = matches[0]

        render = self.render_registry.build(
            winner.pattern, traits, intention.subject, constraints
        )
        confidence = compute_confidence(matches)
        reasoning = ResolutionReasoning(
            explanation=build_explanation(intention, winner, traits, constraints, self.catalog),
            dominant_constraints=dominant_constraints_for(constraints),
            confidence=confidence,
            matched_rule_id=winner.id,
            considered_patterns=_distinct_patterns(matches),
        )
        resolution = Resolution(
            source_intention=intention,
            applied_constraints=constraints,
            manifestation=Manifestation(pattern=winner.pattern, traits=traits, render=render),
            reasoning=reasoning,
            alternatives=self._alternatives(winner.pattern, base, traits, intention, constraints),
        )
        logger.debug(
            "Resolved %s -> %s (rule=%s, confidence=%.2f)",
            intention.action.value, winner.pattern, winner.id, confidence,
        )
        self._emit(intention, resolution, matches, traits)
        return resolution

    def _alternatives(
        self,
        pattern: str,
        base: Tuple[BehaviorTrait, ...],
        traits: Tuple[BehaviorTrait, ...],
        intention: Intention,
        constraints: ConstraintSet,
    ) -> Tuple[Manifestation, ...]:
        """Variants of the winning pattern a renderer may offer instead.

        - compact: traits re-derived under compact density, unless the
          context is already compact
        - emphasized: the resolved traits plus emphasized, unless already
          present
        """
        variants: List[Manifestation] = []
        if constraints.density is not Density.COMPACT:
            compact = with_compact_density(constraints)
            compact_traits = enhance_traits_for_constraints(base, compact)
            variants.append(Manifestation(
                pattern=pattern,
                traits=compact_traits,
                render=self.render_registry.build(
                    pattern, compact_traits, intention.subject, compact
                ),
            ))
        if BehaviorTrait.EMPHASIZED not in traits:
            emphasized_traits = traits + (BehaviorTrait.EMPHASIZED,)
            variants.append(Manifestation(
                pattern=pattern,
                traits=emphasized_traits,
                render=self.render_registry.build(
                    pattern, emphasized_traits, intention.subject, constraints
                ),
            ))
        return tuple(variants)

    def _emit(
        self,
        intention: Intention,
        resolution: Resolution,
        matches: List[AffinityRule],
        traits: Tuple[BehaviorTrait, ...],
    ) -> None:
        if self.event_publisher is None:
            return
        reasoning = resolution.reasoning
        if matches[0] is DEFAULT_RULE:
            self._publish(DefaultRuleApplied(
                action=intention.action.value,
                traits=tuple(t.value for t in traits),
            ))
        if reasoning.is_ambiguous:
            top = matches[0].priority
            self._publish(AmbiguousResolution(
                action=intention.action.value,
                chosen_pattern=resolution.pattern,
                tied_patterns=tuple(r.pattern for r in matches if r.priority == top),
                confidence=reasoning.confidence,
            ))
        self._publish(IntentionResolved(
            action=intention.action.value,
            pattern=resolution.pattern,
            rule_id=reasoning.matched_rule_id,
            confidence=reasoning.confidence,
            dominant_constraints=reasoning.dominant_constraints,
        ))

    def _publish(self, event: object) -> None:
        """Publish a domain event if a publisher is configured."""
        if self.event_publisher is not None:
            self.event_publisher.publish(event)


_DEFAULT_ENGINE: Optional[ResolutionEngine] = None


def get_resolution_engine() -> ResolutionEngine:
    """Lazily built engine over the built-in catalogs."""
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = ResolutionEngine.with_builtins()
    return _DEFAULT_ENGINE


def resolve(intention: Intention, constraints: ConstraintSet) -> Resolution:
    """Resolve with the built-in rules, render builders and catalog."""
    return get_resolution_engine().resolve(intention, constraints)
