"""Resolution Bounded Context.

Combines trait derivation, rule matching and render building into a
single pure ``resolve(intention, constraints)`` call.
"""
from .value_objects import (
    UnresolvedPattern, RenderInstructions, Manifestation,
    ResolutionReasoning, Resolution,
)
from .render import (
    RenderBuilder, PatternTemplate, RenderInstructionRegistry,
    build_render_instructions, class_names_for, get_builtin_render_registry,
)
from .services import (
    EventPublisher, ResolutionEngine,
    build_explanation, dominant_constraints_for,
    get_resolution_engine, resolve,
)
from .events import IntentionResolved, DefaultRuleApplied, AmbiguousResolution

__all__ = [
    "UnresolvedPattern", "RenderInstructions", "Manifestation",
    "ResolutionReasoning", "Resolution",
    "RenderBuilder", "PatternTemplate", "RenderInstructionRegistry",
    "build_render_instructions", "class_names_for",
    "get_builtin_render_registry",
    "EventPublisher", "ResolutionEngine",
    "build_explanation", "dominant_constraints_for",
    "get_resolution_engine", "resolve",
    "IntentionResolved", "DefaultRuleApplied", "AmbiguousResolution",
]
