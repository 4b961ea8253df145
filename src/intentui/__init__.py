"""intentui - Intention Resolution Engine for adaptive user interfaces.

Say what the user needs to decide; the engine picks how it should be
manifested for the current device, accessibility needs and urgency.

    >>> from intentui import create_selection_intention, create_default_constraints, resolve
    >>> intention = create_selection_intention(
    ...     [{"value": "low", "label": "Low"}, {"value": "high", "label": "High"}],
    ...     "Severity",
    ... )
    >>> resolve(intention, create_default_constraints()).manifestation.pattern
    'radio-group'
"""

from intentui.domains.affinity import (
    AffinityRule,
    AffinityRuleSet,
    ConstraintCondition,
    DEFAULT_RULE,
    MULTI_SELECT_PATTERNS,
    ManifestationPattern,
    compute_confidence,
    find_matching_rules,
)
from intentui.domains.behavior import (
    BehaviorCatalog,
    BehaviorPrimitive,
    BehaviorTrait,
    UnknownTrait,
    action_to_traits,
    enhance_traits_for_constraints,
)
from intentui.domains.constraints import (
    ConstraintSet,
    apply_presets,
    calculate_constraint_specificity,
    create_default_constraints,
    with_compact_density,
    with_dark_theme,
    with_high_urgency,
    with_mobile_device,
    with_reduced_motion,
    with_screen_reader,
)
from intentui.domains.intention import (
    Intention,
    IntentionAction,
    IntentionPurpose,
    IntentionSubject,
    MalformedIntention,
    create_alert_intention,
    create_confirmation_intention,
    create_progress_intention,
    create_review_intention,
    create_selection_intention,
    create_text_input_intention,
    extract_and_parse_intention,
    parse_intention_response,
)
from intentui.domains.resolution import (
    RenderInstructionRegistry,
    Resolution,
    ResolutionEngine,
    UnresolvedPattern,
    build_render_instructions,
    resolve,
)

__all__ = [
    "AffinityRule", "AffinityRuleSet", "ConstraintCondition", "DEFAULT_RULE",
    "MULTI_SELECT_PATTERNS", "ManifestationPattern",
    "compute_confidence", "find_matching_rules",
    "BehaviorCatalog", "BehaviorPrimitive", "BehaviorTrait", "UnknownTrait",
    "action_to_traits", "enhance_traits_for_constraints",
    "ConstraintSet", "apply_presets", "calculate_constraint_specificity",
    "create_default_constraints", "with_compact_density", "with_dark_theme",
    "with_high_urgency", "with_mobile_device", "with_reduced_motion",
    "with_screen_reader",
    "Intention", "IntentionAction", "IntentionPurpose", "IntentionSubject",
    "MalformedIntention",
    "create_alert_intention", "create_confirmation_intention",
    "create_progress_intention", "create_review_intention",
    "create_selection_intention", "create_text_input_intention",
    "extract_and_parse_intention", "parse_intention_response",
    "RenderInstructionRegistry", "Resolution", "ResolutionEngine",
    "UnresolvedPattern", "build_render_instructions", "resolve",
]

__version__ = "0.3.0"
