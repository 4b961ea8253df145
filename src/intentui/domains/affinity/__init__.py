"""Affinity Bounded Context.

Declarative rules mapping trait sets (plus context conditions) onto
manifestation patterns, and the matcher that ranks them.
"""
from .value_objects import (
    ManifestationPattern, MULTI_SELECT_PATTERNS,
    ConstraintCondition, ConstraintPredicate, AffinityRule, DEFAULT_RULE, rule,
)
from .rules import builtin_rules
from .aggregates import (
    AffinityRuleSet, MIN_CONFIDENCE, MAX_CONFIDENCE,
    compute_confidence, find_matching_rules, get_builtin_rule_set,
)

__all__ = [
    "ManifestationPattern", "MULTI_SELECT_PATTERNS",
    "ConstraintCondition", "ConstraintPredicate", "AffinityRule",
    "DEFAULT_RULE", "rule",
    "builtin_rules",
    "AffinityRuleSet", "MIN_CONFIDENCE", "MAX_CONFIDENCE",
    "compute_confidence", "find_matching_rules", "get_builtin_rule_set",
]
