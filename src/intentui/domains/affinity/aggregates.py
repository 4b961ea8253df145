"""Affinity Domain Aggregate Root.

The AffinityRuleSet owns an immutable, ordered collection of rules and
implements matching, ordering and confidence. Replacing the catalog at
runtime means building a new rule set and swapping the reference; an
existing set is never mutated, so a resolution in flight always sees one
consistent catalog.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..behavior.value_objects import BehaviorTrait
from ..constraints.value_objects import ConstraintSet
from .rules import builtin_rules
from .value_objects import DEFAULT_RULE, AffinityRule

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 1.0


class AffinityRuleSet:
    """Ordered, read-only collection of affinity rules.

    Invariants:
        - Rule ids are unique
        - Order is fixed at construction (it is the last tie-breaker)
        - find_matching_rules never returns an empty list
    """

    def __init__(self, rules: Iterable[AffinityRule] = ()) -> None:
        rules = tuple(rules)
        seen = set()
        for r in rules:
            if r.id in seen:
                raise ValueError(f"Duplicate affinity rule id '{r.id}'")
            if r.id == DEFAULT_RULE.id:
                raise ValueError(f"Rule id '{DEFAULT_RULE.id}' is reserved")
            seen.add(r.id)
        self._rules: Tuple[AffinityRule, ...] = rules

    @classmethod
    def with_builtins(cls) -> "AffinityRuleSet":
        return cls(builtin_rules())

    # ── Collection protocol ──────────────────────────────────

    @property
    def rules(self) -> Tuple[AffinityRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[AffinityRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, rule_id: str) -> Optional[AffinityRule]:
        for r in self._rules:
            if r.id == rule_id:
                return r
        return None

    # ── Copy-on-write updates ────────────────────────────────

    def extended(self, rules: Iterable[AffinityRule]) -> "AffinityRuleSet":
        """New set with extra rules appended after the current ones."""
        return AffinityRuleSet(self._rules + tuple(rules))

    def replaced(self, rules: Iterable[AffinityRule]) -> "AffinityRuleSet":
        """New set in which rules with matching ids are swapped in place.

        Rules whose id is not present are appended.
        """
        incoming = {r.id: r for r in rules}
        merged = [incoming.pop(r.id, r) for r in self._rules]
        merged.extend(incoming.values())
        return AffinityRuleSet(merged)

    # ── Matching ─────────────────────────────────────────────

    def find_matching_rules(
        self,
        traits: Iterable[Union[BehaviorTrait, str]],
        constraints: ConstraintSet,
    ) -> List[AffinityRule]:
        """All rules that match, best first.

        Sort key: priority (desc), specificity (desc), declaration order
        (asc). When nothing matches the result is ``[DEFAULT_RULE]``.
        """
        present = frozenset(BehaviorTrait.coerce(t) for t in traits)
        matched = [
            (index, r) for index, r in enumerate(self._rules)
            if r.matches(present, constraints)
        ]
        if not matched:
            logger.debug(
                "No affinity rule matched traits %s, using default",
                sorted(t.value for t in present),
            )
            return [DEFAULT_RULE]
        matched.sort(key=lambda item: (-item[1].priority, -item[1].specificity, item[0]))
        return [r for _, r in matched]

    def find_best_rule(
        self,
        traits: Iterable[Union[BehaviorTrait, str]],
        constraints: ConstraintSet,
    ) -> AffinityRule:
        return self.find_matching_rules(traits, constraints)[0]


def compute_confidence(matches: Sequence[AffinityRule]) -> float:
    """Confidence of the winning rule.

    1.0 for a single match, otherwise 1/N for the N matches sharing the
    top priority, clamped to [0.3, 1.0].
    """
    if not matches:
        raise ValueError("compute_confidence needs at least one match")
    if len(matches) == 1:
        return MAX_CONFIDENCE
    top = matches[0].priority
    tied = sum(1 for r in matches if r.priority == top)
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, 1.0 / tied))


_BUILTIN_RULE_SET: Optional[AffinityRuleSet] = None


def get_builtin_rule_set() -> AffinityRuleSet:
    """Shared instance of the built-in rules (immutable, safe to share)."""
    global _BUILTIN_RULE_SET
    if _BUILTIN_RULE_SET is None:
        _BUILTIN_RULE_SET = AffinityRuleSet.with_builtins()
    return _BUILTIN_RULE_SET


def find_matching_rules(
    traits: Iterable[Union[BehaviorTrait, str]],
    constraints: ConstraintSet,
    rule_set: Optional[AffinityRuleSet] = None,
) -> List[AffinityRule]:
    """Module-level convenience over the built-in (or a given) rule set."""
    if rule_set is None:
        rule_set = get_builtin_rule_set()
    return rule_set.find_matching_rules(traits, constraints)
