"""Unit tests for AffinityRule, ConstraintCondition and AffinityRuleSet.

Tests cover: rule validation, matching semantics, ordering and
tie-breaking, default fallback, confidence, copy-on-write updates,
built-in catalog coverage.

Run with: uv run pytest tests/unit/test_affinity_rule_set.py -v
"""

__test__ = True

import math

import pytest

from intentui.domains.affinity import (
    DEFAULT_RULE,
    MULTI_SELECT_PATTERNS,
    AffinityRule,
    AffinityRuleSet,
    ConstraintCondition,
    ManifestationPattern,
    builtin_rules,
    compute_confidence,
    find_matching_rules,
    get_builtin_rule_set,
    rule,
)
from intentui.domains.behavior import BehaviorTrait, UnknownTrait
from intentui.domains.constraints import (
    Density,
    Urgency,
    Viewport,
    with_compact_density,
    with_high_urgency,
    with_mobile_device,
    with_screen_reader,
)

T = BehaviorTrait


# =============================================================================
# AffinityRule
# =============================================================================


class TestAffinityRule:

    def test_pattern_enum_stored_as_string(self):
        r = rule("r", "R", ManifestationPattern.RADIO_GROUP, requires={T.SELECTABLE})
        assert r.pattern == "radio-group"
        assert type(r.pattern) is str

    def test_custom_pattern_allowed(self):
        r = rule("r", "R", "segmented-control", requires={T.SELECTABLE})
        assert r.pattern == "segmented-control"

    def test_traits_coerced(self):
        r = AffinityRule(id="r", name="R", pattern="p", required_traits={"selectable"})
        assert r.required_traits == frozenset({T.SELECTABLE})

    def test_unknown_trait(self):
        with pytest.raises(UnknownTrait):
            AffinityRule(id="r", name="R", pattern="p", required_traits={"sparkly"})

    def test_empty_id_or_pattern(self):
        with pytest.raises(ValueError):
            AffinityRule(id="", name="R", pattern="p")
        with pytest.raises(ValueError):
            AffinityRule(id="r", name="R", pattern="")

    def test_required_and_excluded_overlap(self):
        with pytest.raises(ValueError, match="both requires and excludes"):
            rule("r", "R", "p", requires={T.SELECTABLE}, excludes={T.SELECTABLE})

    def test_specificity(self):
        assert rule("r", "R", "p", requires={T.SELECTABLE, T.FOCUSABLE}).specificity == 2

    def test_matches(self, default_constraints):
        r = rule("r", "R", "p", requires={T.SELECTABLE}, excludes={T.TOGGLEABLE})
        assert r.matches(frozenset({T.SELECTABLE, T.FOCUSABLE}), default_constraints)
        assert not r.matches(frozenset({T.SELECTABLE, T.TOGGLEABLE}), default_constraints)
        assert not r.matches(frozenset({T.FOCUSABLE}), default_constraints)

    def test_matches_checks_predicate(self, default_constraints):
        r = rule("r", "R", "p", requires={T.SELECTABLE}, when=lambda c: c.screen_reader)
        traits = frozenset({T.SELECTABLE})
        assert not r.matches(traits, default_constraints)
        assert r.matches(traits, with_screen_reader(default_constraints))

    def test_to_dict(self):
        r = rule(
            "r", "R", "p", requires={T.SELECTABLE, T.FOCUSABLE}, excludes={T.TOGGLEABLE},
            when=ConstraintCondition(density=Density.COMPACT), priority=12,
        )
        assert r.to_dict() == {
            "id": "r",
            "name": "R",
            "pattern": "p",
            "required_traits": ["focusable", "selectable"],
            "excluded_traits": ["toggleable"],
            "condition": "density=compact",
            "priority": 12,
        }

    def test_to_dict_named_predicate(self):
        def on_tablet(c):
            return c.viewport is Viewport.TABLET

        assert rule("r", "R", "p", requires=(), when=on_tablet).to_dict()["condition"] == "on_tablet"

    def test_default_rule(self):
        assert DEFAULT_RULE.pattern == "generic"
        assert math.isinf(DEFAULT_RULE.priority) and DEFAULT_RULE.priority < 0
        assert DEFAULT_RULE.to_dict()["priority"] is None


class TestConstraintCondition:

    def test_empty_matches_everything(self, default_constraints):
        assert ConstraintCondition()(default_constraints)
        assert ConstraintCondition().describe() == "any"

    def test_viewports(self, default_constraints):
        cond = ConstraintCondition(viewports=frozenset({Viewport.MOBILE}))
        assert not cond(default_constraints)
        assert cond(with_mobile_device(default_constraints))

    def test_urgency(self, default_constraints):
        cond = ConstraintCondition(urgency=frozenset({Urgency.LOW, Urgency.MEDIUM}))
        assert cond(default_constraints)
        assert not cond(with_high_urgency(default_constraints))

    def test_all_fields_must_hold(self, default_constraints):
        cond = ConstraintCondition(screen_reader=True, density=Density.COMPACT)
        assert not cond(with_screen_reader(default_constraints))
        assert cond(with_compact_density(with_screen_reader(default_constraints)))

    def test_describe(self):
        cond = ConstraintCondition(
            viewports=frozenset({Viewport.TABLET, Viewport.DESKTOP}), screen_reader=True,
        )
        assert cond.describe() == "viewport in desktop/tablet, screen_reader=True"


# =============================================================================
# AffinityRuleSet
# =============================================================================


class TestRuleSetConstruction:

    def test_duplicate_ids(self):
        r = rule("r", "R", "p", requires=())
        with pytest.raises(ValueError, match="Duplicate"):
            AffinityRuleSet([r, r])

    def test_reserved_default_id(self):
        with pytest.raises(ValueError, match="reserved"):
            AffinityRuleSet([rule("default", "D", "p", requires=())])

    def test_collection_protocol(self):
        rules = [rule("a", "A", "p", requires=()), rule("b", "B", "q", requires=())]
        rs = AffinityRuleSet(rules)
        assert len(rs) == 2
        assert [r.id for r in rs] == ["a", "b"]
        assert rs.get("b").pattern == "q"
        assert rs.get("missing") is None


class TestFindMatchingRules:

    def test_priority_descending(self, default_constraints):
        rs = AffinityRuleSet([
            rule("low", "Low", "p-low", requires={T.SELECTABLE}, priority=1),
            rule("high", "High", "p-high", requires={T.SELECTABLE}, priority=9),
        ])
        assert [r.id for r in rs.find_matching_rules([T.SELECTABLE], default_constraints)] == [
            "high", "low",
        ]

    def test_specificity_breaks_priority_ties(self, default_constraints):
        rs = AffinityRuleSet([
            rule("broad", "Broad", "p1", requires={T.SELECTABLE}, priority=5),
            rule("narrow", "Narrow", "p2", requires={T.SELECTABLE, T.FOCUSABLE}, priority=5),
        ])
        best = rs.find_best_rule([T.SELECTABLE, T.FOCUSABLE], default_constraints)
        assert best.id == "narrow"

    def test_declaration_order_breaks_remaining_ties(self, default_constraints):
        rs = AffinityRuleSet([
            rule("first", "First", "p1", requires={T.SELECTABLE}, priority=5),
            rule("second", "Second", "p2", requires={T.SELECTABLE}, priority=5),
        ])
        assert rs.find_best_rule(["selectable"], default_constraints).id == "first"

    def test_non_matching_rules_omitted(self, default_constraints):
        rs = AffinityRuleSet([
            rule("a", "A", "p1", requires={T.SELECTABLE}),
            rule("b", "B", "p2", requires={T.EDITABLE}),
        ])
        assert [r.id for r in rs.find_matching_rules([T.SELECTABLE], default_constraints)] == ["a"]

    def test_default_when_nothing_matches(self, default_constraints):
        rs = AffinityRuleSet([rule("a", "A", "p", requires={T.EDITABLE})])
        assert rs.find_matching_rules([T.SELECTABLE], default_constraints) == [DEFAULT_RULE]

    def test_empty_rule_set_returns_default(self, default_constraints):
        assert AffinityRuleSet().find_matching_rules([], default_constraints) == [DEFAULT_RULE]

    def test_module_level_uses_builtins(self, default_constraints):
        traits = [T.SELECTABLE, T.FOCUSABLE, T.HOVERABLE]
        assert find_matching_rules(traits, default_constraints)[0].id == "single-select-radio"

    def test_module_level_accepts_empty_rule_set(self, default_constraints):
        assert find_matching_rules(
            [T.SELECTABLE], default_constraints, rule_set=AffinityRuleSet(),
        ) == [DEFAULT_RULE]

    def test_deterministic(self, default_constraints):
        rs = get_builtin_rule_set()
        traits = [T.DISPLAYABLE, T.DISMISSABLE, T.EMPHASIZED, T.MODAL_BLOCKING]
        first = rs.find_matching_rules(traits, default_constraints)
        for _ in range(5):
            assert rs.find_matching_rules(traits, default_constraints) == first


class TestCopyOnWrite:

    def test_extended(self):
        base = AffinityRuleSet([rule("a", "A", "p", requires=())])
        bigger = base.extended([rule("b", "B", "q", requires=())])
        assert len(base) == 1
        assert [r.id for r in bigger] == ["a", "b"]

    def test_extended_rejects_duplicate(self):
        base = AffinityRuleSet([rule("a", "A", "p", requires=())])
        with pytest.raises(ValueError):
            base.extended([rule("a", "A2", "q", requires=())])

    def test_replaced_keeps_position(self):
        base = AffinityRuleSet([
            rule("a", "A", "p", requires=()), rule("b", "B", "q", requires=()),
        ])
        updated = base.replaced([rule("a", "A2", "p2", requires=()), rule("c", "C", "r", requires=())])
        assert [r.id for r in updated] == ["a", "b", "c"]
        assert updated.get("a").pattern == "p2"
        assert base.get("a").pattern == "p"


# =============================================================================
# Confidence
# =============================================================================


class TestComputeConfidence:

    def test_single_match(self):
        assert compute_confidence([rule("a", "A", "p", requires=(), priority=3)]) == 1.0

    def test_default_alone(self):
        assert compute_confidence([DEFAULT_RULE]) == 1.0

    def test_unique_top(self):
        matches = [
            rule("a", "A", "p", requires=(), priority=9),
            rule("b", "B", "q", requires=(), priority=1),
        ]
        assert compute_confidence(matches) == 1.0

    def test_two_way_tie(self):
        matches = [
            rule("a", "A", "p", requires=(), priority=5),
            rule("b", "B", "q", requires=(), priority=5),
            rule("c", "C", "r", requires=(), priority=1),
        ]
        assert compute_confidence(matches) == pytest.approx(0.5)

    @pytest.mark.parametrize("n", [4, 7])
    def test_clamped_to_minimum(self, n):
        matches = [rule(f"r{i}", "R", "p", requires=(), priority=5) for i in range(n)]
        assert compute_confidence(matches) == pytest.approx(0.3)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            compute_confidence([])


# =============================================================================
# Built-in catalog
# =============================================================================


class TestBuiltinRules:

    def test_count_and_unique_ids(self):
        rules = builtin_rules()
        assert len(rules) == 20
        assert len({r.id for r in rules}) == 20

    def test_every_pattern_except_generic_is_produced(self):
        produced = {r.pattern for r in builtin_rules()}
        expected = {p.value for p in ManifestationPattern} - {"generic"}
        assert produced == expected

    def test_single_select_rules_exclude_toggleable(self):
        for r in builtin_rules():
            if r.pattern in MULTI_SELECT_PATTERNS:
                assert T.TOGGLEABLE in r.required_traits
            elif T.SELECTABLE in r.required_traits:
                assert T.TOGGLEABLE in r.excluded_traits, r.id

    def test_multi_select_patterns(self):
        assert "checkbox-group" in MULTI_SELECT_PATTERNS
        assert "radio-group" not in MULTI_SELECT_PATTERNS
        assert len(MULTI_SELECT_PATTERNS) == 5

    def test_shared_instance(self):
        assert get_builtin_rule_set() is get_builtin_rule_set()

    def test_info_display_exclusions(self):
        info = get_builtin_rule_set().get("info-display")
        assert info.excluded_traits == frozenset({T.EDITABLE, T.DISMISSABLE, T.LOADABLE})

    def test_touch_review_still_reaches_info_region(self, default_constraints):
        # touch enhancement adds clickable; the info region must tolerate it
        mobile = with_mobile_device(default_constraints)
        traits = [T.DISPLAYABLE, T.CLICKABLE, T.LARGE_TARGET, T.SINGLE_COLUMN]
        assert find_matching_rules(traits, mobile)[0].id == "info-display"
