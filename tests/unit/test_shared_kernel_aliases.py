"""Unit tests for the shared-kernel Literal aliases.

Validates that each alias:
  1. Produces JSON Schema with "enum" values
  2. Normalizes mixed-case / whitespace input (and snake_case for tokens)
  3. Rejects invalid values with ValidationError

Run with: uv run pytest tests/unit/test_shared_kernel_aliases.py -v
"""

from __future__ import annotations

__test__ = True

import pytest
from pydantic import TypeAdapter, ValidationError

from intentui.domains.intention import IntentionAction, IntentionPurpose
from intentui.domains.constraints import PRESETS
from intentui.domains.shared.kernel import (
    VALID_ACTIONS,
    VALID_PRESETS,
    VALID_PURPOSES,
    ActionLiteral,
    ConstraintPreset,
    IconHintLiteral,
    PurposeLiteral,
    SeverityLiteral,
)


# ============================================================
# 1. Schema Generation Tests
# ============================================================


class TestSchemaGeneration:

    @pytest.mark.parametrize(
        "alias, expected",
        [
            pytest.param(ActionLiteral, list(VALID_ACTIONS), id="action"),
            pytest.param(PurposeLiteral, list(VALID_PURPOSES), id="purpose"),
            pytest.param(ConstraintPreset, list(VALID_PRESETS), id="preset"),
            pytest.param(SeverityLiteral, ["info", "warning", "error", "success"], id="severity"),
        ],
    )
    def test_schema_has_enum(self, alias, expected):
        schema = TypeAdapter(alias).json_schema()
        assert schema["enum"] == expected


# ============================================================
# 2. Vocabulary agrees with the domain enums
# ============================================================


class TestVocabularyAlignment:

    def test_actions_match_enum(self):
        assert set(VALID_ACTIONS) == {a.value for a in IntentionAction}

    def test_purposes_match_enum(self):
        assert set(VALID_PURPOSES) == {p.value for p in IntentionPurpose}

    def test_presets_match_modifiers(self):
        assert set(VALID_PRESETS) == set(PRESETS)


# ============================================================
# 3. Normalization and rejection
# ============================================================


class TestNormalization:

    @pytest.mark.parametrize("raw", ["Choose-One", "  choose-one ", "CHOOSE_ONE", "choose_one"])
    def test_action_normalized(self, raw):
        assert TypeAdapter(ActionLiteral).validate_python(raw) == "choose-one"

    def test_purpose_normalized(self):
        assert TypeAdapter(PurposeLiteral).validate_python(" Request ") == "request"

    def test_preset_snake_case(self):
        assert TypeAdapter(ConstraintPreset).validate_python("screen_reader") == "screen-reader"

    def test_icon_hint_normalized(self):
        assert TypeAdapter(IconHintLiteral).validate_python("WARNING") == "warning"

    @pytest.mark.parametrize(
        "alias, value",
        [
            (ActionLiteral, "pick-one"),
            (PurposeLiteral, "celebrate"),
            (ConstraintPreset, "tv"),
            (SeverityLiteral, "fatal"),
        ],
    )
    def test_invalid_rejected(self, alias, value):
        with pytest.raises(ValidationError):
            TypeAdapter(alias).validate_python(value)

    def test_non_string_passes_through_to_validation(self):
        with pytest.raises(ValidationError):
            TypeAdapter(ActionLiteral).validate_python(42)
