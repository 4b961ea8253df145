"""Unit tests for Intention domain value objects.

Tests cover: subject validation, tagged-union constraint variants,
action/constraint agreement, flow context, immutability, to_dict.

Run with: uv run pytest tests/unit/test_intention_value_objects.py -v
"""

__test__ = True

import pytest

from intentui.domains.intention import (
    SUBJECT_CONSTRAINTS_BY_ACTION,
    AlertConstraints,
    AlertSeverity,
    ConfirmationConstraints,
    FlowContext,
    IconHint,
    Intention,
    IntentionAction,
    IntentionPurpose,
    IntentionSubject,
    MalformedIntention,
    ReviewConstraints,
    SelectionConstraints,
    SelectionOption,
    TextInputConstraints,
    create_review_intention,
)


def _selection(n=3):
    return SelectionConstraints(
        options=tuple(SelectionOption(value=f"v{i}", label=f"Option {i}") for i in range(n))
    )


# =============================================================================
# SelectionOption / SelectionConstraints
# =============================================================================


class TestSelectionOption:

    def test_construction(self):
        opt = SelectionOption(value="low", label="Low", description="Minor")
        assert opt.value == "low"
        assert opt.disabled is False

    @pytest.mark.parametrize("value, label", [("", "Low"), ("low", ""), ("low", "   ")])
    def test_empty_fields_rejected(self, value, label):
        with pytest.raises(MalformedIntention):
            SelectionOption(value=value, label=label)

    def test_coerce_from_mapping(self):
        opt = SelectionOption.coerce({"value": "a", "label": "A", "disabled": True})
        assert opt == SelectionOption(value="a", label="A", disabled=True)

    def test_coerce_rejects_other_types(self):
        with pytest.raises(MalformedIntention):
            SelectionOption.coerce("a")

    def test_malformed_intention_is_value_error(self):
        assert issubclass(MalformedIntention, ValueError)


class TestSelectionConstraints:

    def test_list_converted_to_tuple(self):
        sc = SelectionConstraints(options=[{"value": "a", "label": "A"}])
        assert isinstance(sc.options, tuple)
        assert sc.options[0].label == "A"

    def test_requires_options(self):
        with pytest.raises(MalformedIntention, match="at least one option"):
            SelectionConstraints(options=())

    def test_duplicate_values_rejected(self):
        with pytest.raises(MalformedIntention, match="unique"):
            SelectionConstraints(options=[
                {"value": "a", "label": "A"}, {"value": "a", "label": "Again"},
            ])

    def test_option_count_and_disabled(self):
        sc = SelectionConstraints(options=[
            {"value": "a", "label": "A"}, {"value": "b", "label": "B", "disabled": True},
        ])
        assert sc.option_count == 2
        assert sc.has_disabled_options is True

    def test_required_defaults_true(self):
        assert _selection().required is True


class TestTextInputConstraints:

    def test_defaults(self):
        tc = TextInputConstraints()
        assert tc.required is False
        assert tc.max_length is None

    def test_negative_length_rejected(self):
        with pytest.raises(MalformedIntention):
            TextInputConstraints(max_length=-1)

    def test_min_above_max_rejected(self):
        with pytest.raises(MalformedIntention, match="exceeds"):
            TextInputConstraints(min_length=10, max_length=5)

    def test_invalid_pattern_rejected(self):
        with pytest.raises(MalformedIntention, match="pattern"):
            TextInputConstraints(pattern="[unclosed")

    def test_to_dict_omits_unset(self):
        assert TextInputConstraints(max_length=20).to_dict() == {
            "kind": "text", "required": False, "max_length": 20,
        }


class TestAlertConstraints:

    def test_severity_coerced_from_string(self):
        assert AlertConstraints(severity="error").severity is AlertSeverity.ERROR

    def test_unknown_severity(self):
        with pytest.raises(MalformedIntention):
            AlertConstraints(severity="fatal")


class TestReviewConstraints:

    def test_data_copied_read_only(self):
        source = {"name": "Ada", "tags": ["a", "b"], "address": {"city": "London"}}
        rc = ReviewConstraints(data=source)
        source["name"] = "Grace"
        assert rc.data["name"] == "Ada"
        assert rc.data["tags"] == ("a", "b")
        with pytest.raises(TypeError):
            rc.data["name"] = "Grace"
        with pytest.raises(TypeError):
            rc.data["address"]["city"] = "Paris"

    def test_to_dict_returns_plain_containers(self):
        rc = ReviewConstraints(data={"items": [{"sku": "x1"}], "total": 3})
        assert rc.to_dict() == {
            "kind": "review", "data": {"items": [{"sku": "x1"}], "total": 3},
        }
        assert type(rc.to_dict()["data"]) is dict

    def test_scalar_and_missing_data(self):
        assert ReviewConstraints(data=42).data == 42
        assert ReviewConstraints().to_dict() == {"kind": "review", "data": None}

    def test_review_intention_is_hashable(self):
        a = create_review_intention({"total": 42, "lines": [1, 2]}, "Order")
        b = create_review_intention({"total": 42, "lines": [1, 2]}, "Order")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_equality_still_compares_data(self):
        a = create_review_intention({"total": 42}, "Order")
        b = create_review_intention({"total": 43}, "Order")
        assert a != b


# =============================================================================
# IntentionSubject
# =============================================================================


class TestIntentionSubject:

    def test_missing_label_rejected(self):
        with pytest.raises(MalformedIntention, match="label"):
            IntentionSubject(type="severity", label="")

    def test_whitespace_label_rejected(self):
        with pytest.raises(MalformedIntention):
            IntentionSubject(type="severity", label="  ")

    def test_missing_type_rejected(self):
        with pytest.raises(MalformedIntention, match="type"):
            IntentionSubject(type="", label="Severity")

    def test_icon_hint_coerced(self):
        subject = IntentionSubject(type="t", label="L", icon_hint="warning")
        assert subject.icon_hint is IconHint.WARNING

    def test_unknown_icon_hint(self):
        with pytest.raises(MalformedIntention):
            IntentionSubject(type="t", label="L", icon_hint="rocket")


# =============================================================================
# Intention
# =============================================================================


class TestIntention:

    def test_construction_coerces_enums(self):
        intention = Intention(
            action="choose-one",
            subject=IntentionSubject(type="t", label="Pick", constraints=_selection()),
            purpose="request",
        )
        assert intention.action is IntentionAction.CHOOSE_ONE
        assert intention.purpose is IntentionPurpose.REQUEST

    def test_unknown_action(self):
        with pytest.raises(MalformedIntention, match="Unknown intention action"):
            Intention(
                action="teleport",
                subject=IntentionSubject(type="t", label="L"),
                purpose="request",
            )

    def test_unknown_purpose(self):
        with pytest.raises(MalformedIntention, match="purpose"):
            Intention(
                action="confirm",
                subject=IntentionSubject(type="t", label="L"),
                purpose="entertain",
            )

    def test_selection_requires_constraints(self):
        with pytest.raises(MalformedIntention, match="SelectionConstraints"):
            Intention(
                action=IntentionAction.CHOOSE_MANY,
                subject=IntentionSubject(type="t", label="L"),
                purpose=IntentionPurpose.REQUEST,
            )

    def test_wrong_constraint_variant(self):
        with pytest.raises(MalformedIntention, match="expects TextInputConstraints"):
            Intention(
                action=IntentionAction.PROVIDE_TEXT,
                subject=IntentionSubject(type="t", label="L", constraints=_selection()),
                purpose=IntentionPurpose.REQUEST,
            )

    def test_confirm_without_constraints_allowed(self):
        intention = Intention(
            action=IntentionAction.CONFIRM,
            subject=IntentionSubject(type="action", label="Save"),
            purpose=IntentionPurpose.CONFIRM,
        )
        assert intention.subject.constraints is None

    def test_frozen(self):
        intention = Intention(
            action=IntentionAction.CONFIRM,
            subject=IntentionSubject(type="action", label="Save",
                                     constraints=ConfirmationConstraints()),
            purpose=IntentionPurpose.CONFIRM,
        )
        with pytest.raises(AttributeError):
            intention.action = IntentionAction.ALERT

    def test_is_multi_select(self):
        intention = Intention(
            action=IntentionAction.CHOOSE_MANY,
            subject=IntentionSubject(type="t", label="L", constraints=_selection()),
            purpose=IntentionPurpose.REQUEST,
        )
        assert intention.is_multi_select is True

    def test_every_action_has_a_variant(self):
        assert set(SUBJECT_CONSTRAINTS_BY_ACTION) == set(IntentionAction)

    def test_to_dict(self):
        intention = Intention(
            action=IntentionAction.CHOOSE_ONE,
            subject=IntentionSubject(type="t", label="Pick", constraints=_selection(2)),
            purpose=IntentionPurpose.REQUEST,
            flow=FlowContext(id="checkout", sequence=1, total_steps=3),
        )
        data = intention.to_dict()
        assert data["action"] == "choose-one"
        assert data["subject"]["constraints"]["kind"] == "selection"
        assert len(data["subject"]["constraints"]["options"]) == 2
        assert data["flow"] == {"id": "checkout", "sequence": 1, "total_steps": 3}


class TestFlowContext:

    def test_empty_id_rejected(self):
        with pytest.raises(MalformedIntention):
            FlowContext(id="")

    def test_sequence_outside_total(self):
        with pytest.raises(MalformedIntention):
            FlowContext(id="f", sequence=3, total_steps=3)

    def test_negative_sequence(self):
        with pytest.raises(MalformedIntention):
            FlowContext(id="f", sequence=-1)
