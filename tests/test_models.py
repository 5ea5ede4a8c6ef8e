"""Tests for domain models and collection encoding."""
import json

import pytest

from caseflow.core.domain import (
    Branch,
    ExpectedStatus,
    MalformedStateError,
    Step,
    TestCase,
    decode_collection,
    encode_collection,
    format_case_id,
    parse_case_number,
)


class TestExpectedStatus:
    """Test ExpectedStatus enum."""

    def test_values_are_display_strings(self):
        """Test status values match the stored strings."""
        assert ExpectedStatus.SUCCESS.value == "成功"
        assert ExpectedStatus.FAILURE.value == "失败"
        assert ExpectedStatus.EXCEPTION.value == "异常"

    def test_style_classes_are_disjoint(self):
        """Test each status maps to its own style class."""
        classes = {status.style_class for status in ExpectedStatus}
        assert classes == {"success", "fail", "exception"}

    @pytest.mark.parametrize("raw,expected", [
        ("成功", ExpectedStatus.SUCCESS),
        ("failure", ExpectedStatus.FAILURE),
        ("EXCEPTION", ExpectedStatus.EXCEPTION),
        ("fail", ExpectedStatus.FAILURE),
        (ExpectedStatus.SUCCESS, ExpectedStatus.SUCCESS),
    ])
    def test_parse(self, raw, expected):
        """Test parsing from value, name and style class."""
        assert ExpectedStatus.parse(raw) is expected

    def test_parse_unknown(self):
        """Test unknown status is rejected."""
        with pytest.raises(ValueError):
            ExpectedStatus.parse("maybe")


class TestStepSerialization:
    """Test Step and Branch dictionary conversion."""

    def test_to_dict_omits_unset_optionals(self):
        """Test optional keys are left out when unset."""
        step = Step(action="open", expected_status=ExpectedStatus.SUCCESS, expected_value="")
        assert step.to_dict() == {'action': 'open', 'expectedStatus': '成功', 'expectedValue': ''}

    def test_to_dict_with_dependency_and_branches(self):
        """Test dependency and branches use camelCase keys."""
        step = Step(
            action="submit",
            expected_status=ExpectedStatus.FAILURE,
            expected_value="error",
            depends_on=0,
            branches=[Branch(condition="invalid", next_step=2)],
        )
        data = step.to_dict()
        assert data['dependsOn'] == 0
        assert data['branches'] == [{'condition': 'invalid', 'nextStep': 2}]
        assert data['expectedStatus'] == '失败'

    def test_from_dict_defaults(self):
        """Test missing fields fall back to defaults."""
        step = Step.from_dict({'action': 'x'})
        assert step.expected_status is ExpectedStatus.SUCCESS
        assert step.expected_value == ""
        assert step.depends_on is None
        assert step.branches == []

    def test_from_dict_rejects_bad_status(self):
        """Test unknown status is a malformed state."""
        with pytest.raises(MalformedStateError):
            Step.from_dict({'action': 'x', 'expectedStatus': 'unknown'})

    def test_from_dict_rejects_non_integer_index(self):
        """Test indices must be integers."""
        with pytest.raises(MalformedStateError):
            Step.from_dict({'action': 'x', 'dependsOn': "1"})
        with pytest.raises(MalformedStateError):
            Branch.from_dict({'condition': 'c', 'nextStep': True})


class TestTestCase:
    """Test TestCase entity."""

    def test_round_trip(self, login_case):
        """Test dictionary conversion preserves the case."""
        assert TestCase.from_dict(login_case.to_dict()) == login_case

    def test_step_at(self, login_case):
        """Test positional lookup with out-of-range indices."""
        assert login_case.step_at(1).action == "submit"
        assert login_case.step_at(2) is None
        assert login_case.step_at(-1) is None
        assert login_case.step_at(None) is None

    def test_copy_is_detached(self, login_case):
        """Test copies share no steps or branches."""
        copied = login_case.copy()
        copied.steps[1].branches[0].condition = "changed"
        assert login_case.steps[1].branches[0].condition == "invalid"

    def test_has_branches(self, login_case, mixed_status_case):
        assert login_case.has_branches
        assert not mixed_status_case.has_branches

    def test_from_dict_requires_id(self):
        """Test a case without id is malformed."""
        with pytest.raises(MalformedStateError):
            TestCase.from_dict({'title': 'no id', 'steps': []})


class TestCollectionEncoding:
    """Test collection encode/decode."""

    def test_case_ids(self):
        assert format_case_id(3) == "TC-3"
        assert parse_case_number("TC-12") == 12
        assert parse_case_number("custom") is None

    def test_decode_empty(self):
        """Test missing or blank text yields an empty collection."""
        for text in (None, "", "   "):
            snapshot = decode_collection(text)
            assert snapshot.cases == []
            assert snapshot.next_number == 1

    def test_round_trip(self, login_case, mixed_status_case):
        """Test encoded collection decodes to the same cases and counter."""
        text = encode_collection([login_case, mixed_status_case], next_number=7)
        snapshot = decode_collection(text)
        assert snapshot.cases == [login_case, mixed_status_case]
        assert snapshot.next_number == 7

    def test_encoding_keeps_unicode(self, login_case):
        """Test status strings are stored unescaped."""
        assert "成功" in encode_collection([login_case], 2)

    def test_decode_legacy_list(self, login_case):
        """Test a bare list resumes counting after the highest id."""
        legacy = [login_case.to_dict(), {**login_case.to_dict(), 'id': 'TC-4'}]
        snapshot = decode_collection(json.dumps(legacy))
        assert [c.id for c in snapshot.cases] == ["TC-1", "TC-4"]
        assert snapshot.next_number == 5

    def test_counter_never_behind_ids(self, login_case):
        """Test a stale stored counter is raised above existing ids."""
        text = json.dumps({'nextId': 1, 'cases': [login_case.to_dict()]})
        assert decode_collection(text).next_number == 2

    def test_duplicate_ids_renumbered(self, login_case):
        """Test repeated ids keep every case and give later ones fresh ids."""
        legacy = [
            {**login_case.to_dict(), 'id': 'TC-1', 'title': 'first'},
            {**login_case.to_dict(), 'id': 'TC-2', 'title': 'second'},
            {**login_case.to_dict(), 'id': 'TC-2', 'title': 'third'},
        ]
        snapshot = decode_collection(json.dumps(legacy))

        assert [(c.id, c.title) for c in snapshot.cases] == [
            ("TC-1", "first"), ("TC-2", "second"), ("TC-3", "third"),
        ]
        assert snapshot.renumbered == [("TC-2", "TC-3")]
        assert snapshot.next_number == 4

    def test_no_renumbering_for_unique_ids(self, login_case):
        assert decode_collection(json.dumps([login_case.to_dict()])).renumbered == []

    @pytest.mark.parametrize("text", [
        "{not json",
        "42",
        '{"cases": {}}',
        '{"nextId": "3", "cases": []}',
        '[{"id": "TC-1", "steps": [{"action": "a", "expectedStatus": "??"}]}]',
    ])
    def test_decode_malformed(self, text):
        """Test malformed payloads raise MalformedStateError."""
        with pytest.raises(MalformedStateError):
            decode_collection(text)
