"""
Unit tests for edit session drafts.
"""
import pytest

from caseflow.core.domain import Branch, CaseDraft, DraftClosedError, ExpectedStatus, Step


def _chain_draft() -> CaseDraft:
    """Four steps: 2 depends on 1, 3 depends on 2, step 4 branches to 2 and 3."""
    draft = CaseDraft(title="Chain", steps=[
        Step(action="a"),
        Step(action="b", depends_on=0),
        Step(action="c", depends_on=1),
        Step(action="d", branches=[Branch("to b", 1), Branch("to c", 2)]),
    ])
    return draft


class TestCaseDraft:
    """Test CaseDraft editing operations."""

    def test_new_draft_has_one_empty_step(self):
        """Test a new draft is seeded with a default step."""
        draft = CaseDraft()
        assert draft.is_new
        assert len(draft.steps) == 1
        assert draft.steps[0] == Step(action="", expected_status=ExpectedStatus.SUCCESS, expected_value="")

    def test_add_step_returns_index(self):
        draft = CaseDraft()
        assert draft.add_step(Step(action="next")) == 1
        assert draft.add_step() == 2
        assert draft.steps[2].action == ""

    def test_update_step(self):
        """Test editable step fields can be changed independently."""
        draft = CaseDraft()
        draft.update_step(0, action="login", expected_status="failure")
        assert draft.steps[0].action == "login"
        assert draft.steps[0].expected_status is ExpectedStatus.FAILURE
        assert draft.steps[0].expected_value == ""

    def test_add_and_remove_branch(self):
        """Test branches default to the first step and can be removed."""
        draft = CaseDraft()
        draft.add_step()
        branch = draft.add_branch(1, condition="retry")
        assert branch.next_step == 0
        assert draft.steps[1].branches == [Branch("retry", 0)]
        assert draft.remove_branch(1, 0) == branch
        assert draft.steps[1].branches == []

    def test_remove_step_repairs_references(self):
        """Test indices shift and references to the removed step go away."""
        draft = _chain_draft()
        removed = draft.remove_step(1)

        assert removed.action == "b"
        assert [s.action for s in draft.steps] == ["a", "c", "d"]
        # c depended on b: cleared
        assert draft.steps[1].depends_on is None
        # d: branch to b dropped, branch to c shifted from 2 to 1
        assert draft.steps[2].branches == [Branch("to c", 1)]

    def test_remove_step_without_repair_keeps_indices(self):
        """Test raw removal leaves references untouched."""
        draft = _chain_draft()
        draft.remove_step(1, repair_references=False)
        assert draft.steps[1].depends_on == 1
        assert [b.next_step for b in draft.steps[2].branches] == [1, 2]

    def test_remove_first_step_shifts_dependencies(self):
        draft = CaseDraft(steps=[Step("a"), Step("b"), Step("c", depends_on=1)])
        draft.remove_step(0)
        assert draft.steps[1].depends_on == 0

    def test_remove_step_negative_index(self):
        """Test a negative index removes from the end and repairs like its positive form."""
        draft = CaseDraft(steps=[
            Step("a"),
            Step("b", depends_on=0, branches=[Branch("again", 0), Branch("next", 2)]),
            Step("c"),
        ])
        removed = draft.remove_step(-1)

        assert removed.action == "c"
        assert draft.steps[1].depends_on == 0
        assert draft.steps[1].branches == [Branch("again", 0)]

    def test_remove_step_out_of_range(self):
        draft = CaseDraft()
        with pytest.raises(IndexError):
            draft.remove_step(3)
        with pytest.raises(IndexError):
            draft.remove_step(-2)
        assert len(draft.steps) == 1

    def test_closed_draft_rejects_edits(self):
        """Test a closed draft cannot be edited."""
        draft = CaseDraft(closed=True)
        with pytest.raises(DraftClosedError):
            draft.add_step()
        with pytest.raises(DraftClosedError):
            draft.add_branch(0)
