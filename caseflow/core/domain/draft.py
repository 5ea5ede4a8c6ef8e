"""
Edit session working copy.

A draft is detached from the collection: edits never touch committed cases
until the draft is committed through the case book.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import DraftClosedError
from .test_case import Branch, ExpectedStatus, Step, TestCase


def default_step() -> Step:
    """Empty step used to seed new drafts and appended by ``add_step``."""
    return Step(action="", expected_status=ExpectedStatus.SUCCESS, expected_value="")


@dataclass
class CaseDraft:
    """Working copy of a test case during an edit session.

    ``case_id`` is None for a case that has not been created yet.
    """
    case_id: Optional[str] = None
    title: str = ""
    precondition: str = ""
    steps: List[Step] = field(default_factory=lambda: [default_step()])
    closed: bool = False

    @classmethod
    def from_case(cls, case: TestCase) -> 'CaseDraft':
        """Start an edit session on a detached copy of ``case``."""
        detached = case.copy()
        return cls(
            case_id=detached.id,
            title=detached.title,
            precondition=detached.precondition,
            steps=detached.steps,
        )

    @property
    def is_new(self) -> bool:
        return self.case_id is None

    def ensure_open(self) -> None:
        if self.closed:
            raise DraftClosedError(f"Draft for {self.case_id or 'new case'} is closed")

    def add_step(self, step: Optional[Step] = None) -> int:
        """Append a step (an empty one by default) and return its index."""
        self.ensure_open()
        self.steps.append(step if step is not None else default_step())
        return len(self.steps) - 1

    def update_step(
        self,
        index: int,
        action: Optional[str] = None,
        expected_status: Optional[ExpectedStatus] = None,
        expected_value: Optional[str] = None,
    ) -> Step:
        """Change the editable fields of one step."""
        self.ensure_open()
        step = self.steps[index]
        if action is not None:
            step.action = action
        if expected_status is not None:
            step.expected_status = ExpectedStatus.parse(expected_status)
        if expected_value is not None:
            step.expected_value = expected_value
        return step

    def set_dependency(self, index: int, depends_on: Optional[int]) -> None:
        """Declare (or clear with None) the prerequisite step of a step."""
        self.ensure_open()
        self.steps[index].depends_on = depends_on

    def remove_step(self, index: int, repair_references: bool = True) -> Step:
        """Remove a step.

        With ``repair_references`` every dependency or branch index past the
        removed step shifts down by one, dependencies on the removed step are
        cleared and branches targeting it are dropped. Without it, indices are
        left as they were and may dangle.
        """
        self.ensure_open()
        # references are compared against the non-negative position
        index = range(len(self.steps))[index]
        removed = self.steps.pop(index)
        if not repair_references:
            return removed

        for step in self.steps:
            if step.depends_on is not None:
                if step.depends_on == index:
                    step.depends_on = None
                elif step.depends_on > index:
                    step.depends_on -= 1
            kept = []
            for branch in step.branches:
                if branch.next_step == index:
                    continue
                if branch.next_step > index:
                    branch.next_step -= 1
                kept.append(branch)
            step.branches = kept
        return removed

    def add_branch(self, step_index: int, condition: str = "", next_step: int = 0) -> Branch:
        """Append a branch to a step. The target defaults to the first step."""
        self.ensure_open()
        branch = Branch(condition=condition, next_step=next_step)
        self.steps[step_index].branches.append(branch)
        return branch

    def remove_branch(self, step_index: int, branch_index: int) -> Branch:
        self.ensure_open()
        return self.steps[step_index].branches.pop(branch_index)
