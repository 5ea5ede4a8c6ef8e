"""Shared fixtures."""
import pytest

from caseflow.core.domain import Branch, ExpectedStatus, Step, TestCase


def make_login_case(case_id: str = "TC-1") -> TestCase:
    """Two-step login case with one dependency and one branch back to step 1."""
    return TestCase(
        id=case_id,
        title="Login",
        precondition="user exists",
        steps=[
            Step(action="enter creds", expected_status=ExpectedStatus.SUCCESS, expected_value=""),
            Step(
                action="submit",
                expected_status=ExpectedStatus.SUCCESS,
                expected_value="redirect",
                depends_on=0,
                branches=[Branch(condition="invalid", next_step=0)],
            ),
        ],
    )


@pytest.fixture
def login_case() -> TestCase:
    return make_login_case()


@pytest.fixture
def dangling_case() -> TestCase:
    """Case whose only branch points past the end of its steps."""
    return TestCase(
        id="TC-2",
        title="Checkout",
        precondition="",
        steps=[
            Step(action="open cart", expected_status=ExpectedStatus.SUCCESS),
            Step(
                action="pay",
                expected_status=ExpectedStatus.FAILURE,
                expected_value="declined",
                branches=[Branch(condition="retry", next_step=5)],
            ),
        ],
    )


@pytest.fixture
def mixed_status_case() -> TestCase:
    return TestCase(
        id="TC-3",
        title="Upload",
        precondition="logged in",
        steps=[
            Step(action="pick file", expected_status=ExpectedStatus.SUCCESS),
            Step(action="upload huge file", expected_status=ExpectedStatus.FAILURE, expected_value="413"),
            Step(action="drop connection", expected_status=ExpectedStatus.EXCEPTION, expected_value="timeout"),
        ],
    )
