"""
Domain errors raised by the case model and its collaborators.
"""


class CaseflowError(Exception):
    """Base class for all caseflow errors."""


class CaseNotFoundError(CaseflowError, KeyError):
    """Raised when an update references a case id that does not exist."""

    def __init__(self, case_id: str):
        self.case_id = case_id
        super().__init__(f"Test case not found: {case_id}")

    def __str__(self) -> str:
        return self.args[0]


class DraftClosedError(CaseflowError):
    """Raised when a committed or discarded draft is committed again."""


class MalformedStateError(CaseflowError, ValueError):
    """Raised when persisted data cannot be decoded into a collection."""


class DiagramRenderError(CaseflowError):
    """Raised when the diagram rendering service fails."""
