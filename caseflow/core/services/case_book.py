"""
Case book: owner of the test case collection.

Every mutation is written through to the store immediately. Reads hand out
the committed entities; edits go through detached drafts.
"""
import copy
from typing import Iterator, List, Optional, Sequence

from caseflow.core.domain.collection import decode_collection, encode_collection, format_case_id
from caseflow.core.domain.draft import CaseDraft
from caseflow.core.domain.errors import CaseNotFoundError, MalformedStateError
from caseflow.core.domain.test_case import Step, TestCase
from caseflow.core.interfaces.repository import ICaseStore
from caseflow.core.services.logger import get_logger

DEFAULT_STORAGE_KEY = "testcases_advanced"


class CaseBook:
    """Collection of test cases with write-through persistence."""

    def __init__(self, store: ICaseStore, key: str = DEFAULT_STORAGE_KEY):
        """Load the collection from the store.

        A missing slot yields an empty collection; so does a slot that cannot
        be decoded, in which case a warning is logged and the bad content is
        left untouched until the next mutation overwrites it.

        Args:
            store: Persistence collaborator
            key: Slot holding the serialized collection
        """
        self._store = store
        self._key = key
        self._logger = get_logger("case_book")
        self._cases: List[TestCase] = []
        self._next_number = 1
        self._load()

    def _load(self) -> None:
        try:
            snapshot = decode_collection(self._store.load(self._key))
        except MalformedStateError as e:
            self._logger.warning("store_malformed", key=self._key, error=str(e))
            return
        for old_id, new_id in snapshot.renumbered:
            self._logger.warning("duplicate_case_id_renumbered", key=self._key, case_id=old_id, new_id=new_id)
        self._cases = snapshot.cases
        self._next_number = snapshot.next_number
        self._logger.debug("collection_loaded", key=self._key, cases=len(self._cases))

    def _save_state(self, cases: List[TestCase], next_number: int) -> None:
        """Save the new state, then adopt it. A failed save leaves the book unchanged."""
        self._store.save(self._key, encode_collection(cases, next_number))
        self._cases = cases
        self._next_number = next_number

    def _index_of(self, case_id: str) -> Optional[int]:
        for idx, case in enumerate(self._cases):
            if case.id == case_id:
                return idx
        return None

    # Read access

    @property
    def cases(self) -> Sequence[TestCase]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._cases)

    @property
    def next_case_id(self) -> str:
        """Id the next created case will receive."""
        return format_case_id(self._next_number)

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(tuple(self._cases))

    def get_case(self, case_id: str) -> TestCase:
        """Return the committed case with this id.

        Raises:
            CaseNotFoundError: If no case has this id
        """
        idx = self._index_of(case_id)
        if idx is None:
            raise CaseNotFoundError(case_id)
        return self._cases[idx]

    # Mutations

    def create_case(self, title: str, precondition: str = "", steps: Optional[List[Step]] = None) -> TestCase:
        """Append a new case with the next sequential id."""
        case = TestCase(
            id=format_case_id(self._next_number),
            title=title,
            precondition=precondition,
            steps=[_detach(step) for step in steps or []],
        )
        self._save_state(self._cases + [case], self._next_number + 1)
        self._logger.info("case_created", case_id=case.id, steps=len(case.steps))
        return case

    def update_case(self, case_id: str, title: str, precondition: str, steps: List[Step]) -> TestCase:
        """Replace title, precondition and steps of an existing case.

        Raises:
            CaseNotFoundError: If no case has this id
        """
        idx = self._index_of(case_id)
        if idx is None:
            raise CaseNotFoundError(case_id)
        updated = TestCase(
            id=case_id,
            title=title,
            precondition=precondition,
            steps=[_detach(step) for step in steps],
        )
        cases = list(self._cases)
        cases[idx] = updated
        self._save_state(cases, self._next_number)
        self._logger.info("case_updated", case_id=case_id, steps=len(updated.steps))
        return updated

    def delete_case(self, case_id: str) -> bool:
        """Remove a case. Deleting an absent id does nothing.

        Returns:
            True if a case was removed
        """
        idx = self._index_of(case_id)
        if idx is None:
            self._logger.debug("case_delete_skipped", case_id=case_id)
            return False
        self._save_state(self._cases[:idx] + self._cases[idx + 1:], self._next_number)
        self._logger.info("case_deleted", case_id=case_id)
        return True

    def clear(self) -> None:
        """Remove every case. The id counter keeps counting."""
        removed = len(self._cases)
        self._save_state([], self._next_number)
        self._logger.info("collection_cleared", removed=removed)

    # Edit sessions

    def new_draft(self) -> CaseDraft:
        """Draft for a case to be created, seeded with one empty step."""
        return CaseDraft()

    def begin_edit(self, case_id: str) -> CaseDraft:
        """Detached working copy of a committed case.

        Raises:
            CaseNotFoundError: If no case has this id
        """
        return CaseDraft.from_case(self.get_case(case_id))

    def commit(self, draft: CaseDraft) -> TestCase:
        """Apply a draft to the collection and close it.

        Raises:
            DraftClosedError: If the draft was already committed or discarded
            CaseNotFoundError: If the edited case has been deleted meanwhile
        """
        draft.ensure_open()
        if draft.is_new:
            case = self.create_case(draft.title, draft.precondition, draft.steps)
        else:
            case = self.update_case(draft.case_id, draft.title, draft.precondition, draft.steps)
        draft.closed = True
        return case

    def discard(self, draft: CaseDraft) -> None:
        """Close a draft without touching the collection."""
        draft.closed = True
        self._logger.debug("draft_discarded", case_id=draft.case_id)


def _detach(step: Step) -> Step:
    return copy.deepcopy(step)
