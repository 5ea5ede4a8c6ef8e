"""
Structured-text encoding of a test case collection.

The persisted slot holds ``{"nextId": n, "cases": [...]}``. A bare list of
cases is accepted as well; the id counter then resumes after the highest
numbered ``TC-<n>`` id found. Repeated ids, which older data can hold,
are replaced with fresh ones on decode.
"""
import json
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import MalformedStateError
from .test_case import TestCase

CASE_ID_PREFIX = "TC-"
_CASE_ID_PATTERN = re.compile(r'^TC-(\d+)$')


def format_case_id(number: int) -> str:
    """Format a creation counter value as a case id."""
    return f"{CASE_ID_PREFIX}{number}"


def parse_case_number(case_id: str) -> Optional[int]:
    """Return the counter value embedded in a ``TC-<n>`` id, if any."""
    match = _CASE_ID_PATTERN.match(case_id)
    return int(match.group(1)) if match else None


@dataclass
class CollectionSnapshot:
    """Decoded collection plus the next id counter value."""
    cases: List[TestCase] = field(default_factory=list)
    next_number: int = 1
    # (old id, new id) for cases whose duplicate id was replaced
    renumbered: List[Tuple[str, str]] = field(default_factory=list)


def encode_collection(cases: List[TestCase], next_number: int) -> str:
    """Serialize cases and the id counter to JSON text."""
    payload = {
        'nextId': next_number,
        'cases': [case.to_dict() for case in cases],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def decode_collection(text: Optional[str]) -> CollectionSnapshot:
    """Parse JSON text produced by :func:`encode_collection`.

    Args:
        text: Persisted text; None or blank means an empty collection

    Returns:
        Decoded snapshot

    Raises:
        MalformedStateError: If the text is not a valid collection
    """
    if text is None or not text.strip():
        return CollectionSnapshot()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStateError(f"Stored collection is not valid JSON: {e}") from e

    next_number = None
    if isinstance(payload, dict):
        raw_cases = payload.get('cases', [])
        next_number = payload.get('nextId')
        if next_number is not None and (isinstance(next_number, bool) or not isinstance(next_number, int)):
            raise MalformedStateError(f"nextId must be an integer, got {next_number!r}")
    elif isinstance(payload, list):
        raw_cases = payload
    else:
        raise MalformedStateError(f"Unexpected collection payload: {type(payload).__name__}")

    if not isinstance(raw_cases, list):
        raise MalformedStateError("Collection cases must be a list")

    cases = [TestCase.from_dict(item) for item in raw_cases]

    # Never hand out an id that is still in use, whatever the stored counter says
    used = [n for n in (parse_case_number(case.id) for case in cases) if n is not None]
    next_number = max(next_number or 1, max(used, default=0) + 1)

    # Older data may repeat an id; the first keeps it, later ones get fresh ids
    renumbered = []
    seen = set()
    for case in cases:
        if case.id in seen:
            new_id = format_case_id(next_number)
            next_number += 1
            renumbered.append((case.id, new_id))
            case.id = new_id
        seen.add(case.id)

    return CollectionSnapshot(cases=cases, next_number=next_number, renumbered=renumbered)
