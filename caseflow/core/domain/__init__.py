"""
Domain entities and value objects.
"""
from .errors import (
    CaseflowError,
    CaseNotFoundError,
    DraftClosedError,
    MalformedStateError,
    DiagramRenderError,
)
from .test_case import ExpectedStatus, Branch, Step, TestCase
from .draft import CaseDraft, default_step
from .collection import (
    CollectionSnapshot,
    encode_collection,
    decode_collection,
    format_case_id,
    parse_case_number,
)

__all__ = [
    'CaseflowError',
    'CaseNotFoundError',
    'DraftClosedError',
    'MalformedStateError',
    'DiagramRenderError',
    'ExpectedStatus',
    'Branch',
    'Step',
    'TestCase',
    'CaseDraft',
    'default_step',
    'CollectionSnapshot',
    'encode_collection',
    'decode_collection',
    'format_case_id',
    'parse_case_number',
]
