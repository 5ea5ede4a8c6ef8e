"""
In-memory slot store.

Used by tests and by embedders that persist the collection themselves.
"""
from typing import Dict, List, Optional

from caseflow.core.interfaces.repository import ICaseStore


class MemoryStore(ICaseStore):
    """Slot store kept in a dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def save(self, key: str, text: str) -> None:
        self._slots[key] = text
        self.save_count += 1

    def remove(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._slots.keys())
