"""
File-based slot store.

All slots live in one JSON object file, ``{slot name: text}``, so the
collection survives across sessions.
"""
import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from caseflow.core.domain.errors import MalformedStateError
from caseflow.core.interfaces.repository import ICaseStore


class JSONFileStore(ICaseStore):
    """Slot store backed by a single JSON file."""

    def __init__(self, path: str):
        """Initialize file store.

        Args:
            path: Location of the JSON file; parent directories are created on first save
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_slots(self) -> Dict[str, str]:
        """Load all slots from file.

        Raises:
            MalformedStateError: If the file exists but is not a JSON object of strings
        """
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                slots = json.load(f)
        except UnicodeDecodeError as e:
            raise MalformedStateError(f"Store file {self._path} is not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise MalformedStateError(f"Store file {self._path} is not valid JSON: {e}") from e
        if not isinstance(slots, dict):
            raise MalformedStateError(f"Store file {self._path} does not hold an object")
        return slots

    def _write_slots(self, slots: Dict[str, str]) -> None:
        """Write all slots, replacing the file in one step."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(slots, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self._path)

    def load(self, key: str) -> Optional[str]:
        value = self._read_slots().get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedStateError(f"Slot {key!r} does not hold text")
        return value

    def save(self, key: str, text: str) -> None:
        try:
            slots = self._read_slots()
        except MalformedStateError:
            # An unreadable file is replaced rather than blocking every save
            slots = {}
        slots[key] = text
        self._write_slots(slots)

    def remove(self, key: str) -> bool:
        slots = self._read_slots()
        if key not in slots:
            return False
        del slots[key]
        self._write_slots(slots)
        return True

    def keys(self) -> List[str]:
        """Get all slot names."""
        return list(self._read_slots().keys())
