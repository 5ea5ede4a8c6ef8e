"""
Repository interface for persisted collection storage.

The store is a key-value slot holder: it knows nothing about test cases,
only about named blocks of text.
"""
from abc import ABC, abstractmethod
from typing import Optional


class ICaseStore(ABC):
    """Interface for the persisted collection slot."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Read a slot.

        Args:
            key: Slot name

        Returns:
            Stored text, or None if the slot is missing
        """
        pass

    @abstractmethod
    def save(self, key: str, text: str) -> None:
        """Replace the content of a slot.

        Args:
            key: Slot name
            text: Serialized collection
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Delete a slot.

        Args:
            key: Slot name

        Returns:
            True if the slot existed
        """
        pass
