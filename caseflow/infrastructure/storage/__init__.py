"""
Persistence backends for the collection slot.
"""
from .file_store import JSONFileStore
from .memory_store import MemoryStore

__all__ = ['JSONFileStore', 'MemoryStore']
