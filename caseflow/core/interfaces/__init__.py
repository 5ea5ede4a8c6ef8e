"""
Interfaces for dependency inversion.

Services depend on these abstractions, not on concrete storage or rendering
implementations.
"""
from .repository import ICaseStore
from .output_generator import ExportRenderer, IDiagramRenderer

__all__ = [
    'ICaseStore',
    'ExportRenderer',
    'IDiagramRenderer',
]
