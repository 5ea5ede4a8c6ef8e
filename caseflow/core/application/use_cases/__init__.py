"""
Application use cases.
"""
from .export_deliverables import (
    ExportDeliverablesUseCase,
    ExportKind,
    EXPORT_FILENAMES,
    DIAGRAM_FORMATS,
    default_renderers,
)

__all__ = [
    'ExportDeliverablesUseCase',
    'ExportKind',
    'EXPORT_FILENAMES',
    'DIAGRAM_FORMATS',
    'default_renderers',
]
