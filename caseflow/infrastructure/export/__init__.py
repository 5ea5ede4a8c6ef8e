"""
Export infrastructure implementations.

Provides spreadsheet (XLSX/CSV), mind map (XMind) and HTML report output.
"""
from .tabular_generator import TabularGenerator
from .outline_generator import OutlineGenerator, OutlineTopic
from .report_generator import ReportGenerator, UNKNOWN_STEP

__all__ = [
    'TabularGenerator',
    'OutlineGenerator',
    'OutlineTopic',
    'ReportGenerator',
    'UNKNOWN_STEP',
]
