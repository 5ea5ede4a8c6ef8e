"""
caseflow - structured test case authoring with flow diagram,
spreadsheet, mind map and HTML report exports.
"""

__version__ = "0.3.0"
