"""
Tabular Generator Module

Flattens test cases into one spreadsheet row per case. The steps column is a
multi-line, human-readable summary and cannot be parsed back into cases.
"""
import csv
import io
from typing import Dict, List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from caseflow.core.domain.test_case import Step, TestCase


class TabularGenerator:
    """
    Generates spreadsheet exports (XLSX workbook or CSV text).

    Both formats carry the same rows: ID, Title, Precondition, Steps.
    """

    HEADERS = ['ID', 'Title', 'Precondition', 'Steps']
    SHEET_NAME = "TestCases"

    # Column widths for the workbook, in characters
    COLUMN_WIDTHS = {'A': 10, 'B': 30, 'C': 30, 'D': 80}

    @staticmethod
    def format_branches(step: Step) -> str:
        """Summarize the branches of a step, e.g. ``[invalid -> Step 1]``."""
        return ", ".join(
            f"[{branch.condition} -> Step {branch.next_step + 1}]"
            for branch in step.branches
        )

    def format_step(self, index: int, step: Step) -> str:
        """
        Format one step line.

        Args:
            index: 0-based position of the step
            step: Step to format

        Returns:
            ``Step <n>: <action> | <status> | <expected> <branches>``
        """
        return (
            f"Step {index + 1}: {step.action} | {step.expected_status.value} | "
            f"{step.expected_value} {self.format_branches(step)}"
        )

    def format_steps(self, case: TestCase) -> str:
        """Steps column text: one line per step."""
        return "\n".join(self.format_step(idx, step) for idx, step in enumerate(case.steps))

    def build_rows(self, test_cases: Sequence[TestCase]) -> List[Dict[str, str]]:
        """
        Build one row per test case, keyed by header.

        Args:
            test_cases: Collection snapshot

        Returns:
            List of row dictionaries in collection order
        """
        return [
            {
                'ID': case.id,
                'Title': case.title,
                'Precondition': case.precondition,
                'Steps': self.format_steps(case),
            }
            for case in test_cases
        ]

    def generate_xlsx_bytes(self, test_cases: Sequence[TestCase]) -> bytes:
        """
        Generate the XLSX workbook.

        An empty collection yields a sheet with the header row only.

        Args:
            test_cases: Collection snapshot

        Returns:
            Workbook file content
        """
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.SHEET_NAME

        sheet.append(self.HEADERS)
        for cell in sheet[1]:
            cell.font = Font(bold=True)

        for row in self.build_rows(test_cases):
            sheet.append([row[header] for header in self.HEADERS])

        wrap = Alignment(wrap_text=True, vertical='top')
        for row in sheet.iter_rows(min_row=2):
            for cell in row:
                cell.alignment = wrap

        for column, width in self.COLUMN_WIDTHS.items():
            sheet.column_dimensions[column].width = width
        sheet.freeze_panes = 'A2'

        output = io.BytesIO()
        workbook.save(output)
        return output.getvalue()

    def generate_csv_string(self, test_cases: Sequence[TestCase]) -> str:
        """
        Generate CSV content as a string.

        Multi-line step summaries are kept and quoted.

        Args:
            test_cases: Collection snapshot

        Returns:
            CSV content as string
        """
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=self.HEADERS, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
        writer.writeheader()
        writer.writerows(self.build_rows(test_cases))
        return output.getvalue()

    def generate_csv_bytes(self, test_cases: Sequence[TestCase]) -> bytes:
        # BOM so spreadsheet tools detect UTF-8
        return self.generate_csv_string(test_cases).encode('utf-8-sig')
