"""HTML report generator for a test case collection.

Produces one self-contained page (inline CSS, no external assets):

    <h1>Test Case Manual</h1>
    per case:
        <h2>TC-1: title</h2>
        Precondition: ...
        <ol> one <li> per step
            Action -> Status badge -> Expected value
            Depends on: <prerequisite step action>
            <ul> one <li> per branch
                Condition -> Next: <target step action>

Branch targets and dependencies are resolved inside the owning case and
link to the target step anchor. An index that resolves to no step renders
the "unknown step" placeholder; the rest of the report is unaffected.
"""
from typing import Optional, Sequence

from caseflow.core.domain.test_case import Step, TestCase

UNKNOWN_STEP = "unknown step"
EMPTY_VALUE = "None"

STYLE = """
body { font-family: "Segoe UI", Roboto, sans-serif; background: #f3f4f6; margin:0; }
h1 { text-align:center; }
.case-card { background:#fff; padding:16px; margin:16px; border-radius:12px; box-shadow:0 2px 8px rgba(0,0,0,0.1); }
.status-success { color:green; font-weight:bold; }
.status-fail { color:red; font-weight:bold; }
.status-exception { color:orange; font-weight:bold; }
.unknown-step { color:#6b7280; font-style:italic; }
.depends-on { color:#4b5563; }
ol, ul { padding-left:20px; }
"""


class ReportGenerator:
    """Formats a collection as a standalone HTML document."""

    TITLE = "Test Case Manual"

    def generate_html(self, test_cases: Sequence[TestCase]) -> str:
        """Render the whole collection."""
        parts = [
            '<!DOCTYPE html>\n<html lang="en">\n<head>\n<meta charset="UTF-8">\n',
            f'<title>{self.TITLE}</title>\n<style>{STYLE}</style>\n</head>\n<body>\n',
            f'<h1>{self.TITLE}</h1>\n',
        ]
        parts.extend(self._format_case(case) for case in test_cases)
        parts.append('</body>\n</html>\n')
        return ''.join(parts)

    def generate_bytes(self, test_cases: Sequence[TestCase]) -> bytes:
        return self.generate_html(test_cases).encode('utf-8')

    def _format_case(self, case: TestCase) -> str:
        html = f'<section class="case-card" id="{self._escape(case.id)}">\n'
        html += f'<h2>{self._escape(case.id)}: {self._escape(case.title)}</h2>\n'
        html += f'<p class="precondition">Precondition: {self._escape(case.precondition or EMPTY_VALUE)}</p>\n'
        html += '<ol class="steps">\n'
        for idx, step in enumerate(case.steps):
            html += self._format_step(case, idx, step)
        html += '</ol>\n</section>\n'
        return html

    def _format_step(self, case: TestCase, index: int, step: Step) -> str:
        """Action -> status badge -> expected value, then dependency and branches."""
        status = step.expected_status
        html = f'<li class="step" id="{self.step_anchor(case, index)}">\n'
        html += (
            f'Action: {self._escape(step.action)} → Status: '
            f'<span class="status-{status.style_class}">{self._escape(status.value)}</span> → '
            f'Expected: {self._escape(step.expected_value or EMPTY_VALUE)}\n'
        )

        if step.depends_on is not None:
            html += f'<div class="depends-on">Depends on: {self._step_reference(case, step.depends_on)}</div>\n'

        if step.branches:
            html += '<ul class="branches">\n'
            for branch in step.branches:
                html += (
                    f'<li class="branch">Condition: {self._escape(branch.condition)} → '
                    f'Next: {self._step_reference(case, branch.next_step)}</li>\n'
                )
            html += '</ul>\n'

        html += '</li>\n'
        return html

    def _step_reference(self, case: TestCase, index: Optional[int]) -> str:
        """Link to a step of the same case, showing its action text."""
        target = case.step_at(index)
        if target is None:
            return f'<span class="unknown-step">{UNKNOWN_STEP}</span>'
        return f'<a href="#{self.step_anchor(case, index)}">{self._escape(target.action)}</a>'

    @classmethod
    def step_anchor(cls, case: TestCase, index: int) -> str:
        return cls._escape(f"{case.id}-step-{index + 1}")

    @staticmethod
    def _escape(text: str) -> str:
        """Escape HTML special characters."""
        return (text
                .replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;'))
