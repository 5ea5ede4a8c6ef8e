"""
Outline Generator

Converts test cases into a mind map: root -> case -> step -> branch.
Branches are leaf annotations; the outline carries no cross links.
"""
import io
import json
import uuid
import zipfile
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from caseflow import __version__
from caseflow.core.domain.test_case import Branch, Step, TestCase

ROOT_TITLE = "Test Cases"


@dataclass
class OutlineTopic:
    """Node of the outline tree."""
    title: str
    note: str = ""
    children: List['OutlineTopic'] = field(default_factory=list)

    def depth(self) -> int:
        """Number of levels in the tree rooted here (a leaf has depth 1)."""
        return 1 + max((child.depth() for child in self.children), default=0)

    def walk(self):
        """Yield every topic, depth first, starting with this one."""
        yield self
        for child in self.children:
            yield from child.walk()


class OutlineGenerator:
    """Generates the outline tree and its XMind workbook."""

    SHEET_TITLE = "TestCases"
    STRUCTURE_CLASS = "org.xmind.ui.logic.right"

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        """
        Args:
            id_factory: Topic id generator; random hex ids by default
        """
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)

    @staticmethod
    def case_topic_title(case: TestCase) -> str:
        return f"{case.id}: {case.title}"

    @staticmethod
    def step_topic_title(index: int, step: Step) -> str:
        return f"Step {index + 1}: {step.action} [{step.expected_status.value}]"

    @staticmethod
    def branch_topic_title(branch: Branch) -> str:
        return f"Branch: {branch.condition} -> Step {branch.next_step + 1}"

    def build_tree(self, test_cases: Sequence[TestCase]) -> OutlineTopic:
        """
        Build the topic tree mirroring collection ownership.

        Args:
            test_cases: Collection snapshot

        Returns:
            Root topic
        """
        root = OutlineTopic(title=ROOT_TITLE)
        for case in test_cases:
            case_topic = OutlineTopic(title=self.case_topic_title(case), note=case.precondition)
            for idx, step in enumerate(case.steps):
                step_topic = OutlineTopic(title=self.step_topic_title(idx, step), note=step.expected_value)
                step_topic.children = [
                    OutlineTopic(title=self.branch_topic_title(branch))
                    for branch in step.branches
                ]
                case_topic.children.append(step_topic)
            root.children.append(case_topic)
        return root

    def _topic_to_dict(self, topic: OutlineTopic, is_root: bool = False) -> Dict:
        data = {
            'id': self._new_id(),
            'class': 'topic',
            'title': topic.title,
        }
        if is_root:
            data['structureClass'] = self.STRUCTURE_CLASS
        if topic.note:
            data['notes'] = {'plain': {'content': topic.note}}
        if topic.children:
            data['children'] = {
                'attached': [self._topic_to_dict(child) for child in topic.children]
            }
        return data

    def build_content(self, test_cases: Sequence[TestCase]) -> List[Dict]:
        """Sheets list stored as ``content.json``."""
        root = self.build_tree(test_cases)
        return [{
            'id': self._new_id(),
            'class': 'sheet',
            'title': self.SHEET_TITLE,
            'rootTopic': self._topic_to_dict(root, is_root=True),
        }]

    def generate_xmind_bytes(self, test_cases: Sequence[TestCase]) -> bytes:
        """
        Generate the XMind workbook archive.

        Args:
            test_cases: Collection snapshot

        Returns:
            Zip archive bytes with content, metadata and manifest entries
        """
        content = self.build_content(test_cases)
        metadata = {'creator': {'name': 'caseflow', 'version': __version__}}
        manifest = {'file-entries': {'content.json': {}, 'metadata.json': {}}}

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            archive.writestr('content.json', json.dumps(content, ensure_ascii=False))
            archive.writestr('metadata.json', json.dumps(metadata))
            archive.writestr('manifest.json', json.dumps(manifest))
        return buffer.getvalue()
