"""
Output generator interfaces for exported artifacts.
"""
from abc import ABC, abstractmethod
from typing import Callable, Sequence

from caseflow.core.domain.test_case import TestCase

# Every export kind is a pure function from a collection snapshot to file bytes
ExportRenderer = Callable[[Sequence[TestCase]], bytes]


class IDiagramRenderer(ABC):
    """Interface for turning a Mermaid graph description into an image."""

    @abstractmethod
    def render_svg(self, code: str) -> bytes:
        """Render the description as SVG.

        Args:
            code: Mermaid graph description

        Returns:
            SVG document bytes
        """
        pass

    @abstractmethod
    def render_png(self, code: str) -> bytes:
        """Render the description as PNG.

        Args:
            code: Mermaid graph description

        Returns:
            PNG image bytes
        """
        pass
