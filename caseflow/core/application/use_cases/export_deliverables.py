"""
Use case: Export test case deliverables (XLSX, CSV, XMind, HTML, diagrams).
"""
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from caseflow.core.domain.test_case import TestCase
from caseflow.core.interfaces.output_generator import ExportRenderer, IDiagramRenderer
from caseflow.core.services.flow_graph import FlowGraphBuilder
from caseflow.core.services.logger import get_logger
from caseflow.infrastructure.export import OutlineGenerator, ReportGenerator, TabularGenerator


class ExportKind(str, Enum):
    """Collection-wide export formats."""
    XLSX = "xlsx"
    CSV = "csv"
    XMIND = "xmind"
    HTML = "html"

    @property
    def filename(self) -> str:
        return EXPORT_FILENAMES[self]


EXPORT_FILENAMES = {
    ExportKind.XLSX: "testcases.xlsx",
    ExportKind.CSV: "testcases.csv",
    ExportKind.XMIND: "testcases.xmind",
    ExportKind.HTML: "testcases.html",
}

DIAGRAM_FORMATS = ("mmd", "svg", "png")


def default_renderers() -> Dict[ExportKind, ExportRenderer]:
    """Registry of export kind to renderer function."""
    tabular = TabularGenerator()
    return {
        ExportKind.XLSX: tabular.generate_xlsx_bytes,
        ExportKind.CSV: tabular.generate_csv_bytes,
        ExportKind.XMIND: OutlineGenerator().generate_xmind_bytes,
        ExportKind.HTML: ReportGenerator().generate_bytes,
    }


class ExportDeliverablesUseCase:
    """Use case for exporting the collection and per-case diagrams."""

    def __init__(
        self,
        output_dir: str,
        renderers: Optional[Dict[ExportKind, ExportRenderer]] = None,
        diagram_renderer: Optional[IDiagramRenderer] = None,
        graph_builder: Optional[FlowGraphBuilder] = None
    ):
        """Initialize use case with dependencies.

        Args:
            output_dir: Directory receiving the exported files
            renderers: Export kind registry (defaults to all built-in kinds)
            diagram_renderer: Image renderer for svg/png diagrams
            graph_builder: Flow graph builder
        """
        self.output_dir = Path(output_dir)
        self.renderers = renderers if renderers is not None else default_renderers()
        self.diagram_renderer = diagram_renderer
        self.graph_builder = graph_builder or FlowGraphBuilder()
        self._logger = get_logger("export")

    def render(self, kind: ExportKind, test_cases: Sequence[TestCase]) -> bytes:
        """Produce the artifact bytes for one export kind without writing.

        Raises:
            ValueError: If no renderer is registered for the kind
        """
        kind = ExportKind(kind)
        renderer = self.renderers.get(kind)
        if renderer is None:
            raise ValueError(f"No renderer registered for export kind '{kind.value}'")
        return renderer(test_cases)

    def execute(
        self,
        test_cases: Sequence[TestCase],
        kinds: Optional[Iterable[ExportKind]] = None
    ) -> Dict[ExportKind, Path]:
        """Execute deliverables export.

        Args:
            test_cases: Collection snapshot
            kinds: Export kinds to write; all registered kinds by default

        Returns:
            Dictionary mapping each export kind to the written file path
        """
        kinds = list(kinds) if kinds is not None else list(self.renderers)
        written = {}
        for kind in kinds:
            kind = ExportKind(kind)
            written[kind] = self._write(kind.filename, self.render(kind, test_cases))
        return written

    def export_diagram(self, case: TestCase, fmt: str = "mmd") -> Path:
        """Write the flow diagram of one case.

        ``mmd`` writes the Mermaid description itself; ``svg`` and ``png``
        go through the diagram renderer.

        Raises:
            ValueError: If the format is unknown or no renderer is configured
            DiagramRenderError: If rendering fails
        """
        fmt = fmt.lower()
        if fmt not in DIAGRAM_FORMATS:
            raise ValueError(f"Unsupported diagram format '{fmt}'. Supported: {', '.join(DIAGRAM_FORMATS)}")

        code = self.graph_builder.to_mermaid(case)
        if fmt == "mmd":
            return self._write(f"{case.id}_flowchart.mmd", code.encode('utf-8'))

        if self.diagram_renderer is None:
            raise ValueError("A diagram renderer is required for svg/png export")
        if fmt == "svg":
            data = self.diagram_renderer.render_svg(code)
        else:
            data = self.diagram_renderer.render_png(code)
        return self._write(f"{case.id}_flowchart.{fmt}", data)

    def _write(self, filename: str, data: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        path.write_bytes(data)
        self._logger.info("artifact_written", path=str(path), size=len(data))
        return path
