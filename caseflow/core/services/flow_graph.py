"""
Flow graph construction for a single test case.

Maps steps to nodes and dependencies/branches to directed edges, then
serializes the result as a Mermaid flowchart. This is a structural mapping
only: cycles are allowed and nothing is validated beyond index bounds.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from caseflow.core.domain.test_case import ExpectedStatus, TestCase
from caseflow.core.services.logger import get_logger

EDGE_DEPENDENCY = "dependency"
EDGE_BRANCH = "branch"

# Fill, stroke and text colors per style class
CLASS_DEFS = {
    "success": "fill:#dcfce7,stroke:#22c55e,color:#166534",
    "fail": "fill:#fee2e2,stroke:#ef4444,color:#b91c1c",
    "exception": "fill:#ffedd5,stroke:#f97316,color:#9a3412",
}


def node_id(index: int) -> str:
    return f"S{index}"


@dataclass(frozen=True)
class FlowNode:
    """One step of the case."""
    index: int
    label: str
    style_class: str

    @property
    def id(self) -> str:
        return node_id(self.index)


@dataclass(frozen=True)
class FlowEdge:
    """Directed edge between two steps."""
    source: int
    target: int
    kind: str
    label: Optional[str] = None

    @property
    def source_id(self) -> str:
        return node_id(self.source)

    @property
    def target_id(self) -> str:
        return node_id(self.target)


@dataclass
class FlowGraph:
    """Graph description of one case."""
    case_id: str
    nodes: List[FlowNode] = field(default_factory=list)
    edges: List[FlowEdge] = field(default_factory=list)
    direction: str = "TD"

    def edges_by_kind(self, kind: str) -> List[FlowEdge]:
        return [edge for edge in self.edges if edge.kind == kind]

    def to_mermaid(self) -> str:
        """
        Generate the Mermaid flowchart text for this graph.

        Layout: header, node declarations, edge declarations, class
        assignments, then class definitions.

        Returns:
            Mermaid diagram as a string
        """
        lines = [f"graph {self.direction}"]

        for node in self.nodes:
            lines.append(f'{node.id}["{escape_label(node.label)}"]')

        for edge in self.edges:
            if edge.label is None:
                lines.append(f"{edge.source_id} --> {edge.target_id}")
            else:
                lines.append(f"{edge.source_id} -->|{escape_edge_label(edge.label)}| {edge.target_id}")

        for node in self.nodes:
            lines.append(f"class {node.id} {node.style_class}")

        for style_class, style in CLASS_DEFS.items():
            lines.append(f"classDef {style_class} {style}")

        return "\n".join(lines) + "\n"


def escape_label(text: str) -> str:
    """Escape text placed inside a quoted Mermaid node label."""
    return text.replace('"', '#quot;').replace('\n', ' ')


def escape_edge_label(text: str) -> str:
    """Escape text placed between the pipes of an edge label."""
    return escape_label(text).replace('|', '#124;')


class FlowGraphBuilder:
    """Builds the flow graph of a test case."""

    def __init__(self):
        self._logger = get_logger("flow_graph")

    def build(self, case: TestCase) -> FlowGraph:
        """
        Build the graph of one case.

        Nodes follow step order. Dependency edges are emitted first in step
        order, then branch edges in step order and branch order. Edges whose
        source or target index falls outside the step list are dropped.

        Args:
            case: Test case to map

        Returns:
            FlowGraph for the case
        """
        graph = FlowGraph(case_id=case.id)
        step_count = len(case.steps)

        for idx, step in enumerate(case.steps):
            graph.nodes.append(FlowNode(
                index=idx,
                label=node_label(step.action, step.expected_status),
                style_class=step.expected_status.style_class,
            ))

        for idx, step in enumerate(case.steps):
            if step.depends_on is None:
                continue
            if not 0 <= step.depends_on < step_count:
                self._dropped(case, EDGE_DEPENDENCY, step.depends_on, idx)
                continue
            graph.edges.append(FlowEdge(source=step.depends_on, target=idx, kind=EDGE_DEPENDENCY))

        for idx, step in enumerate(case.steps):
            for branch in step.branches:
                if not 0 <= branch.next_step < step_count:
                    self._dropped(case, EDGE_BRANCH, idx, branch.next_step)
                    continue
                graph.edges.append(FlowEdge(
                    source=idx,
                    target=branch.next_step,
                    kind=EDGE_BRANCH,
                    label=branch.condition,
                ))

        return graph

    def to_mermaid(self, case: TestCase) -> str:
        """Shortcut for ``build(case).to_mermaid()``."""
        return self.build(case).to_mermaid()

    def _dropped(self, case: TestCase, kind: str, source: int, target: int) -> None:
        self._logger.warning(
            "dangling_edge_dropped",
            case_id=case.id,
            edge_kind=kind,
            source=source,
            target=target,
            step_count=len(case.steps),
        )


def node_label(action: str, status: ExpectedStatus) -> str:
    return f"{action} | {status.value}"
