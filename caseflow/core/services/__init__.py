"""
Core services: the case book, flow graph construction and logging.
"""
from .case_book import CaseBook, DEFAULT_STORAGE_KEY
from .flow_graph import FlowGraph, FlowGraphBuilder, FlowNode, FlowEdge, EDGE_BRANCH, EDGE_DEPENDENCY
from .logger import StructuredLogger, StructuredFormatter, configure_logging, get_logger

__all__ = [
    'CaseBook',
    'DEFAULT_STORAGE_KEY',
    'FlowGraph',
    'FlowGraphBuilder',
    'FlowNode',
    'FlowEdge',
    'EDGE_BRANCH',
    'EDGE_DEPENDENCY',
    'StructuredLogger',
    'StructuredFormatter',
    'configure_logging',
    'get_logger',
]
