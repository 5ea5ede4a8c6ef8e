"""
Diagram rendering through a mermaid.ink compatible service.
"""
from .http_client import MermaidInkClient

__all__ = ['MermaidInkClient']
