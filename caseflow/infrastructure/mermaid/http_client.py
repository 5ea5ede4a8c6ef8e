"""
Mermaid rendering HTTP client.

Sends a Mermaid graph description to a mermaid.ink compatible service and
returns the rendered image. The description travels base64url-encoded in the
request path.
"""
import base64

import requests

from caseflow.core.domain.errors import DiagramRenderError
from caseflow.core.interfaces.output_generator import IDiagramRenderer
from caseflow.core.services.logger import get_logger

DEFAULT_BASE_URL = "https://mermaid.ink"


class MermaidInkClient(IDiagramRenderer):
    """Low-level HTTP client for the diagram rendering service."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 30):
        """Initialize rendering client.

        Args:
            base_url: Service root, e.g. https://mermaid.ink
            timeout: Request timeout in seconds
        """
        if not base_url:
            raise ValueError("Rendering service URL is required")
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._logger = get_logger("mermaid")

    @property
    def base_url(self) -> str:
        """Base URL for API calls."""
        return self._base_url

    @staticmethod
    def encode(code: str) -> str:
        """Encode a graph description for use in the request path."""
        return base64.urlsafe_b64encode(code.encode('utf-8')).decode('ascii')

    def svg_url(self, code: str) -> str:
        return f"{self._base_url}/svg/{self.encode(code)}"

    def png_url(self, code: str) -> str:
        return f"{self._base_url}/img/{self.encode(code)}"

    def _get(self, url: str, params=None) -> bytes:
        """Make GET request and return the raw body.

        Raises:
            DiagramRenderError: If the request fails or returns an error status
        """
        try:
            response = requests.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self._logger.error("diagram_render_failed", service=self._base_url, error=str(e))
            raise DiagramRenderError(f"Diagram rendering failed: {e}") from e
        return response.content

    def render_svg(self, code: str) -> bytes:
        return self._get(self.svg_url(code))

    def render_png(self, code: str) -> bytes:
        return self._get(self.png_url(code), params={'type': 'png'})
