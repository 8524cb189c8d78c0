from abc import ABC, abstractmethod
from typing import Any

from docview.processor.models import HitBox

DocumentHandle = Any

POINTS_PER_INCH = 72


class BaseDocumentEngine(ABC):
    """Contract for all document engine adapters.

    Page numbers are 1-based. Every method raises EngineError when the
    underlying library fails.
    """

    @abstractmethod
    def load(self, data: bytes) -> DocumentHandle:
        """Open a document from raw bytes and return an opaque handle."""

    @abstractmethod
    def close(self, handle: DocumentHandle) -> None:
        """Release a handle returned by `load`."""

    @abstractmethod
    def page_count(self, handle: DocumentHandle) -> int:
        """Return the number of pages in the document."""

    @abstractmethod
    def render_page_raster(self, handle: DocumentHandle, page: int, resolution: int) -> str:
        """Render a page to an addressable PNG image at `resolution` DPI.

        Returns:
            A `data:image/png;base64,...` URI.
        """

    @abstractmethod
    def render_page_vector(self, handle: DocumentHandle, page: int) -> str:
        """Render a page to an SVG fragment."""

    @abstractmethod
    def render_page_markup(self, handle: DocumentHandle, page: int) -> str:
        """Render a page to an HTML fragment."""

    @abstractmethod
    def page_width(self, handle: DocumentHandle, page: int, resolution: int) -> float:
        """Return the page width in pixels at `resolution` DPI."""

    @abstractmethod
    def page_height(self, handle: DocumentHandle, page: int, resolution: int) -> float:
        """Return the page height in pixels at `resolution` DPI."""

    @abstractmethod
    def search_page_text(
        self, handle: DocumentHandle, page: int, query: str, max_hits: int
    ) -> list[HitBox]:
        """Find `query` on a page.

        Returns:
            At most `max_hits` boxes in document units (72 per inch), in
            reading order.
        """
