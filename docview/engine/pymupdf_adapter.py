import base64

import pymupdf

from docview.engine.base import POINTS_PER_INCH, BaseDocumentEngine
from docview.engine.exceptions import EngineError
from docview.processor.models import HitBox


class PyMuPdfEngine(BaseDocumentEngine):
    """Renders and searches PDF documents using PyMuPDF."""

    def load(self, data: bytes) -> pymupdf.Document:
        try:
            return pymupdf.open(stream=data, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise EngineError(f"pymupdf could not open document: {exc}") from exc

    def close(self, handle: pymupdf.Document) -> None:
        handle.close()

    def page_count(self, handle: pymupdf.Document) -> int:
        try:
            return int(handle.page_count)
        except Exception as exc:
            raise EngineError(f"pymupdf page count failed: {exc}") from exc

    def render_page_raster(self, handle: pymupdf.Document, page: int, resolution: int) -> str:
        try:
            pixmap = self._page(handle, page).get_pixmap(dpi=resolution)
            encoded = base64.b64encode(pixmap.tobytes("png")).decode("ascii")
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"pymupdf raster render of page {page} failed: {exc}") from exc
        return f"data:image/png;base64,{encoded}"

    def render_page_vector(self, handle: pymupdf.Document, page: int) -> str:
        try:
            return str(self._page(handle, page).get_svg_image())
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"pymupdf SVG render of page {page} failed: {exc}") from exc

    def render_page_markup(self, handle: pymupdf.Document, page: int) -> str:
        try:
            return str(self._page(handle, page).get_text("html"))
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"pymupdf HTML render of page {page} failed: {exc}") from exc

    def page_width(self, handle: pymupdf.Document, page: int, resolution: int) -> float:
        return self._page(handle, page).rect.width * resolution / POINTS_PER_INCH

    def page_height(self, handle: pymupdf.Document, page: int, resolution: int) -> float:
        return self._page(handle, page).rect.height * resolution / POINTS_PER_INCH

    def search_page_text(
        self, handle: pymupdf.Document, page: int, query: str, max_hits: int
    ) -> list[HitBox]:
        try:
            rects = self._page(handle, page).search_for(query)
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"pymupdf search on page {page} failed: {exc}") from exc
        return [
            HitBox(x=rect.x0, y=rect.y0, w=rect.width, h=rect.height)
            for rect in rects[:max_hits]
        ]

    def _page(self, handle: pymupdf.Document, page: int) -> pymupdf.Page:
        try:
            count = handle.page_count
            if not 1 <= page <= count:
                raise EngineError(f"Page {page} is out of range 1..{count}")
            return handle.load_page(page - 1)
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"pymupdf could not load page {page}: {exc}") from exc
