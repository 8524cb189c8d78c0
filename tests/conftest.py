import io
from unittest.mock import MagicMock

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docview.engine.base import BaseDocumentEngine
from docview.engine.facade import EngineFacade
from docview.processor.models import DocumentFile
from docview.worker.channel import Channel
from docview.worker.protocol import Request


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """Three letter pages: one hit on page 1, none on page 2, two on page 3."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "needle on the first page")
    c.showPage()
    c.drawString(72, 720, "nothing to find here")
    c.showPage()
    c.drawString(72, 720, "needle at the top")
    c.drawString(72, 360, "needle further down")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def three_page_pdf(three_page_pdf_bytes: bytes) -> DocumentFile:
    return DocumentFile(name="three.pdf", mime_type="application/pdf", data=three_page_pdf_bytes)


@pytest.fixture()
def mock_engine() -> MagicMock:
    """Engine double for a three-page letter-size document without hits."""
    engine = MagicMock(spec=BaseDocumentEngine)
    engine.load.return_value = "handle"
    engine.page_count.return_value = 3
    engine.render_page_raster.side_effect = (
        lambda handle, page, resolution: f"png:{page}@{resolution}"
    )
    engine.render_page_vector.side_effect = lambda handle, page: f"<svg>{page}</svg>"
    engine.render_page_markup.side_effect = lambda handle, page: f"<div>{page}</div>"
    engine.page_width.side_effect = lambda handle, page, resolution: 8.5 * resolution
    engine.page_height.side_effect = lambda handle, page, resolution: 11 * resolution
    engine.search_page_text.return_value = []
    return engine


@pytest.fixture()
def ready_facade(mock_engine: MagicMock) -> EngineFacade:
    facade = EngineFacade()
    facade.initialize(mock_engine)
    return facade


class RecordingChannel(Channel):
    """Channel that remembers every request posted to it."""

    def __init__(self) -> None:
        super().__init__()
        self.posted: list[Request] = []

    def post(self, request: Request) -> None:
        self.posted.append(request)
        super().post(request)


@pytest.fixture()
def recording_channel() -> RecordingChannel:
    return RecordingChannel()
