from unittest.mock import patch

import pytest

from docview.engine.factory import EngineFactory
from docview.engine.pymupdf_adapter import PyMuPdfEngine


def _make_settings(pdf_engine: str):  # type: ignore[no-untyped-def]
    """Create a minimal Settings-like object with only pdf_engine."""
    with patch("docview.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        return settings


class TestEngineFactory:
    def test_creates_pymupdf_engine(self) -> None:
        settings = _make_settings("pymupdf")
        engine = EngineFactory.create(settings)
        assert isinstance(engine, PyMuPdfEngine)

    def test_is_case_insensitive(self) -> None:
        settings = _make_settings("PyMuPDF")
        engine = EngineFactory.create(settings)
        assert isinstance(engine, PyMuPdfEngine)

    def test_raises_for_unknown_engine(self) -> None:
        settings = _make_settings("ghostscript")
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            EngineFactory.create(settings)
