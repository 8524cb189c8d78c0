from pathlib import Path

import pytest

from docview.processor.models import DocumentFile, HitBox, PageSearchResult, total_hits


class TestDocumentFileFromPath:
    def test_reads_pdf_with_guessed_mime_type(self, tmp_path: Path, sample_pdf_bytes: bytes) -> None:
        path = tmp_path / "report.pdf"
        path.write_bytes(sample_pdf_bytes)

        file = DocumentFile.from_path(path)

        assert file.name == "report.pdf"
        assert file.mime_type == "application/pdf"
        assert file.data == sample_pdf_bytes

    def test_unknown_extension_falls_back_to_octet_stream(self, tmp_path: Path) -> None:
        path = tmp_path / "payload.zzqx"
        path.write_bytes(b"\x00\x01")

        file = DocumentFile.from_path(path)

        assert file.mime_type == "application/octet-stream"
        assert file.data == b"\x00\x01"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            DocumentFile.from_path(tmp_path / "absent.pdf")


class TestSearchResults:
    def test_hit_box_scales_per_axis(self) -> None:
        box = HitBox(x=10, y=20, w=30, h=40).scaled(2, 0.5)

        assert box == HitBox(x=20, y=10, w=60, h=20)

    def test_total_hits_sums_pages(self) -> None:
        results = [
            PageSearchResult(page_number=1, hits=(HitBox(0, 0, 1, 1),), page_width=612, page_height=792),
            PageSearchResult(page_number=2, hits=(), page_width=612, page_height=792),
        ]

        assert total_hits(results) == 1
