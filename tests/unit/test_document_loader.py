from unittest.mock import MagicMock

import pytest

from docview.engine.exceptions import EngineError
from docview.processor.document_loader import DocumentLoader
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import DocumentFile


def _make_file(data: bytes = b"%PDF-1.4 one", name: str = "one.pdf") -> DocumentFile:
    return DocumentFile(name=name, mime_type="application/pdf", data=data)


def _make_facade() -> MagicMock:
    facade = MagicMock()
    facade.load.side_effect = lambda data: f"handle:{data.decode()}"
    return facade


class TestLoadRejectsMissingFile:
    def test_raises_for_none(self) -> None:
        loader = DocumentLoader(_make_facade())
        with pytest.raises(InvalidInputError, match="Invalid file"):
            loader.load(None)

    def test_raises_for_empty_bytes(self) -> None:
        facade = _make_facade()
        loader = DocumentLoader(facade)

        with pytest.raises(InvalidInputError):
            loader.load(_make_file(data=b""))

        facade.load.assert_not_called()


class TestHandleCache:
    def test_reuses_handle_for_same_bytes(self) -> None:
        facade = _make_facade()
        loader = DocumentLoader(facade, cache_size=1)

        first = loader.load(_make_file())
        second = loader.load(_make_file(name="renamed.pdf"))

        assert first == second
        facade.load.assert_called_once()

    def test_reloads_every_time_when_disabled(self) -> None:
        facade = _make_facade()
        loader = DocumentLoader(facade, cache_size=0)

        loader.load(_make_file())
        loader.load(_make_file())

        assert facade.load.call_count == 2

    def test_evicts_and_closes_oldest_handle(self) -> None:
        facade = _make_facade()
        loader = DocumentLoader(facade, cache_size=1)

        loader.load(_make_file(b"%PDF-1.4 one"))
        loader.load(_make_file(b"%PDF-1.4 two"))

        facade.close.assert_called_once_with("handle:%PDF-1.4 one")

    def test_failed_load_is_not_cached(self) -> None:
        facade = _make_facade()
        facade.load.side_effect = EngineError("broken xref")
        loader = DocumentLoader(facade, cache_size=1)

        for _ in range(2):
            with pytest.raises(EngineError, match="broken xref"):
                loader.load(_make_file())

        assert facade.load.call_count == 2

    def test_clear_closes_cached_handles(self) -> None:
        facade = _make_facade()
        loader = DocumentLoader(facade, cache_size=2)
        loader.load(_make_file(b"%PDF-1.4 one"))
        loader.load(_make_file(b"%PDF-1.4 two"))

        loader.clear()

        assert facade.close.call_count == 2
