from docview.config.settings import Settings
from docview.engine.base import BaseDocumentEngine
from docview.engine.pymupdf_adapter import PyMuPdfEngine


class EngineFactory:
    """Creates the document engine adapter named in settings."""

    ADAPTERS: dict[str, type[BaseDocumentEngine]] = {
        "pymupdf": PyMuPdfEngine,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentEngine:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
