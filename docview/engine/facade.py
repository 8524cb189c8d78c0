import threading
from collections.abc import Callable

from docview.engine.base import BaseDocumentEngine, DocumentHandle
from docview.engine.exceptions import EngineError, EngineNotReadyError
from docview.logging.logger import Log
from docview.processor.models import HitBox


class EngineFacade:
    """Lazily-initialized handle to the document engine.

    Every call fails fast with EngineNotReadyError until an engine is installed,
    or with EngineError once background initialization has failed.
    """

    def __init__(self) -> None:
        self._engine: BaseDocumentEngine | None = None
        self._init_error: Exception | None = None

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    def initialize(self, engine: BaseDocumentEngine) -> None:
        self._engine = engine
        self._init_error = None
        Log.info(f"Document engine ready: {type(engine).__name__}")

    def initialize_in_background(
        self, factory: Callable[[], BaseDocumentEngine]
    ) -> threading.Thread:
        """Build the engine on a daemon thread so callers never wait for it."""

        def _init() -> None:
            try:
                engine = factory()
            except Exception as exc:
                Log.error(f"Document engine failed to initialize: {exc}")
                self._init_error = exc
                return
            self.initialize(engine)

        thread = threading.Thread(target=_init, name="docview-engine-init", daemon=True)
        thread.start()
        return thread

    def reset(self) -> None:
        self._engine = None
        self._init_error = None

    def load(self, data: bytes) -> DocumentHandle:
        return self._require().load(data)

    def close(self, handle: DocumentHandle) -> None:
        self._require().close(handle)

    def page_count(self, handle: DocumentHandle) -> int:
        return self._require().page_count(handle)

    def render_page_raster(self, handle: DocumentHandle, page: int, resolution: int) -> str:
        return self._require().render_page_raster(handle, page, resolution)

    def render_page_vector(self, handle: DocumentHandle, page: int) -> str:
        return self._require().render_page_vector(handle, page)

    def render_page_markup(self, handle: DocumentHandle, page: int) -> str:
        return self._require().render_page_markup(handle, page)

    def page_width(self, handle: DocumentHandle, page: int, resolution: int) -> float:
        return self._require().page_width(handle, page, resolution)

    def page_height(self, handle: DocumentHandle, page: int, resolution: int) -> float:
        return self._require().page_height(handle, page, resolution)

    def search_page_text(
        self, handle: DocumentHandle, page: int, query: str, max_hits: int
    ) -> list[HitBox]:
        return self._require().search_page_text(handle, page, query, max_hits)

    def _require(self) -> BaseDocumentEngine:
        if self._engine is None and self._init_error is not None:
            raise EngineError(f"Document engine failed to initialize: {self._init_error}")
        if self._engine is None:
            raise EngineNotReadyError("Document engine is not ready")
        return self._engine


default_facade = EngineFacade()
