import threading

from docview.config.settings import Settings
from docview.engine.facade import EngineFacade
from docview.logging.logger import Log
from docview.processor.conversion import ConversionPipeline
from docview.processor.document_loader import DocumentLoader
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import ConversionMode
from docview.processor.search import SearchPipeline
from docview.worker.channel import Channel
from docview.worker.protocol import ConvertRequest, Request, Response, SearchRequest


class DispatchLoop:
    """Receive loop: take one request -> route to a pipeline -> reply.

    Requests are handled strictly one at a time. A failing request produces a
    failure response and never stops the loop.
    """

    def __init__(
        self,
        channel: Channel,
        facade: EngineFacade,
        settings: Settings,
    ) -> None:
        self._channel = channel
        self._loader = DocumentLoader(facade, settings.document_cache_size)
        self._conversion = ConversionPipeline(facade, settings.render_resolution)
        self._search = SearchPipeline(
            facade,
            settings.search_reference_resolution,
            settings.max_hits_per_page,
        )
        self._thread: threading.Thread | None = None

    def start(self) -> threading.Thread:
        """Run the loop on a dedicated daemon thread."""
        self._thread = threading.Thread(
            target=self.run, name="docview-dispatch", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = 5.0) -> None:
        self._channel.shutdown()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run(self, max_requests: int | None = None) -> None:
        """Serve requests until the channel is shut down.

        If max_requests is set, stop after handling that many (for testing).
        """
        Log.info("Dispatch loop started, waiting for requests")
        handled = 0
        while max_requests is None or handled < max_requests:
            request = self._channel.receive()
            if request is None:
                break
            self._channel.reply(self.handle(request))
            handled += 1
        self._loader.clear()
        Log.info("Dispatch loop stopped")

    def handle(self, request: Request) -> Response:
        """Execute a single request, converting any error into a failure response."""
        try:
            Log.info(f"Handling {request.kind.value} request {request.sequence_id}")
            payload = self._route(request)
        except Exception as exc:
            Log.error(f"Request {request.sequence_id} failed: {exc}")
            return Response.failure(request.sequence_id, exc)
        return Response.success(request.sequence_id, payload)

    def _route(self, request: Request) -> object:
        match request:
            case ConvertRequest(file=file, mode=mode):
                conversion_mode = self._parse_mode(mode)
                handle = self._loader.load(file)
                return self._conversion.convert(handle, conversion_mode)
            case SearchRequest(file=file, query=query):
                if not query:
                    raise InvalidInputError("Invalid search query")
                handle = self._loader.load(file)
                return self._search.search(handle, query)
            case _:
                raise InvalidInputError(f"Unknown request: {request!r}")

    @staticmethod
    def _parse_mode(mode: object) -> ConversionMode:
        try:
            return ConversionMode(mode)
        except ValueError as exc:
            raise InvalidInputError(f"Unsupported conversion mode: {mode!r}") from exc
