from dataclasses import dataclass

from docview.config.settings import Settings
from docview.controllers.base import StateController
from docview.controllers.search import SearchStateController
from docview.gateway.exceptions import RequestFailedError
from docview.gateway.gateway import RequestGateway
from docview.logging.logger import Log
from docview.processor.models import ConversionMode, DocumentFile, PageArtifact


@dataclass(frozen=True)
class ProcessingState:
    busy: bool = False
    active_file: DocumentFile | None = None
    mode: ConversionMode = ConversionMode.RASTER
    error_message: str = ""
    artifacts: tuple[PageArtifact, ...] = ()


class ProcessingStateController(StateController[ProcessingState]):
    """Owns the active document, the output mode and the rendered pages.

    A response is applied only if it answers the most recent conversion
    request; a failed conversion keeps the previously rendered pages.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        settings: Settings,
        search: SearchStateController | None = None,
    ) -> None:
        super().__init__(ProcessingState())
        self._gateway = gateway
        self._document_mime_type = settings.document_mime_type
        self._search = search

    async def select_file(self, file: DocumentFile | None) -> None:
        if file is None:
            return
        if file.mime_type != self._document_mime_type:
            Log.warning(f"Rejected {file.name}: {file.mime_type} is not valid")
            self._update(busy=False, error_message=f"{file.mime_type} is not valid")
            return

        self._update(busy=True, active_file=file)
        self._clear_search()
        await self._convert(file, self._state.mode)

    async def change_mode(self, mode: ConversionMode) -> None:
        file = self._state.active_file
        if file is None:
            self._update(mode=mode)
            return

        self._update(busy=True, mode=mode)
        self._clear_search()
        await self._convert(file, mode)

    async def _convert(self, file: DocumentFile, mode: ConversionMode) -> None:
        try:
            pending = self._gateway.convert(file, mode)
        except RequestFailedError as exc:
            Log.error(f"Conversion of {file.name} could not be sent: {exc}")
            self._latest_sequence_id = None
            self._update(busy=False, error_message=str(exc))
            return
        self._latest_sequence_id = pending.sequence_id
        try:
            artifacts = await pending
        except RequestFailedError as exc:
            if not self._is_latest(pending.sequence_id):
                Log.debug(f"Ignoring failure of stale conversion {pending.sequence_id}")
                return
            Log.error(f"Conversion of {file.name} to {mode.value} failed: {exc}")
            self._update(busy=False, error_message=str(exc))
            return
        if not self._is_latest(pending.sequence_id):
            Log.debug(f"Ignoring stale conversion {pending.sequence_id}")
            return
        Log.info(f"Converted {file.name}: {len(artifacts)} pages as {mode.value}")
        self._update(busy=False, error_message="", artifacts=tuple(artifacts))

    def _clear_search(self) -> None:
        if self._search is not None:
            self._search.clear()
