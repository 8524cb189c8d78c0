import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from docview.config.settings import Settings
from docview.controllers.base import StateController
from docview.gateway.exceptions import RequestFailedError
from docview.gateway.gateway import RequestGateway
from docview.logging.logger import Log
from docview.processor.models import DocumentFile, PageSearchResult, total_hits


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    searching: bool = False
    results: tuple[PageSearchResult, ...] = ()
    error_message: str = ""

    @property
    def total_hits(self) -> int:
        return total_hits(list(self.results))


class SearchStateController(StateController[SearchState]):
    """Debounces query edits and keeps the latest search results.

    Only a query that stays unchanged for the whole debounce interval is sent.
    Emptying the query clears the results at once, without a request.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        settings: Settings,
        file_provider: Callable[[], DocumentFile | None],
    ) -> None:
        super().__init__(SearchState())
        self._gateway = gateway
        self._debounce_seconds = settings.debounce_ms / 1000
        self._file_provider = file_provider
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    def set_query(self, query: str) -> None:
        """Record a keystroke and restart the debounce timer."""
        self._cancel_timer()
        if not query:
            self._latest_sequence_id = None
            self._update(query="", searching=False, results=(), error_message="")
            return
        self._update(query=query)
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._fire, query)

    def clear(self) -> None:
        self.set_query("")

    async def search_now(self, query: str) -> None:
        """Send a search for `query` and apply its result if still the latest."""
        try:
            pending = self._gateway.search(self._file_provider(), query)
        except RequestFailedError as exc:
            Log.warning(f"Search for {query!r} could not be sent: {exc}")
            self._latest_sequence_id = None
            self._update(searching=False, error_message=str(exc))
            return
        self._latest_sequence_id = pending.sequence_id
        self._update(searching=True, error_message="")
        try:
            results = await pending
        except RequestFailedError as exc:
            if not self._is_latest(pending.sequence_id):
                Log.debug(f"Ignoring failure of stale search {pending.sequence_id}")
                return
            Log.warning(f"Search for {query!r} failed: {exc}")
            self._update(searching=False, error_message=str(exc))
            return
        if not self._is_latest(pending.sequence_id):
            Log.debug(f"Ignoring stale search {pending.sequence_id}")
            return
        self._update(searching=False, results=tuple(results))

    async def wait_idle(self) -> None:
        """Wait for every search already fired; pending timers are not awaited."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def _fire(self, query: str) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.search_now(query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
