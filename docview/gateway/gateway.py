import asyncio
import itertools
from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from docview.gateway.exceptions import GatewayClosedError, RequestFailedError
from docview.logging.logger import Log
from docview.processor.models import ConversionMode, DocumentFile
from docview.worker.channel import Channel
from docview.worker.protocol import (
    ConvertRequest,
    ErrorKind,
    Request,
    RequestKind,
    Response,
    SearchRequest,
)


@dataclass(frozen=True)
class PendingRequest:
    """An outstanding request; await it for the payload of its own response."""

    sequence_id: int
    kind: RequestKind
    future: asyncio.Future[Any]

    def __await__(self) -> Generator[Any, None, Any]:
        return self.future.__await__()


class RequestGateway:
    """Foreground end of the channel.

    Tags every request with a monotonically increasing sequence id and resolves
    only the pending future whose id the response echoes. Must be created and
    used on the foreground event loop; responses may arrive on any thread.
    """

    def __init__(self, channel: Channel, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._channel = channel
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._sequence = itertools.count(1)
        self._pending: dict[int, asyncio.Future[Any]] = {}
        self._closed = False
        channel.subscribe(self._on_response)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def send(
        self,
        kind: RequestKind,
        file: DocumentFile | None,
        mode: ConversionMode | None = None,
        query: str | None = None,
    ) -> PendingRequest:
        if self._closed:
            raise GatewayClosedError()

        sequence_id = next(self._sequence)
        request: Request
        match kind:
            case RequestKind.CONVERT:
                request = ConvertRequest(sequence_id=sequence_id, file=file, mode=mode)
            case RequestKind.SEARCH:
                request = SearchRequest(sequence_id=sequence_id, file=file, query=query)
            case _:
                raise ValueError(f"Unknown request kind: {kind!r}")

        future: asyncio.Future[Any] = self._loop.create_future()
        self._pending[sequence_id] = future
        self._channel.post(request)
        Log.debug(f"Sent {kind.value} request {sequence_id}")
        return PendingRequest(sequence_id=sequence_id, kind=kind, future=future)

    def convert(self, file: DocumentFile | None, mode: ConversionMode) -> PendingRequest:
        return self.send(RequestKind.CONVERT, file, mode=mode)

    def search(self, file: DocumentFile | None, query: str) -> PendingRequest:
        return self.send(RequestKind.SEARCH, file, query=query)

    def close(self) -> None:
        """Stop listening and fail every request that is still pending."""
        self._closed = True
        self._channel.unsubscribe(self._on_response)
        pending, self._pending = self._pending, {}
        for future in pending.values():
            if not future.done():
                future.set_exception(GatewayClosedError())

    def _on_response(self, response: Response) -> None:
        try:
            self._loop.call_soon_threadsafe(self._resolve, response)
        except RuntimeError:
            Log.warning(f"Dropped response {response.sequence_id}: event loop is closed")

    def _resolve(self, response: Response) -> None:
        future = self._pending.pop(response.sequence_id, None)
        if future is None:
            Log.warning(f"Dropped response for unknown request {response.sequence_id}")
            return
        if future.done():
            return
        if response.ok:
            future.set_result(response.payload)
        elif response.error is not None:
            future.set_exception(RequestFailedError.from_response_error(response.error))
        else:
            future.set_exception(
                RequestFailedError(
                    ErrorKind.ENGINE_FAILURE,
                    f"Request {response.sequence_id} failed without an error description",
                )
            )
