import queue
import threading
from collections.abc import Callable

from docview.worker.protocol import Request, Response

ResponseListener = Callable[[Response], None]


class Channel:
    """Two-way link between the foreground and the dispatch loop.

    Requests travel through a FIFO queue; responses are pushed to every
    subscribed listener on the dispatch thread.
    """

    def __init__(self) -> None:
        self._requests: queue.Queue[Request | None] = queue.Queue()
        self._listeners: list[ResponseListener] = []
        self._lock = threading.Lock()

    def post(self, request: Request) -> None:
        self._requests.put(request)

    def receive(self) -> Request | None:
        """Block until the next request; None means the channel was shut down."""
        return self._requests.get()

    def shutdown(self) -> None:
        self._requests.put(None)

    def subscribe(self, listener: ResponseListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ResponseListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def reply(self, response: Response) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(response)
