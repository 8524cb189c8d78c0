import hashlib
from collections import OrderedDict

from docview.engine.base import DocumentHandle
from docview.engine.facade import EngineFacade
from docview.logging.logger import Log
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import DocumentFile


def document_key(file: DocumentFile) -> str:
    """Identity of a document: sha256 of its bytes."""
    return hashlib.sha256(file.data).hexdigest()


class DocumentLoader:
    """Loads document handles through the facade, caching them by content hash.

    With `cache_size=0` every call reloads from raw bytes. Failed loads are
    never cached, so a malformed file fails the same way on every request.
    """

    def __init__(self, facade: EngineFacade, cache_size: int = 1) -> None:
        self._facade = facade
        self._cache_size = cache_size
        self._handles: OrderedDict[str, DocumentHandle] = OrderedDict()

    def load(self, file: DocumentFile | None) -> DocumentHandle:
        """Return a handle for `file`.

        Raises:
            InvalidInputError: if the file is missing or empty.
            EngineNotReadyError: if the engine is not initialized yet.
            EngineError: if the engine cannot decode the bytes.
        """
        if file is None or not file.data:
            raise InvalidInputError("Invalid file")
        if self._cache_size == 0:
            return self._facade.load(file.data)

        key = document_key(file)
        handle = self._handles.get(key)
        if handle is not None:
            self._handles.move_to_end(key)
            Log.debug(f"Reusing loaded document {file.name}")
            return handle

        handle = self._facade.load(file.data)
        self._handles[key] = handle
        while len(self._handles) > self._cache_size:
            _, evicted = self._handles.popitem(last=False)
            self._facade.close(evicted)
        Log.info(f"Loaded {len(file.data)} bytes for document {file.name}")
        return handle

    def clear(self) -> None:
        """Close every cached handle."""
        while self._handles:
            _, handle = self._handles.popitem(last=False)
            self._facade.close(handle)
