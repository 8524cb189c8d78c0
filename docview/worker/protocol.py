"""Message envelope exchanged between the foreground gateway and the dispatch loop.

Every request carries a sequence id that its response echoes back, so the
gateway can match responses to pending requests regardless of arrival order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from docview.engine.exceptions import EngineNotReadyError
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import ConversionMode, DocumentFile


class RequestKind(str, Enum):
    CONVERT = "convert"
    SEARCH = "search"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid-input"
    ENGINE_NOT_READY = "engine-not-ready"
    ENGINE_FAILURE = "engine-failure"

    @classmethod
    def of(cls, exc: BaseException) -> "ErrorKind":
        if isinstance(exc, InvalidInputError):
            return cls.INVALID_INPUT
        if isinstance(exc, EngineNotReadyError):
            return cls.ENGINE_NOT_READY
        return cls.ENGINE_FAILURE


@dataclass(frozen=True)
class ConvertRequest:
    sequence_id: int
    file: DocumentFile | None
    mode: ConversionMode | None

    kind = RequestKind.CONVERT


@dataclass(frozen=True)
class SearchRequest:
    sequence_id: int
    file: DocumentFile | None
    query: str | None

    kind = RequestKind.SEARCH


Request = ConvertRequest | SearchRequest


@dataclass(frozen=True)
class ResponseError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Response:
    sequence_id: int
    ok: bool
    payload: Any = None
    error: ResponseError | None = None

    @classmethod
    def success(cls, sequence_id: int, payload: Any) -> "Response":
        return cls(sequence_id=sequence_id, ok=True, payload=payload)

    @classmethod
    def failure(cls, sequence_id: int, exc: BaseException) -> "Response":
        return cls(
            sequence_id=sequence_id,
            ok=False,
            error=ResponseError(kind=ErrorKind.of(exc), message=str(exc)),
        )
