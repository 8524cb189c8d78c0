from collections.abc import Callable
from dataclasses import replace
from typing import Any, Generic, TypeVar

S = TypeVar("S")

StateListener = Callable[[S], None]


class StateController(Generic[S]):
    """Single writer of one frozen state record.

    Every change replaces the record and notifies subscribers with the new value.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[StateListener[S]] = []
        self._latest_sequence_id: int | None = None

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, listener: StateListener[S]) -> None:
        self._listeners.append(listener)

    def _update(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)  # type: ignore[type-var]
        for listener in list(self._listeners):
            listener(self._state)

    def _is_latest(self, sequence_id: int) -> bool:
        return sequence_id == self._latest_sequence_id
