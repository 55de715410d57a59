"""Generic LIFO stack with an explicit empty signal.

INVARIANT: ``pop()`` and ``peek()`` never raise on an empty stack; they
return :data:`EMPTY` instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Generic, Literal, TypeVar

from yardctl.domain.capabilities import log_entity, serialize_state

T = TypeVar("T")


class _Empty(Enum):
    EMPTY = "EMPTY"

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY: Final = _Empty.EMPTY
"""Returned by :meth:`Stack.pop` and :meth:`Stack.peek` when there is nothing to return."""

Empty = Literal[_Empty.EMPTY]


class Stack(Generic[T]):
    """Last-in, first-out container.

    The top of the stack is the most recently pushed item, which is also
    the last element of :meth:`snapshot`.
    """

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> T | Empty:
        if not self._items:
            return EMPTY
        return self._items.pop()

    def peek(self) -> T | Empty:
        if not self._items:
            return EMPTY
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items = []

    def snapshot(self) -> list[T]:
        """Copy of the contents in push order (top of stack last)."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"

    # -- capabilities ---------------------------------------------------

    def log(self, message: str) -> None:
        log_entity(self, message)

    def serialize(self) -> str:
        return serialize_state({"items": self._items})
