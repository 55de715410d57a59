"""SortingYard — one input stack drained into one output stack per direction.

Phases are caller-driven: LOAD → SORT → REPORT.

Reversal law: wagons are pushed onto the input stack in input order and
popped in reverse, so each direction receives its wagons in the reverse of
their input order.  A direction's snapshot therefore lists same-direction
wagons last-input first.

INVARIANT: only factory-built wagons enter the input stack, so every
popped wagon has a destination.  A wagon without one is a programming
error and aborts the sort with :class:`UnroutableRecordError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from yardctl.domain.stack import EMPTY, Stack
from yardctl.domain.types import WagonType
from yardctl.domain.wagons import Wagon, WagonFactory

logger = logging.getLogger(__name__)


class YardError(Exception):
    """Base class for sorting yard invariant violations."""


class UnroutableRecordError(YardError):
    """A wagon reached the sort step with no output stack for its type."""

    def __init__(self, wagon: Wagon) -> None:
        self.wagon = wagon
        super().__init__(f"No direction registered for {wagon}")


def split_source(text: str) -> list[str]:
    """Split a text blob into lines for :meth:`SortingYard.load_from_source`.

    Only LF and CRLF end a line; other line-break characters stay
    inside the line and make its token malformed.
    """
    body = text.strip()
    if not body:
        return []
    return [line.rstrip("\r") for line in body.split("\n")]


class SortingYard:
    """T-shaped sorting yard with a fixed set of output directions."""

    def __init__(
        self,
        directions: Iterable[WagonType] | None = None,
        *,
        factory: type[WagonFactory] = WagonFactory,
    ) -> None:
        self._factory = factory
        self.input_stack: Stack[Wagon] = Stack()
        self.directions: dict[WagonType, Stack[Wagon]] = {
            WagonType(tag): Stack() for tag in (WagonType if directions is None else directions)
        }

    def direction(self, tag: WagonType | str) -> Stack[Wagon]:
        """Return the output stack for *tag* (case-insensitive)."""
        return self.directions[WagonType(str(tag).upper())]

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load_from_source(self, lines: Iterable[str]) -> int:
        """Replace the input stack contents with the wagons parsed from *lines*.

        Wagons are pushed in input order, so the last valid line ends up on
        top.  Returns the number of wagons loaded.
        """
        self.input_stack.clear()
        wagons = self._factory.parse_batch(lines)
        for wagon in wagons:
            self.input_stack.push(wagon)
        logger.debug("Loaded %d wagons onto the input stack", len(wagons))
        return len(wagons)

    # ------------------------------------------------------------------
    # Sort
    # ------------------------------------------------------------------

    def sort(self) -> int:
        """Drain the input stack into the direction stacks.

        Returns the number of wagons moved.  A second call with nothing
        loaded in between moves nothing.
        """
        moved = 0
        while True:
            wagon = self.input_stack.pop()
            if wagon is EMPTY:
                break
            target = self.directions.get(wagon.type)
            if target is None:
                # Put it back so nothing is lost before aborting.
                self.input_stack.push(wagon)
                raise UnroutableRecordError(wagon)
            target.push(wagon)
            moved += 1
        logger.debug("Sorted %d wagons", moved)
        return moved

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def report(self) -> dict[WagonType, list[Wagon]]:
        """Snapshot of every direction stack. Does not mutate state."""
        return {tag: stack.snapshot() for tag, stack in self.directions.items()}

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def clear_directions(self) -> None:
        for stack in self.directions.values():
            stack.clear()

    def clear(self) -> None:
        """Empty the input stack and every direction stack."""
        self.input_stack.clear()
        self.clear_directions()
