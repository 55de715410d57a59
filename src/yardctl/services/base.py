"""BaseService — foundation for services that drive a SortingYard.

Every service receives (or builds) one :class:`SortingYard` at
construction time and owns a single lock for it.  Concurrent callers
sharing a service are serialized: one load/sort/report cycle at a time.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from yardctl.domain.yard import SortingYard


class BaseService:
    """Base for service-layer classes.

    Usage::

        class YardService(BaseService):
            def sort(self) -> ServiceResult:
                with self._exclusive() as yard:
                    moved = yard.sort()
                    ...
    """

    def __init__(self, yard: SortingYard | None = None) -> None:
        self._yard = yard if yard is not None else SortingYard()
        self._lock = threading.Lock()

    @property
    def yard(self) -> SortingYard:
        return self._yard

    @contextmanager
    def _exclusive(self) -> Iterator[SortingYard]:
        """Hold the yard lock for the duration of the block."""
        with self._lock:
            yield self._yard
