"""YardService — load, sort, and report through one locked SortingYard.

Pipeline: PREPARE → LOAD → SORT → REPORT

Rejected input lines are dropped during LOAD exactly as the yard drops
them.  ``inspect()`` is the separate, explicit way to see what happened
to each line; it never touches the yard.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from yardctl.domain.types import WagonType
from yardctl.domain.wagons import Rejected, WagonFactory
from yardctl.domain.yard import SortingYard, UnroutableRecordError
from yardctl.services.base import BaseService
from yardctl.services.result import ErrorCode, ServiceResult
from yardctl.services.telemetry import trace_span, traced

COMMENT_PREFIX = "#"


class YardService(BaseService):
    """Service wrapper around a single sorting yard."""

    def __init__(
        self,
        yard: SortingYard | None = None,
        *,
        strip_comments: bool = True,
    ) -> None:
        super().__init__(yard)
        self._strip_comments = strip_comments

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def load(self, lines: Iterable[str]) -> ServiceResult:
        """Replace the input stack with the wagons parsed from *lines*."""
        with self._exclusive() as yard:
            count = self._load(yard, lines)
            return ServiceResult(
                ok=True,
                op="load",
                data={"count": count, "input_size": yard.input_stack.size()},
            )

    @traced
    def sort(self) -> ServiceResult:
        """Drain the input stack into the direction stacks."""
        with self._exclusive() as yard:
            try:
                moved = self._sort(yard)
            except UnroutableRecordError as exc:
                return self._unroutable("sort", yard, exc)
            return ServiceResult(
                ok=True,
                op="sort",
                data={
                    "moved": moved,
                    "input_size": yard.input_stack.size(),
                    "directions": {str(tag): s.size() for tag, s in yard.directions.items()},
                },
            )

    @traced
    def report(self) -> ServiceResult:
        """Current contents of every direction, in snapshot order."""
        with self._exclusive() as yard:
            return ServiceResult(ok=True, op="report", data=_report_payload(yard))

    @traced
    def run(self, lines: Iterable[str], *, reset: bool = False) -> ServiceResult:
        """Full LOAD → SORT → REPORT cycle under a single lock hold.

        With *reset*, the direction stacks are emptied first so the report
        only reflects this input.
        """
        with self._exclusive() as yard:
            if reset:
                yard.clear_directions()
            loaded = self._load(yard, lines)
            try:
                moved = self._sort(yard)
            except UnroutableRecordError as exc:
                return self._unroutable("run", yard, exc)
            with trace_span("report"):
                payload = _report_payload(yard)
            return ServiceResult(
                ok=True,
                op="run",
                data={"loaded": loaded, "moved": moved, **payload},
            )

    @traced
    def inspect(self, lines: Iterable[str]) -> ServiceResult:
        """Per-line parse outcomes. The yard is left untouched."""
        items: list[dict[str, Any]] = []
        counts = {"accepted": 0, "rejected": 0, "skipped": 0}

        for index, line in enumerate(self._prepare(lines), start=1):
            token = line.strip()
            item: dict[str, Any] = {"line": index, "token": token}
            if not token:
                item["status"] = "skipped"
            else:
                result = WagonFactory.create_from_token(token)
                if isinstance(result, Rejected):
                    item.update(
                        status="rejected",
                        reason=str(result.reason),
                        detail=result.detail,
                    )
                else:
                    item.update(status="accepted", wagon=result.to_dict())
            counts[item["status"]] += 1
            items.append(item)

        return ServiceResult(
            ok=True,
            op="inspect",
            data={"items": items, "count": len(items), **counts},
        )

    @traced
    def clear(self) -> ServiceResult:
        """Empty the input stack and every direction stack."""
        with self._exclusive() as yard:
            yard.clear()
            return ServiceResult(ok=True, op="clear", data=_report_payload(yard))

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _prepare(self, lines: Iterable[str]) -> list[str]:
        """Blank out comment lines when comment stripping is enabled."""
        if not self._strip_comments:
            return list(lines)
        return ["" if line.lstrip().startswith(COMMENT_PREFIX) else line for line in lines]

    def _load(self, yard: SortingYard, lines: Iterable[str]) -> int:
        with trace_span("load") as span:
            count = yard.load_from_source(self._prepare(lines))
            if span:
                span.annotate("count", count)
        return count

    def _sort(self, yard: SortingYard) -> int:
        with trace_span("sort") as span:
            moved = yard.sort()
            if span:
                span.annotate("moved", moved)
        return moved

    @staticmethod
    def _unroutable(op: str, yard: SortingYard, exc: UnroutableRecordError) -> ServiceResult:
        return ServiceResult.failure(
            op,
            ErrorCode.UNROUTABLE,
            str(exc),
            wagon=exc.wagon.token,
            input_size=yard.input_stack.size(),
        )


def _report_payload(yard: SortingYard) -> dict[str, Any]:
    """Serialize every direction as ``{tag: {count, wagons}}`` plus totals."""
    report = yard.report()
    directions: dict[str, Any] = {}
    for tag in WagonType:
        if tag not in report:
            continue
        wagons = report[tag]
        directions[str(tag)] = {
            "count": len(wagons),
            "wagons": [w.to_dict() for w in wagons],
        }
    return {
        "directions": directions,
        "total": sum(d["count"] for d in directions.values()),
        "input_size": yard.input_stack.size(),
    }
