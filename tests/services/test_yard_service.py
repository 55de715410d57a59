"""Tests for YardService operations."""

from __future__ import annotations

import threading

from tests.conftest import CLUSTERED, INTERLEAVED, MESSY, tokens
from yardctl.domain.types import WagonType
from yardctl.domain.yard import SortingYard
from yardctl.services.yard import YardService


class TestLoad:
    def test_load(self, service: YardService) -> None:
        result = service.load(INTERLEAVED)
        assert result.ok
        assert result.op == "load"
        assert result.data == {"count": 6, "input_size": 6}

    def test_load_malformed_is_silent(self, service: YardService) -> None:
        result = service.load(MESSY)
        assert result.ok
        assert result.data["count"] == 2
        assert result.warnings == []

    def test_comment_lines_skipped(self, service: YardService) -> None:
        result = service.load(["# header", "A-1", "  # B-2"])
        assert result.data["count"] == 1

    def test_comment_stripping_can_be_disabled(self) -> None:
        svc = YardService(strip_comments=False)
        # "#A-1" is then just a token with an unknown tag.
        assert svc.load(["#A-1", "A-2"]).data["count"] == 1


class TestSortAndReport:
    def test_sort(self, service: YardService) -> None:
        service.load(CLUSTERED)
        result = service.sort()
        assert result.ok
        assert result.data["moved"] == 7
        assert result.data["input_size"] == 0
        assert result.data["directions"] == {"A": 4, "B": 3}

    def test_report_order(self, service: YardService) -> None:
        service.load(INTERLEAVED)
        service.sort()
        result = service.report()
        assert result.op == "report"
        directions = result.data["directions"]
        assert tokens(directions["A"]["wagons"]) == ["A-3", "A-2", "A-1"]
        assert tokens(directions["B"]["wagons"]) == ["B-3", "B-2", "B-1"]
        assert directions["A"]["count"] == 3
        assert result.data["total"] == 6

    def test_report_before_sort_is_empty(self, service: YardService) -> None:
        service.load(INTERLEAVED)
        result = service.report()
        assert result.data["total"] == 0
        assert result.data["input_size"] == 6

    def test_sort_unroutable_is_error_result(self) -> None:
        svc = YardService(SortingYard(directions=[WagonType.A]))
        svc.load(["B-1"])
        result = svc.sort()
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "UNROUTABLE"
        assert result.error.detail["wagon"] == "B-1"
        assert result.error.detail["input_size"] == 1


class TestRun:
    def test_run_clustered(self, service: YardService) -> None:
        result = service.run(CLUSTERED)
        assert result.ok
        assert result.op == "run"
        assert result.data["loaded"] == 7
        assert result.data["moved"] == 7
        directions = result.data["directions"]
        assert tokens(directions["A"]["wagons"]) == ["A-13", "A-12", "A-11", "A-10"]
        assert tokens(directions["B"]["wagons"]) == ["B-12", "B-11", "B-10"]

    def test_run_accumulates_without_reset(self, service: YardService) -> None:
        service.run(["A-1"])
        result = service.run(["A-2"])
        assert tokens(result.data["directions"]["A"]["wagons"]) == ["A-1", "A-2"]

    def test_run_with_reset(self, service: YardService) -> None:
        service.run(["A-1"])
        result = service.run(["A-2"], reset=True)
        assert tokens(result.data["directions"]["A"]["wagons"]) == ["A-2"]

    def test_run_unroutable(self) -> None:
        svc = YardService(SortingYard(directions=[WagonType.B]))
        result = svc.run(["A-1"])
        assert not result.ok
        assert result.op == "run"


class TestInspect:
    def test_outcomes(self, service: YardService) -> None:
        result = service.inspect(MESSY)
        assert result.ok
        assert result.data["count"] == 5
        assert result.data["accepted"] == 2
        assert result.data["rejected"] == 2
        assert result.data["skipped"] == 1
        statuses = [item["status"] for item in result.data["items"]]
        assert statuses == ["accepted", "rejected", "accepted", "rejected", "skipped"]

    def test_reasons(self, service: YardService) -> None:
        items = service.inspect(["garbage", "X-9"]).data["items"]
        assert items[0]["reason"] == "malformed_token"
        assert items[1]["reason"] == "unknown_tag"
        assert items[1]["line"] == 2

    def test_accepted_carries_wagon(self, service: YardService) -> None:
        item = service.inspect([" a-4 "]).data["items"][0]
        assert item["token"] == "a-4"
        assert item["wagon"] == {"type": "A", "number": 4, "token": "A-4"}

    def test_does_not_touch_yard(self, service: YardService) -> None:
        service.inspect(INTERLEAVED)
        assert service.yard.input_stack.is_empty()
        assert service.report().data["total"] == 0

    def test_comment_lines_reported_as_skipped(self, service: YardService) -> None:
        items = service.inspect(["# note"]).data["items"]
        assert items[0]["status"] == "skipped"


class TestClear:
    def test_clear(self, service: YardService) -> None:
        service.run(INTERLEAVED)
        service.load(["A-5"])
        result = service.clear()
        assert result.ok
        assert result.data["total"] == 0
        assert result.data["input_size"] == 0


class TestSerialization:
    def test_concurrent_runs_are_serialized(self) -> None:
        svc = YardService()
        batch = [f"A-{i}" for i in range(200)] + [f"B-{i}" for i in range(200)]
        threads = [threading.Thread(target=svc.run, args=(batch,)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        result = svc.report()
        assert result.data["total"] == 8 * 400
        assert result.data["input_size"] == 0
        # Each cycle appends a contiguous reversed block to each direction.
        a_tokens = tokens(result.data["directions"]["A"]["wagons"])
        block = [f"A-{i}" for i in reversed(range(200))]
        for start in range(0, len(a_tokens), 200):
            assert a_tokens[start : start + 200] == block
