"""Tests for the generic LIFO Stack."""

import json

from yardctl.domain.capabilities import Loggable, Serializable
from yardctl.domain.stack import EMPTY, Stack


class TestPushPop:
    def test_push_then_pop_returns_item(self) -> None:
        stack: Stack[str] = Stack()
        stack.push("x")
        assert stack.pop() == "x"

    def test_lifo_order(self) -> None:
        stack: Stack[int] = Stack()
        for i in range(3):
            stack.push(i)
        assert [stack.pop(), stack.pop(), stack.pop()] == [2, 1, 0]

    def test_pop_empty_returns_sentinel(self) -> None:
        stack: Stack[int] = Stack()
        assert stack.pop() is EMPTY

    def test_pop_after_drain_returns_sentinel(self) -> None:
        stack: Stack[int] = Stack()
        stack.push(1)
        stack.pop()
        assert stack.pop() is EMPTY
        assert stack.size() == 0

    def test_empty_sentinel_is_falsy(self) -> None:
        assert not EMPTY

    def test_falsy_items_are_not_confused_with_empty(self) -> None:
        stack: Stack[int] = Stack()
        stack.push(0)
        assert stack.pop() == 0
        assert stack.pop() is EMPTY


class TestPeek:
    def test_peek_does_not_remove(self) -> None:
        stack: Stack[str] = Stack()
        stack.push("a")
        stack.push("b")
        assert stack.peek() == "b"
        assert stack.size() == 2

    def test_peek_empty_returns_sentinel(self) -> None:
        assert Stack().peek() is EMPTY


class TestSizeAndClear:
    def test_size_tracks_contents(self) -> None:
        stack: Stack[int] = Stack()
        assert stack.is_empty()
        stack.push(1)
        stack.push(2)
        assert stack.size() == 2
        assert len(stack) == 2
        stack.pop()
        assert stack.size() == 1

    def test_clear(self) -> None:
        stack: Stack[int] = Stack()
        stack.push(1)
        stack.push(2)
        stack.clear()
        assert stack.is_empty()
        assert stack.pop() is EMPTY


class TestSnapshot:
    def test_preserves_push_order(self) -> None:
        stack: Stack[str] = Stack()
        for item in ("a", "b", "c"):
            stack.push(item)
        assert stack.snapshot() == ["a", "b", "c"]
        assert stack.peek() == "c"

    def test_is_a_copy(self) -> None:
        stack: Stack[str] = Stack()
        stack.push("a")
        snap = stack.snapshot()
        snap.append("z")
        assert stack.snapshot() == ["a"]


class TestCapabilities:
    def test_implements_protocols(self) -> None:
        stack: Stack[str] = Stack()
        assert isinstance(stack, Loggable)
        assert isinstance(stack, Serializable)

    def test_serialize(self) -> None:
        stack: Stack[str] = Stack()
        stack.push("test")
        assert json.loads(stack.serialize()) == {"items": ["test"]}

    def test_log_tags_class_name(self, caplog) -> None:
        stack: Stack[str] = Stack()
        with caplog.at_level("INFO", logger="yardctl"):
            stack.log("mixin check")
        assert "[Stack] mixin check" in caplog.text
