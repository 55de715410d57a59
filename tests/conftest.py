"""Shared pytest fixtures and test helpers for yardctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from yardctl.domain.types import WagonType
from yardctl.domain.yard import SortingYard
from yardctl.services.telemetry import disable_telemetry
from yardctl.services.yard import YardService


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    root_level = root.level
    yard_logger = logging.getLogger("yardctl")
    yard_level = yard_logger.level
    yield
    root.handlers = handlers
    root.setLevel(root_level)
    yard_logger.setLevel(yard_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def yard() -> SortingYard:
    """Fresh yard with both directions registered."""
    return SortingYard()


@pytest.fixture
def service(yard: SortingYard) -> YardService:
    return YardService(yard)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config override in the env.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.delenv("YARDCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------

INTERLEAVED = ["A-1", "B-1", "A-2", "B-2", "A-3", "B-3"]
CLUSTERED = ["A-10", "B-10", "A-11", "A-12", "B-11", "B-12", "A-13"]
MESSY = ["A-1", "garbage", "B-2", "X-9", "  "]


def tokens(wagons: Iterable[object]) -> list[str]:
    """Token form of wagons (models or their dict payloads)."""
    out: list[str] = []
    for w in wagons:
        out.append(w["token"] if isinstance(w, dict) else w.token)  # type: ignore[attr-defined]
    return out


def direction_tokens(yard: SortingYard, tag: WagonType | str) -> list[str]:
    return tokens(yard.direction(tag).snapshot())
