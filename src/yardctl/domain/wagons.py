"""Wagon models and the factory that parses ``TYPE-NUMBER`` tokens.

Every registered :class:`WagonType` maps to a dedicated Wagon subclass in
:data:`WAGON_REGISTRY`.  The factory is the single validation boundary for
external input: it returns either a Wagon or a :class:`Rejected` value,
never a partially-valid wagon and never ``None``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field

from yardctl.domain.capabilities import log_entity, serialize_state
from yardctl.domain.types import RejectionReason, WagonType

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = "-"

_NUMBER_PATTERN = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Wagon(BaseModel):
    """A wagon tagged with its direction type and a numeric identifier."""

    model_config = {"frozen": True}

    type: WagonType
    number: int = Field(ge=0)

    @property
    def token(self) -> str:
        """Token form, e.g. ``A-12``."""
        return f"{self.type}{TOKEN_SEPARATOR}{self.number}"

    def __str__(self) -> str:
        return f"Wagon {self.token}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": str(self.type), "number": self.number, "token": self.token}

    def log(self, message: str) -> None:
        log_entity(self, message)

    def serialize(self) -> str:
        return serialize_state({"type": self.type, "number": self.number})


class WagonTypeA(Wagon):
    type: Literal[WagonType.A] = WagonType.A


class WagonTypeB(Wagon):
    type: Literal[WagonType.B] = WagonType.B


WAGON_REGISTRY: dict[WagonType, type[Wagon]] = {
    WagonType.A: WagonTypeA,
    WagonType.B: WagonTypeB,
}


# ---------------------------------------------------------------------------
# Rejection result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rejected:
    """A token the factory refused to turn into a wagon."""

    reason: RejectionReason
    token: str
    detail: str = ""


ParseResult = Wagon | Rejected


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class WagonFactory:
    """Factory method for wagons, keyed by type tag."""

    registry: ClassVar[dict[WagonType, type[Wagon]]] = WAGON_REGISTRY

    @classmethod
    def create_from_tag(cls, type_tag: str, number: int) -> ParseResult:
        """Build the wagon registered for *type_tag* (case-insensitive)."""
        token = f"{type_tag}{TOKEN_SEPARATOR}{number}"
        try:
            wagon_type = WagonType(type_tag.upper())
        except ValueError:
            return Rejected(RejectionReason.UNKNOWN_TAG, token, f"unknown type tag {type_tag!r}")

        model = cls.registry.get(wagon_type)
        if model is None:
            msg = f"no wagon registered for {wagon_type}"
            return Rejected(RejectionReason.UNKNOWN_TAG, token, msg)
        if number < 0:
            return Rejected(RejectionReason.MALFORMED_TOKEN, token, "number must be non-negative")
        return model(number=number)

    @classmethod
    def create_from_token(cls, token: str) -> ParseResult:
        """Parse ``TYPE-NUMBER``, splitting on the first separator only."""
        type_tag, sep, raw_number = token.partition(TOKEN_SEPARATOR)
        if not sep or not type_tag:
            return Rejected(RejectionReason.MALFORMED_TOKEN, token, "expected TYPE-NUMBER")
        if _NUMBER_PATTERN.fullmatch(raw_number) is None:
            return Rejected(
                RejectionReason.MALFORMED_TOKEN,
                token,
                f"{raw_number!r} is not a non-negative integer",
            )

        try:
            number = int(raw_number)
        except ValueError:
            # Past the interpreter's int-string conversion limit.
            return Rejected(
                RejectionReason.MALFORMED_TOKEN,
                token,
                f"number has too many digits ({len(raw_number)})",
            )

        result = cls.create_from_tag(type_tag, number)
        if isinstance(result, Rejected):
            return replace(result, token=token)
        return result

    @classmethod
    def parse_batch(cls, lines: Iterable[str]) -> list[Wagon]:
        """Parse lines into wagons, preserving input order.

        Blank lines are skipped.  Rejected lines are dropped without being
        surfaced to the caller; they only show up in DEBUG logs.
        """
        wagons: list[Wagon] = []
        for line in lines:
            token = line.strip()
            if not token:
                continue
            result = cls.create_from_token(token)
            if isinstance(result, Rejected):
                logger.debug("Dropped token %r (%s)", token, result.reason)
                continue
            wagons.append(result)
        return wagons
