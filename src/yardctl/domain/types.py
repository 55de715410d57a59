"""Wagon type tags and parse rejection reasons."""

from __future__ import annotations

from enum import StrEnum


class WagonType(StrEnum):
    """Registered wagon type tags. Each tag is also a yard direction."""

    A = "A"
    B = "B"


class RejectionReason(StrEnum):
    """Why a token could not become a wagon."""

    MALFORMED_TOKEN = "malformed_token"
    UNKNOWN_TAG = "unknown_tag"
