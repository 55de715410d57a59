"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, yardctl.toml only holds
overrides.  The wagon type tags themselves are not configurable.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class InputConfig(BaseModel):
    """[input] section."""

    model_config = {"frozen": True}

    encoding: str = "utf-8"
    strip_comments: bool = True


class ReportConfig(BaseModel):
    """[report] section.

    ``style`` picks how wagons are printed: ``display`` (``Wagon A-1``)
    or ``token`` (``A-1``).
    """

    model_config = {"frozen": True}

    show_empty: bool = True
    style: Literal["display", "token"] = "display"

