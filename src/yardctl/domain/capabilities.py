"""Cross-cutting capabilities — logging and serialization.

Types opt in explicitly by implementing the protocol methods; nothing is
attached at construction time.  The free functions here hold the shared
behaviour so implementations stay one-liners.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Loggable(Protocol):
    """Something that can write a message tagged with its own class name."""

    def log(self, message: str) -> None: ...


@runtime_checkable
class Serializable(Protocol):
    """Something that can render itself as a JSON string."""

    def serialize(self) -> str: ...


def log_entity(entity: object, message: str, *, level: int = logging.INFO) -> None:
    """Log *message* as ``[ClassName] message`` on the entity's module logger."""
    cls = type(entity)
    logging.getLogger(cls.__module__).log(level, "[%s] %s", cls.__name__, message)


def to_jsonable(value: Any) -> Any:
    """Convert a value into something ``json.dumps`` accepts.

    Pydantic models are dumped in JSON mode; containers are converted
    recursively; everything else is passed through unchanged.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def serialize_state(state: dict[str, Any]) -> str:
    """Serialize an instance state dict to compact JSON."""
    return json.dumps(to_jsonable(state), separators=(",", ":"))
