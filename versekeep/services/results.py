"""Operation results and JSON (de)serialization shared by the stores."""

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StoreResult:
    """Outcome of a mutating store operation.

    ``ok`` is False only when persistence failed; ``changed`` is False for
    logical no-ops such as removing something that is not there.
    """

    ok: bool
    changed: bool = False
    error: str | None = None

    @classmethod
    def done(cls, changed: bool = True) -> "StoreResult":
        return cls(ok=True, changed=changed)

    @classmethod
    def failed(cls, error: Exception | str) -> "StoreResult":
        return cls(ok=False, changed=False, error=str(error))


def load_json(raw: str | None, adapter: TypeAdapter[T], default: Callable[[], T], key: str) -> T:
    """Decode a stored value, falling back to ``default()`` on missing or corrupt data."""
    if raw is None:
        return default()
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning("Discarding malformed data stored under %s: %s", key, e.errors()[0]["msg"])
        return default()


def dump_json(value: T, adapter: TypeAdapter[T]) -> str:
    return adapter.dump_json(value, by_alias=True).decode()
