from __future__ import annotations

from itertools import count
from typing import Callable
import uuid

ObjectNameFactory = Callable[[], str]


def uuid_object_name() -> str:
    return str(uuid.uuid4())


class SequentialNameFactory:
    """Deterministic names (`prefix.0`, `prefix.1`, ...) for reproducible documents."""

    def __init__(self, prefix: str = "object") -> None:
        if not prefix:
            raise ValueError("prefix must not be empty")
        self._prefix = prefix
        self._counter = count()

    def __call__(self) -> str:
        return f"{self._prefix}.{next(self._counter)}"
