"""Small helpers for lists, file paths and numbers."""

from __future__ import annotations

import random
from collections.abc import Iterable

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def element_of(items: Iterable[str], value: str) -> bool:
    """Return whether ``value`` is one of ``items``."""
    return value in items


def file_ext(path: str) -> str:
    """Return everything after the first dot of ``path``, dot included, or ''."""
    _, dot, rest = path.partition(".")
    return f".{rest}" if dot and rest else ""


def generate_random(size: int) -> int:
    """Return a random integer in ``[0, size)``; ``size`` must be positive."""
    if size <= 0:
        raise ValueError("size must be positive")
    return random.randrange(size)


def abs_int32(value: int) -> int:
    """Absolute value with 32-bit wrap-around: the minimum value maps to itself."""
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"{value} is out of the 32-bit range")
    if value >= 0:
        return value
    result = -value
    return _INT32_MIN if result > _INT32_MAX else result