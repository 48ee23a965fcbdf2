"""Identifier generators for ticket lines, comments and order numbers."""

from __future__ import annotations

from collections import defaultdict
from uuid import uuid4

from floor.config import ORDER_NUMBER_BASE


class RandomIds:
    """Short random ids, e.g. ``it_3f9a0c1``."""

    def __init__(self, length: int = 7) -> None:
        self.length = length

    def __call__(self, prefix: str = "") -> str:
        return f"{prefix}{uuid4().hex[: self.length]}"


class SequentialIds:
    """Deterministic ids with one counter per prefix, e.g. ``it_1``, ``it_2``, ``c_1``."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)

    def __call__(self, prefix: str = "") -> str:
        self._counters[prefix] += 1
        return f"{prefix}{self._counters[prefix]}"


class OrderNumberSequence:
    """
    Monotonic ticket numbers rendered as ``#<n>``.

    The counter never looks at how many orders exist, so a number is never
    handed out twice by the same sequence.
    """

    def __init__(self, base: int = ORDER_NUMBER_BASE) -> None:
        self._last = base

    @property
    def last(self) -> int:
        return self._last

    def __call__(self) -> str:
        self._last += 1
        return f"#{self._last}"
