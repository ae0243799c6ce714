"""Injectable randomness capability."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Uniform integer source over an inclusive range."""

    def randint(self, lo: int, hi: int) -> int: ...


class SystemRandomSource:
    """:class:`random.Random`-backed source; pass *seed* for reproducible draws."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randint(self, lo: int, hi: int) -> int:
        return self._rng.randint(lo, hi)


def pick(source: RandomSource, items: Sequence[T]) -> T:
    """Return one element of *items* chosen uniformly via *source*."""
    if not items:
        msg = "cannot pick from an empty sequence"
        raise ValueError(msg)
    return items[source.randint(0, len(items) - 1)]
