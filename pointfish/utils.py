"""Small helpers: a xorshift64* generator, 64-bit arithmetic and sequence utilities."""

from __future__ import annotations

import time
from typing import Callable, List, MutableSequence, TypeVar

__all__ = ["PRNG", "mul_hi64", "split", "move_to_front", "now"]

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 2685821657736338717


class PRNG:
    """xorshift64star pseudo-random number generator.

    Outputs 64-bit numbers, has a single 64-bit integer state and a period
    of 2**64 - 1. The seed must be non-zero.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        state = seed & _MASK64
        if state == 0:
            raise ValueError("PRNG seed must be non-zero")
        self._state = state

    def _rand64(self) -> int:
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * _MULTIPLIER) & _MASK64

    def rand(self) -> int:
        """Return the next 64-bit unsigned value."""
        return self._rand64()

    def sparse_rand(self) -> int:
        """Return a 64-bit value with about one eighth of its bits set."""
        return self._rand64() & self._rand64() & self._rand64()


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64


def split(s: str, delimiter: str) -> List[str]:
    """Split ``s`` on every occurrence of ``delimiter``.

    An empty string yields an empty list; otherwise empty fields are kept.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if not s:
        return []
    return s.split(delimiter)


def move_to_front(items: MutableSequence[T], pred: Callable[[T], bool]) -> None:
    """Move the first element satisfying ``pred`` to the front, in place.

    The elements before it keep their relative order. Nothing happens if no
    element matches.
    """
    for position, item in enumerate(items):
        if pred(item):
            if position:
                del items[position]
                items.insert(0, item)
            return


def now() -> int:
    """Return a monotonic time stamp in milliseconds."""
    return time.monotonic_ns() // 1_000_000