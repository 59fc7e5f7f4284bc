"""Identifier-seeded pseudo-random stream.

A linear congruential generator keyed by the catalog identifier, so that
re-rendering the same system always produces the same synthetic curves. The
constants and integer arithmetic are fixed: changing either breaks
reproducibility of every stored rendering.
"""

from __future__ import annotations

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


def seed_from_identifier(identifier: str) -> int:
    """Sum of the identifier's character code points."""
    return sum(ord(ch) for ch in str(identifier))


class SeededRandomStream:
    """Deterministic uniform stream in [0, 1)."""

    def __init__(self, seed: int) -> None:
        self._state = int(seed) % _MODULUS

    @classmethod
    def for_identifier(cls, identifier: str) -> SeededRandomStream:
        return cls(seed_from_identifier(identifier))

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def next_range(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)

    def next_centered(self, amplitude: float) -> float:
        """Symmetric offset in [-amplitude/2, amplitude/2)."""
        return (self.next() - 0.5) * amplitude


__all__ = ["SeededRandomStream", "seed_from_identifier"]
