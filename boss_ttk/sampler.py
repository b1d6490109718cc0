"""Uniform integer sampling over a single seeded random stream."""
from __future__ import annotations

import os
import random


class EntropyError(RuntimeError):
    """Raised when the operating system cannot supply a seed."""


def entropy_seed() -> int:
    """Return a fresh 64-bit seed from the OS entropy source."""

    try:
        raw = os.urandom(8)
    except NotImplementedError as exc:
        raise EntropyError("no entropy source available for seeding") from exc
    return int.from_bytes(raw, "little")


class Sampler:
    """One exclusively owned random stream.

    Every draw of a simulation goes through :meth:`below` so that a run is
    fully reproducible from ``seed`` as long as the call order is unchanged.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.rng = random.Random(seed)

    @classmethod
    def from_entropy(cls) -> "Sampler":
        return cls(entropy_seed())

    def below(self, bound: int) -> int:
        """Draw uniformly from ``[0, bound)``; a zero bound always yields 0."""

        if bound <= 0:
            return 0
        return self.rng.randrange(bound)


__all__ = ["EntropyError", "Sampler", "entropy_seed"]
