"""Pseudo-embedding vectors used purely as visual texture."""

from typing import Optional, Sequence

import numpy as np

VECTOR_SIZE = 25  # Rendered as a 5x5 grid


def generate_vector(
    size: int = VECTOR_SIZE, rng: Optional[np.random.Generator] = None
) -> tuple[float, ...]:
    """Generate `size` independent uniform values in [0, 1).

    Returned as a tuple so snapshots holding it stay immutable and comparable.
    """
    rng = rng if rng is not None else np.random.default_rng()
    return tuple(rng.random(size).tolist())


class VectorGenerator:
    """Source of illustrative vectors, optionally seeded for reproducible runs.

    Args:
        size: Length of every generated vector
        seed: Seed for the underlying numpy Generator (None = fresh entropy)
    """

    def __init__(self, size: int = VECTOR_SIZE, seed: Optional[int] = None):
        self.size = size
        self._rng = np.random.default_rng(seed)

    def vector(self) -> tuple[float, ...]:
        return generate_vector(self.size, self._rng)

    def vectors_for(self, tokens: Sequence[str]) -> tuple[tuple[float, ...], ...]:
        """One vector per token, index-aligned with `tokens`."""
        return tuple(self.vector() for _ in tokens)
