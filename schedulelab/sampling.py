from __future__ import annotations

# Three-point duration sampling and per-run generator derivation.

import math
from typing import Protocol

import numpy as np


class UniformSource(Protocol):
    def random(self) -> float: ...


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    return z ^ (z >> 31)


def seed_for_run(base_seed: int, run_id: int) -> int:
    return _splitmix64((base_seed & 0xFFFFFFFFFFFFFFFF) ^ (run_id & 0xFFFFFFFFFFFFFFFF))


def rng_for_run(base_seed: int, run_id: int) -> np.random.Generator:
    """Independent generator for one run, stable for a given (seed, run)."""
    return np.random.default_rng(seed_for_run(base_seed, run_id))


def fresh_base_seed() -> int:
    return int(np.random.SeedSequence().entropy) & 0xFFFFFFFFFFFFFFFF


def triangular_from_uniform(
    u: float, optimistic: float, most_likely: float, pessimistic: float
) -> float:
    """Inverse CDF of the triangular distribution at ``u`` in [0, 1)."""

    if optimistic == pessimistic:
        return float(optimistic)

    span = pessimistic - optimistic
    f = (most_likely - optimistic) / span
    if u < f:
        return optimistic + math.sqrt(u * span * (most_likely - optimistic))
    return pessimistic - math.sqrt((1.0 - u) * span * (pessimistic - most_likely))


def sample_triangular(
    rng: UniformSource, optimistic: float, most_likely: float, pessimistic: float
) -> float:
    # Degenerate estimates are constant and do not consume a draw.
    if optimistic == pessimistic:
        return float(optimistic)
    return triangular_from_uniform(
        float(rng.random()), optimistic, most_likely, pessimistic
    )
