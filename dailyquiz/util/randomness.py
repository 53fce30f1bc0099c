from __future__ import annotations

"""Randomness helpers for answer shuffling and seeding."""

import os
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def seed_from_env() -> Optional[int]:
    """Return the integer in the SEED env var, or None if unset or invalid."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        return int(seed)
    except ValueError:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create a private RNG, seeded from ``seed`` or the SEED env var."""
    if seed is None:
        seed = seed_from_env()
    return random.Random(seed)


def shuffled(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a new, uniformly shuffled list; ``items`` is left untouched."""
    out = list(items)
    rng.shuffle(out)
    return out
