"""Deterministic Random Number Generator (RNG) helpers.

All randomness is seeded from game identifiers so that:
- Reproducibility: Same seed always produces same results
- Replay: a recorded game can be re-run and verified command by command
- Fairness: No hidden randomness

The setup phase is the only consumer: the random faction pool is drawn once
at game start from a seed recorded on the game, never re-rolled afterwards.

Examples:
    >>> seed = generate_seed(game_id="g1", context="factions")
    >>> seed
    'g1:factions'
    >>> shuffled(seed, [1, 2, 3]) == shuffled(seed, [1, 2, 3])
    True
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def generate_seed(game_id: str, context: str) -> str:
    """Generate a deterministic seed from the game id and what the draw is for.

    Format: "game_id:context"

    Raises:
        ValueError: If game_id is empty
    """
    if not game_id:
        raise ValueError("game_id must be non-empty")
    return f"{game_id}:{context}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random()."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def shuffled(seed: str, items: Sequence[T]) -> list[T]:
    """Return a seeded permutation of ``items``; the input is not modified."""
    result = list(items)
    random.Random(_seed_to_int(seed)).shuffle(result)
    return result

