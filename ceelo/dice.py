from __future__ import annotations

import random
from typing import Protocol


class RNG(Protocol):
    def randint(self, a: int, b: int) -> int: ...


_system_rng = random.SystemRandom()


def d6(rng: RNG | None = None) -> int:
    r = rng or _system_rng
    return r.randint(1, 6)


def roll_dice(rng: RNG | None = None) -> tuple[int, int, int]:
    """
    Roll three independent d6 and return them sorted ascending.

    Each of the 216 ordered triples is equally likely before sorting.
    """
    a, b, c = sorted((d6(rng), d6(rng), d6(rng)))
    return a, b, c
