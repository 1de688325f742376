from __future__ import annotations

from typing import Iterable, Set

from ceelo.dice import RNG
from ceelo.errors import AllocationExhausted, OutcomesExhausted
from ceelo.outcomes import MAX_UNIQUE, Hand, roll_hand

# Upper bound on hands drawn for one allocation. The rarest slot is a specific
# triple at 1/108 per scoring hand, so 20000 misses in a row while it is still
# free happens with probability (107/108)**20000, below 1e-80.
MAX_ALLOCATION_ATTEMPTS = 20000


def claimed_keys(hands: Iterable[Hand]) -> Set[str]:
    return {h.key for h in hands}


def ensure_slots_remaining(claimed: Set[str]) -> None:
    """Caller-side guard: allocate_unique assumes at least one free slot."""
    if len(claimed) >= MAX_UNIQUE:
        raise OutcomesExhausted(len(claimed))


def allocate_unique(
    claimed: Set[str],
    rng: RNG | None = None,
    *,
    max_attempts: int = MAX_ALLOCATION_ATTEMPTS,
) -> Hand:
    """
    Rejection-sample a hand whose outcome key is not in `claimed`.

    Slots keep their natural (unequal) probabilities; draws landing on a
    claimed slot are discarded. `claimed` is never mutated; recording the
    result is the caller's job and must happen under the same lock as the
    `claimed` snapshot.

    Raises AllocationExhausted after max_attempts rejected draws.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for _ in range(max_attempts):
        hand = roll_hand(rng)
        if hand.key not in claimed:
            return hand

    raise AllocationExhausted(max_attempts)
