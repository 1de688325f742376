import random

import pytest

from ceelo.allocator import (
    MAX_ALLOCATION_ATTEMPTS,
    allocate_unique,
    claimed_keys,
    ensure_slots_remaining,
)
from ceelo.errors import AllocationExhausted, OutcomesExhausted
from ceelo.outcomes import ALL_KEYS, Hand


def test_allocates_an_unclaimed_key(rng):
    claimed = {"456", "point:3"}
    for _ in range(200):
        hand = allocate_unique(claimed, rng)
        assert hand.key not in claimed


def test_does_not_mutate_claimed(rng):
    claimed = {"456"}
    allocate_unique(claimed, rng)
    assert claimed == {"456"}


def test_last_free_slot_is_always_found():
    # Seeded trials over every possible last slot, including the rarest (triples).
    for seed, free in enumerate(sorted(ALL_KEYS) * 10):
        claimed = set(ALL_KEYS) - {free}
        hand = allocate_unique(claimed, random.Random(seed))
        assert hand.key == free


def test_rejected_draws_are_skipped(scripted):
    # 4-5-6 is claimed, so the first hand is rejected and the second (triple 2) taken.
    r = scripted([6, 5, 4, 2, 2, 2])
    hand = allocate_unique({"456"}, r)
    assert hand.key == "triple:2"
    assert r.calls == 6


def test_tiny_bound_exhausts_deterministically(scripted):
    r = scripted([4, 5, 6] * 3)
    with pytest.raises(AllocationExhausted) as exc:
        allocate_unique({"456"}, r, max_attempts=3)
    assert exc.value.attempts == 3
    assert r.calls == 9


def test_max_attempts_must_be_positive(rng):
    with pytest.raises(ValueError):
        allocate_unique(set(), rng, max_attempts=0)


def test_default_bound():
    assert MAX_ALLOCATION_ATTEMPTS == 20000


def test_guard_blocks_full_universe():
    with pytest.raises(OutcomesExhausted):
        ensure_slots_remaining(set(ALL_KEYS))


def test_guard_allows_thirteen_claimed():
    ensure_slots_remaining(set(sorted(ALL_KEYS)[:13]))


def test_claimed_keys():
    hands = [Hand.from_dice((1, 1, 1)), Hand.from_dice((4, 5, 6)), Hand.from_dice((1, 1, 1))]
    assert claimed_keys(hands) == {"triple:1", "456"}
