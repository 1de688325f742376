# ceelo/scoreboard.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ceelo.allocator import (
    MAX_ALLOCATION_ATTEMPTS,
    allocate_unique,
    claimed_keys,
    ensure_slots_remaining,
)
from ceelo.dice import RNG
from ceelo.errors import AllocationExhausted, AlreadyRolled, InvalidRoster, NotInRoster
from ceelo.leaderboard import Leaderboard, evaluate
from ceelo.outcomes import Hand

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_roster(names: Iterable[Any]) -> List[str]:
    """Strip names, drop blanks, keep the first occurrence of each."""
    seen: set[str] = set()
    out: List[str] = []
    for n in names:
        s = str(n).strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out


@dataclass(frozen=True, slots=True)
class Snapshot:
    friends: tuple[str, ...]
    results: Dict[str, Hand]
    updated_at: str

    @property
    def winner(self) -> Leaderboard:
        return evaluate(self.friends, self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "friends": list(self.friends),
            "results": {name: h.to_dict() for name, h in self.results.items()},
            "updatedAt": self.updated_at,
            "winner": self.winner.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class RollResult:
    name: str
    hand: Hand
    updated_at: str
    winner: Leaderboard

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "hand": self.hand.to_dict(),
            "updatedAt": self.updated_at,
            "winner": self.winner.to_dict(),
        }


class Scoreboard:
    """
    Owner of one round: the roster, who rolled what, and when it last changed.

    Every mutation runs under a single lock, so the "has not rolled yet" check,
    the allocation against the claimed slots and the commit are one unit. That
    keeps at most one hand per participant and at most one participant per
    outcome key no matter how many roll requests arrive at once.

    on_change(board) runs after each committed mutation, still under the lock,
    so persisted states are written in commit order.
    """

    def __init__(
        self,
        friends: Iterable[str],
        results: Optional[Mapping[str, Hand]] = None,
        updated_at: Optional[str] = None,
        *,
        max_attempts: int = MAX_ALLOCATION_ATTEMPTS,
        on_change: Optional[Callable[[Scoreboard], None]] = None,
    ):
        self._lock = threading.RLock()
        self._friends: List[str] = normalize_roster(friends)
        self._results: Dict[str, Hand] = dict(results or {})
        self.updated_at: str = updated_at or now_iso()
        self.max_attempts = max_attempts
        self.on_change = on_change

    # -----------------------------
    # Reads
    # -----------------------------
    @property
    def friends(self) -> List[str]:
        with self._lock:
            return list(self._friends)

    @property
    def results(self) -> Dict[str, Hand]:
        with self._lock:
            return dict(self._results)

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                friends=tuple(self._friends),
                results=dict(self._results),
                updated_at=self.updated_at,
            )

    def leaderboard(self) -> Leaderboard:
        return self.snapshot().winner

    def state_dict(self) -> dict[str, Any]:
        return self.snapshot().to_dict()

    # -----------------------------
    # Mutations
    # -----------------------------
    def roll(self, name: str, rng: RNG | None = None) -> RollResult:
        """
        Roll for `name` and record the hand.

        Raises NotInRoster, AlreadyRolled, OutcomesExhausted or
        AllocationExhausted; on any of them nothing is recorded.
        """
        with self._lock:
            if name not in self._friends:
                raise NotInRoster(name)
            if name in self._results:
                raise AlreadyRolled(name)

            claimed = claimed_keys(self._results.values())
            ensure_slots_remaining(claimed)
            try:
                hand = allocate_unique(claimed, rng, max_attempts=self.max_attempts)
            except AllocationExhausted:
                logger.error(
                    "No unique outcome for %s after %d attempts (claimed=%s)",
                    name,
                    self.max_attempts,
                    sorted(claimed),
                )
                raise

            self._results[name] = hand
            self._touch()
            logger.info("%s rolled %s %s", name, list(hand.dice), hand.label)

            result = RollResult(
                name=name,
                hand=hand,
                updated_at=self.updated_at,
                winner=evaluate(self._friends, self._results),
            )
            self._changed()
            return result

    def clear(self) -> str:
        with self._lock:
            self._results = {}
            self._touch()
            logger.info("Round reset")
            self._changed()
            return self.updated_at

    def set_roster(self, names: Iterable[Any]) -> List[str]:
        """
        Replace the roster; hands of people who stay are kept.

        Raises InvalidRoster if nothing is left after normalization.
        """
        friends = normalize_roster(names)
        if not friends:
            raise InvalidRoster("Need at least one name")

        with self._lock:
            self._results = {n: self._results[n] for n in friends if n in self._results}
            self._friends = friends
            self._touch()
            logger.info("Roster set to %d names", len(friends))
            self._changed()
            return list(self._friends)

    def _touch(self) -> None:
        self.updated_at = now_iso()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
