from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from ceelo.outcomes import Hand, Outcome, rank_score

ScoreFn = Callable[[Outcome], int]


@dataclass(frozen=True, slots=True)
class LeaderEntry:
    name: str
    hand: Hand
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "hand": self.hand.to_dict(), "score": self.score}


@dataclass(frozen=True, slots=True)
class Leaderboard:
    """
    Result of evaluating a round.

    ready=False while anyone on the roster has not rolled; leaders and
    top_score are only meaningful once ready.
    """
    ready: bool
    leaders: tuple[LeaderEntry, ...] = field(default_factory=tuple)
    top_score: Optional[int] = None

    @property
    def leader_names(self) -> list[str]:
        return [e.name for e in self.leaders]

    def to_dict(self) -> dict[str, Any]:
        if not self.ready:
            return {"ready": False}
        return {
            "ready": True,
            "leaders": [e.to_dict() for e in self.leaders],
            "topScore": self.top_score,
        }


NOT_READY = Leaderboard(ready=False)


def evaluate(
    roster: Sequence[str],
    results: Mapping[str, Hand],
    score: ScoreFn = rank_score,
) -> Leaderboard:
    """
    Leaders of a finished round, or NOT_READY.

    Order: score descending, then name ascending. Every participant sharing
    the top score is a leader; with unique outcome keys that is exactly one,
    but tied scores from hand-edited state are still ordered deterministically.
    Results for names outside the roster are ignored.
    """
    if not roster:
        return NOT_READY
    if any(name not in results for name in roster):
        return NOT_READY

    entries = [
        LeaderEntry(name=name, hand=results[name], score=score(results[name].outcome))
        for name in roster
    ]
    entries.sort(key=lambda e: (-e.score, e.name))

    top = entries[0].score
    leaders = tuple(e for e in entries if e.score == top)
    return Leaderboard(ready=True, leaders=leaders, top_score=top)
