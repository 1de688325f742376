# ceelo/outcomes.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from ceelo.dice import RNG, roll_dice


class OutcomeKind(Enum):
    AUTO_WIN = "456"
    AUTO_LOSS = "123"
    TRIPLE = "triple"
    POINT = "point"


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Canonical class of a Cee-Lo roll.

    value is None for AUTO_WIN/AUTO_LOSS, the repeated face for TRIPLE,
    and the odd die out for POINT.
    """
    kind: OutcomeKind
    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind in (OutcomeKind.AUTO_WIN, OutcomeKind.AUTO_LOSS):
            if self.value is not None:
                raise ValueError(f"{self.kind.name} takes no value, got {self.value!r}")
        elif self.value is None or not 1 <= self.value <= 6:
            raise ValueError(f"{self.kind.name} value must be in 1..6, got {self.value!r}")

    @property
    def key(self) -> str:
        return outcome_key(self)

    @property
    def label(self) -> str:
        return label(self)

    @property
    def score(self) -> int:
        return rank_score(self)


AUTO_WIN = Outcome(OutcomeKind.AUTO_WIN)
AUTO_LOSS = Outcome(OutcomeKind.AUTO_LOSS)


def classify(dice: Iterable[int]) -> Optional[Outcome]:
    """
    Map three dice (any order) to their outcome class.

    First match wins: 4-5-6, 1-2-3, triple, pair + singleton.
    Returns None for three distinct faces outside the two runs: that roll
    scores nothing and is re-rolled.
    """
    faces = sorted(int(d) for d in dice)
    if len(faces) != 3:
        raise ValueError(f"Expected exactly 3 dice, got {len(faces)}")
    if faces[0] < 1 or faces[2] > 6:
        raise ValueError(f"Dice must be in 1..6, got {faces}")

    a, b, c = faces
    if (a, b, c) == (4, 5, 6):
        return AUTO_WIN
    if (a, b, c) == (1, 2, 3):
        return AUTO_LOSS
    if a == b == c:
        return Outcome(OutcomeKind.TRIPLE, a)
    if a == b:
        return Outcome(OutcomeKind.POINT, c)
    if b == c:
        return Outcome(OutcomeKind.POINT, a)
    # Sorted, so a == c implies a triple; what is left is three distinct faces.
    return None


def outcome_key(outcome: Outcome) -> str:
    kind = outcome.kind
    if kind is OutcomeKind.AUTO_WIN or kind is OutcomeKind.AUTO_LOSS:
        return kind.value
    if kind is OutcomeKind.TRIPLE:
        return f"triple:{outcome.value}"
    if kind is OutcomeKind.POINT:
        return f"point:{outcome.value}"
    raise ValueError(f"Unknown outcome kind: {kind!r}")


def rank_score(outcome: Outcome) -> int:
    """
    Higher wins:
      4-5-6 (400) > Triple 6..1 (306..301) > Point 6..1 (106..101) > 1-2-3 (0)
    """
    kind = outcome.kind
    if kind is OutcomeKind.AUTO_WIN:
        return 400
    if kind is OutcomeKind.TRIPLE:
        return 300 + outcome.value
    if kind is OutcomeKind.POINT:
        return 100 + outcome.value
    if kind is OutcomeKind.AUTO_LOSS:
        return 0
    raise ValueError(f"Unknown outcome kind: {kind!r}")


def label(outcome: Outcome) -> str:
    kind = outcome.kind
    if kind is OutcomeKind.AUTO_WIN:
        return "4-5-6 (auto win)"
    if kind is OutcomeKind.AUTO_LOSS:
        return "1-2-3 (auto loss)"
    if kind is OutcomeKind.TRIPLE:
        return f"Triple {outcome.value}"
    if kind is OutcomeKind.POINT:
        return f"Point {outcome.value}"
    raise ValueError(f"Unknown outcome kind: {kind!r}")


ALL_OUTCOMES: tuple[Outcome, ...] = (
    AUTO_WIN,
    AUTO_LOSS,
    *(Outcome(OutcomeKind.TRIPLE, n) for n in range(1, 7)),
    *(Outcome(OutcomeKind.POINT, n) for n in range(1, 7)),
)
ALL_KEYS: frozenset[str] = frozenset(outcome_key(o) for o in ALL_OUTCOMES)
MAX_UNIQUE = len(ALL_KEYS)  # 4-5-6, 1-2-3, six triples, six points


@dataclass(frozen=True, slots=True)
class Hand:
    """One recorded roll: the sorted dice plus the class they produced."""
    dice: tuple[int, int, int]
    outcome: Outcome

    @property
    def key(self) -> str:
        return outcome_key(self.outcome)

    @property
    def label(self) -> str:
        return label(self.outcome)

    @property
    def score(self) -> int:
        return rank_score(self.outcome)

    @staticmethod
    def from_dice(dice: Iterable[int]) -> Hand:
        faces = tuple(sorted(int(d) for d in dice))
        outcome = classify(faces)
        if outcome is None:
            raise ValueError(f"Dice {list(faces)} do not score")
        return Hand(dice=faces, outcome=outcome)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "dice": list(self.dice),
            "label": self.label,
            "type": self.outcome.kind.value,
        }
        if self.outcome.kind is OutcomeKind.TRIPLE:
            d["triple"] = self.outcome.value
        elif self.outcome.kind is OutcomeKind.POINT:
            d["point"] = self.outcome.value
        return d

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Hand:
        """
        Rebuild a hand from its wire shape.

        The dice are authoritative; "type"/"triple"/"point" are checked against them.
        """
        hand = Hand.from_dice(d["dice"])
        t = d.get("type")
        if t is not None and t != hand.outcome.kind.value:
            raise ValueError(f"Hand type {t!r} does not match dice {list(hand.dice)}")
        field = {OutcomeKind.TRIPLE: "triple", OutcomeKind.POINT: "point"}.get(hand.outcome.kind)
        if field is not None and d.get(field) is not None and d[field] != hand.outcome.value:
            raise ValueError(f"Hand {field} {d[field]!r} does not match dice {list(hand.dice)}")
        return hand


def roll_hand(rng: RNG | None = None) -> Hand:
    """
    Roll until the dice form a scoring hand.

    Three distinct faces that are neither 4-5-6 nor 1-2-3 score nothing and
    are re-rolled.
    """
    while True:
        dice = roll_dice(rng)
        outcome = classify(dice)
        if outcome is not None:
            return Hand(dice=dice, outcome=outcome)
