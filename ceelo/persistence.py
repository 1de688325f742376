# ceelo/persistence.py
from __future__ import annotations

import json
import logging
from typing import Any

from ceelo.outcomes import Hand
from ceelo.scoreboard import Scoreboard

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def scoreboard_to_dict(board: Scoreboard) -> dict[str, Any]:
    snap = board.snapshot()
    return {
        "schema_version": SCHEMA_VERSION,
        "friends": list(snap.friends),
        "results": {name: h.to_dict() for name, h in snap.results.items()},
        "updatedAt": snap.updated_at,
    }


def scoreboard_to_json(board: Scoreboard) -> str:
    # Stable output: same state => same JSON string.
    return json.dumps(scoreboard_to_dict(board), indent=2, sort_keys=True)


def _results_from_dict(d: Any) -> dict[str, Hand]:
    out: dict[str, Hand] = {}
    if not isinstance(d, dict):
        return out
    for name, hd in d.items():
        try:
            out[str(name)] = Hand.from_dict(hd)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Dropping unreadable hand for %r: %s", name, e)
    return out


def scoreboard_from_dict(
    d: Any,
    *,
    default_friends: list[str] | None = None,
    **kwargs: Any,
) -> Scoreboard:
    """
    Rebuild a scoreboard from a saved document.

    Also reads documents without schema_version (the original JSON state
    file: friends/results/updatedAt). Unusable fields fall back to defaults.
    Duplicate outcome keys are kept as saved.
    """
    if not isinstance(d, dict):
        raise ValueError(f"Saved state must be an object, got {type(d).__name__}")
    try:
        version = int(d.get("schema_version", SCHEMA_VERSION))
    except (TypeError, ValueError):
        raise ValueError(f"Bad schema_version {d.get('schema_version')!r}") from None
    if version > SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema_version {version}")

    friends = d.get("friends")
    if not isinstance(friends, list):
        friends = list(default_friends or [])

    updated_at = d.get("updatedAt")
    return Scoreboard(
        friends,
        results=_results_from_dict(d.get("results")),
        updated_at=str(updated_at) if updated_at else None,
        **kwargs,
    )


def scoreboard_from_json(s: str, **kwargs: Any) -> Scoreboard:
    return scoreboard_from_dict(json.loads(s), **kwargs)
