from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ceelo.allocator import MAX_ALLOCATION_ATTEMPTS

DEFAULT_DB_PATH = str((Path(__file__).resolve().parent.parent / "scoreboard.db"))
DEFAULT_ADMIN_TOKEN_TTL = 12 * 60 * 60


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _positive_int_env(env: Mapping[str, str], name: str, default: int) -> int:
    value = _int_env(env, name, default)
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def _names_env(env: Mapping[str, str], name: str) -> Optional[list[str]]:
    raw = env.get(name, "")
    names = [n.strip() for n in raw.split(",") if n.strip()]
    return names or None


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    db_path: str = DEFAULT_DB_PATH  # "" disables persistence
    reset_secret: str = ""  # "" disables the legacy /api/reset
    admin_password: str = "buck"
    admin_token_ttl: int = DEFAULT_ADMIN_TOKEN_TTL
    max_attempts: int = MAX_ALLOCATION_ATTEMPTS
    log_level: str = "INFO"
    friends: Optional[tuple[str, ...]] = None

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> Settings:
        e = os.environ if env is None else env
        friends = _names_env(e, "CEELO_FRIENDS")
        return Settings(
            port=_int_env(e, "PORT", 3000),
            db_path=e.get("CEELO_DB_PATH", DEFAULT_DB_PATH),
            reset_secret=e.get("RESET_SECRET", ""),
            admin_password=e.get("ADMIN_PASSWORD", "buck"),
            admin_token_ttl=_positive_int_env(e, "ADMIN_TOKEN_TTL", DEFAULT_ADMIN_TOKEN_TTL),
            max_attempts=_positive_int_env(e, "CEELO_MAX_ATTEMPTS", MAX_ALLOCATION_ATTEMPTS),
            log_level=e.get("LOG_LEVEL", "INFO"),
            friends=tuple(friends) if friends else None,
        )
