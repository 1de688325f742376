from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BOARD_ID = "default"


def _connect(path: str) -> sqlite3.Connection:
    # New connection per call keeps things simple and avoids threading pitfalls.
    return sqlite3.connect(path)


def init_db(path: str) -> None:
    with _connect(path) as con:
        con.execute(
            """
            CREATE TABLE IF NOT EXISTS scoreboards (
                id TEXT PRIMARY KEY,
                state_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        con.commit()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def load_state_json(path: str, board_id: str = DEFAULT_BOARD_ID) -> Optional[str]:
    init_db(path)
    with _connect(path) as con:
        row = con.execute("SELECT state_json FROM scoreboards WHERE id = ?", (board_id,)).fetchone()
    return None if row is None else row[0]


def save_state_json(path: str, state_json: str, board_id: str = DEFAULT_BOARD_ID) -> None:
    init_db(path)
    with _connect(path) as con:
        con.execute(
            "INSERT OR REPLACE INTO scoreboards(id, state_json, updated_at) VALUES(?,?,?)",
            (board_id, state_json, _now_iso()),
        )
        con.commit()
