from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

import db
from ceelo.auth import AdminTokens, check_password, token_from_request
from ceelo.config import Settings
from ceelo.errors import (
    AllocationExhausted,
    AlreadyRolled,
    BadSecret,
    InvalidRoster,
    NotAuthorized,
    NotInRoster,
    OutcomesExhausted,
    ScoreboardError,
)
from ceelo.logging_config import setup_logging
from ceelo.persistence import scoreboard_from_json, scoreboard_to_json
from ceelo.scoreboard import Scoreboard
from scenarios.default_roster import DEFAULT_FRIENDS, build_scoreboard

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()

ERROR_STATUS: dict[type, int] = {
    NotInRoster: 400,
    InvalidRoster: 400,
    NotAuthorized: 401,
    BadSecret: 403,
    AlreadyRolled: 409,
    OutcomesExhausted: 409,
    AllocationExhausted: 500,
}


def status_for(exc: ScoreboardError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


async def _scoreboard_error_handler(request: Request, exc: ScoreboardError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"error": str(exc)})


# -----------------------------
# State wiring
# -----------------------------
def _save_hook(settings: Settings):
    def save(board: Scoreboard) -> None:
        try:
            db.save_state_json(settings.db_path, scoreboard_to_json(board))
        except sqlite3.Error as e:
            # The commit already happened in memory; keep serving it.
            logger.warning("State save failed (%s): %s", settings.db_path, e)

    return save


def load_scoreboard(settings: Settings) -> Scoreboard:
    """Restore the saved round if there is one, else start from the default roster."""
    friends = list(settings.friends or DEFAULT_FRIENDS)
    on_change = _save_hook(settings) if settings.db_path else None

    if settings.db_path:
        try:
            s = db.load_state_json(settings.db_path)
        except sqlite3.Error as e:
            logger.warning("State load failed (%s): %s", settings.db_path, e)
            s = None
        if s is not None:
            try:
                board = scoreboard_from_json(
                    s,
                    default_friends=friends,
                    max_attempts=settings.max_attempts,
                    on_change=on_change,
                )
                logger.info("Loaded state from %s (%d results)", settings.db_path, len(board.results))
                return board
            except ValueError as e:
                logger.warning("Saved state unreadable, starting fresh: %s", e)

    return build_scoreboard(friends, max_attempts=settings.max_attempts, on_change=on_change)


def _board(request: Request) -> Scoreboard:
    return request.app.state.board


def _require_admin(request: Request, payload: Optional[Dict[str, Any]]) -> None:
    token = token_from_request(request.headers, payload)
    if not request.app.state.tokens.is_valid(token):
        raise NotAuthorized("Not authorized")


# -----------------------------
# Pages
# -----------------------------
def _render_index(request: Request, message: str = "", status_code: int = 200):
    snap = _board(request).snapshot()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "friends": list(snap.friends),
            "results": snap.results,
            "winner": snap.winner,
            "updated_at": snap.updated_at,
            "pending": sum(1 for n in snap.friends if n not in snap.results),
            "message": message,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return _render_index(request)


@router.post("/ui/roll", response_class=HTMLResponse)
def ui_roll(request: Request, name: str = Form("")):
    name = name.strip()
    try:
        result = _board(request).roll(name)
    except ScoreboardError as e:
        return _render_index(request, message=f"{name or '?'}: {e}", status_code=status_for(e))
    return _render_index(request, message=f"{name} rolled {result.hand.label}")


# -----------------------------
# JSON API
# -----------------------------
@router.get("/api/state")
def get_state(request: Request):
    return _board(request).state_dict()


@router.post("/api/roll")
def post_roll(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    name = str((payload or {}).get("name") or "").strip()
    return _board(request).roll(name).to_dict()


@router.post("/api/reset")
def legacy_reset(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    settings: Settings = request.app.state.settings
    secret = (payload or {}).get("secret")
    if not settings.reset_secret or secret != settings.reset_secret:
        raise BadSecret("Bad secret")
    updated_at = _board(request).clear()
    return {"ok": True, "updatedAt": updated_at}


@router.post("/api/admin/login")
def admin_login(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    settings: Settings = request.app.state.settings
    if not check_password((payload or {}).get("password"), settings.admin_password):
        raise NotAuthorized("Wrong password")
    token = request.app.state.tokens.issue()
    logger.info("Admin login")
    return {"ok": True, "token": token}


@router.post("/api/admin/set-names")
def admin_set_names(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    _require_admin(request, payload)
    friends = (payload or {}).get("friends")
    if not isinstance(friends, list):
        raise InvalidRoster("friends must be an array")
    board = _board(request)
    names = board.set_roster(friends)
    return {"ok": True, "friends": names, "updatedAt": board.updated_at}


@router.post("/api/admin/reset")
def admin_reset(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    _require_admin(request, payload)
    updated_at = _board(request).clear()
    return {"ok": True, "updatedAt": updated_at}


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"


def create_app(settings: Optional[Settings] = None, board: Optional[Scoreboard] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    application = FastAPI(title="Cee-Lo Scoreboard")
    application.state.settings = settings
    application.state.board = board if board is not None else load_scoreboard(settings)
    application.state.tokens = AdminTokens(settings.admin_token_ttl)
    application.add_exception_handler(ScoreboardError, _scoreboard_error_handler)
    application.include_router(router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
