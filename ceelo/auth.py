from __future__ import annotations

import secrets
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional


def check_password(candidate: Any, expected: str) -> bool:
    if not candidate or not expected:
        return False
    return secrets.compare_digest(str(candidate).encode(), expected.encode())


def token_from_request(headers: Mapping[str, str], body: Optional[Mapping[str, Any]] = None) -> str:
    """Bearer token from the Authorization header, else a "token" body field."""
    h = headers.get("authorization", "")
    if h.startswith("Bearer "):
        return h[len("Bearer "):].strip()
    if body and body.get("token"):
        return str(body["token"])
    return ""


class AdminTokens:
    """
    Opaque admin session tokens with a fixed lifetime.

    A token is a capability: holding an unexpired one is the whole check.
    """

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._expires: Dict[str, float] = {}
        self._lock = threading.Lock()

    def issue(self) -> str:
        t = secrets.token_hex(16)
        with self._lock:
            self._purge()
            self._expires[t] = self._clock() + self.ttl_seconds
        return t

    def is_valid(self, token: str) -> bool:
        if not token:
            return False
        with self._lock:
            self._purge()
            return token in self._expires

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._expires.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            self._purge()
            return len(self._expires)

    def _purge(self) -> None:
        now = self._clock()
        for t in [t for t, exp in self._expires.items() if exp <= now]:
            del self._expires[t]
