from __future__ import annotations


class ScoreboardError(Exception):
    """Base class for every error a scoreboard request can end in."""


class NotInRoster(ScoreboardError, LookupError):
    def __init__(self, name: str):
        super().__init__("Name not in league")
        self.name = name


class AlreadyRolled(ScoreboardError, ValueError):
    def __init__(self, name: str):
        super().__init__("Already rolled")
        self.name = name


class OutcomesExhausted(ScoreboardError, ValueError):
    def __init__(self, claimed: int):
        super().__init__("All unique outcomes exhausted")
        self.claimed = claimed


class AllocationExhausted(ScoreboardError, RuntimeError):
    def __init__(self, attempts: int):
        super().__init__("Exceeded attempts for unique outcome")
        self.attempts = attempts


class InvalidRoster(ScoreboardError, ValueError):
    pass


class NotAuthorized(ScoreboardError, PermissionError):
    pass


class BadSecret(ScoreboardError, PermissionError):
    pass
