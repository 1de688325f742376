from ceelo.allocator import MAX_ALLOCATION_ATTEMPTS
from ceelo.scoreboard import Scoreboard

DEFAULT_FRIENDS = [
    "David J", "David L", "Zac", "Zach", "Will",
    "Jimmy", "Scott", "Nick", "Joey", "Brandy",
]


def build_scoreboard(friends=None, max_attempts: int = MAX_ALLOCATION_ATTEMPTS, on_change=None) -> Scoreboard:
    return Scoreboard(
        friends if friends else DEFAULT_FRIENDS,
        max_attempts=max_attempts,
        on_change=on_change,
    )
