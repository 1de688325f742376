import os
import random

import pytest

# app.py builds a module-level app on import; keep it off the real database.
os.environ.setdefault("CEELO_DB_PATH", "")

from ceelo.scoreboard import Scoreboard


class ScriptedRNG:
    """randint() returns the scripted faces in order, then fails loudly."""

    def __init__(self, faces):
        self.faces = list(faces)
        self.calls = 0

    def randint(self, a, b):
        if not self.faces:
            raise AssertionError("ScriptedRNG ran out of faces")
        self.calls += 1
        v = self.faces.pop(0)
        assert a <= v <= b
        return v


@pytest.fixture
def scripted():
    return ScriptedRNG


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def board():
    """Two-player board: A and B."""
    return Scoreboard(["A", "B"])
