from repl.repl import run_repl


def _run(board, lines):
    feed = iter(lines)
    out = []

    def fake_input(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    run_repl(board, input_fn=fake_input, print_fn=out.append)
    return out


def test_repl_roll_and_state(board):
    out = _run(board, ["roll A", "roll A", "roll Z", "state", "exit"])

    assert any(line.startswith("A rolled") for line in out)
    assert "ERROR: Already rolled" in out
    assert "ERROR: Name not in league" in out
    assert "Leaderboard: waiting on rolls" in out
    assert "A" in board.results


def test_repl_completes_round(board):
    out = _run(board, ["roll A", "roll B"])
    assert any(line.startswith("Round complete.") for line in out)


def test_repl_roster_and_reset(board):
    out = _run(board, ["roll A", "roster A, C", "reset", "roster  ,", "bogus"])

    assert "Roster: A, C" in out
    assert "Round reset." in out
    assert "ERROR: Need at least one name" in out
    assert "Unknown command: bogus" in out
    assert board.friends == ["A", "C"]
    assert board.results == {}
