from ceelo.leaderboard import NOT_READY, evaluate
from ceelo.outcomes import Hand

TRIPLE_3 = Hand.from_dice((3, 3, 3))
POINT_5 = Hand.from_dice((1, 1, 5))


def test_empty_results_not_ready():
    assert evaluate(["A", "B"], {}) == NOT_READY


def test_partial_results_not_ready():
    assert evaluate(["A", "B"], {"A": TRIPLE_3}).ready is False


def test_empty_roster_not_ready():
    assert evaluate([], {"A": TRIPLE_3}).ready is False


def test_single_leader():
    lb = evaluate(["A", "B"], {"A": TRIPLE_3, "B": POINT_5})
    assert lb.ready
    assert lb.leader_names == ["A"]
    assert lb.top_score == 303
    assert lb.leaders[0].hand == TRIPLE_3


def test_tied_leaders_sorted_by_name():
    lb = evaluate(["B", "A"], {"B": TRIPLE_3, "A": TRIPLE_3})
    assert lb.ready
    assert lb.leader_names == ["A", "B"]
    assert lb.top_score == 303


def test_results_outside_roster_are_ignored():
    auto_win = Hand.from_dice((4, 5, 6))
    lb = evaluate(["A", "B"], {"A": TRIPLE_3, "B": POINT_5, "Z": auto_win})
    assert lb.leader_names == ["A"]


def test_custom_score_function():
    # Reverse ranking: lowest hand wins.
    lb = evaluate(["A", "B"], {"A": TRIPLE_3, "B": POINT_5}, score=lambda o: -o.score)
    assert lb.leader_names == ["B"]
    assert lb.top_score == -105


def test_to_dict_shapes():
    assert NOT_READY.to_dict() == {"ready": False}

    d = evaluate(["A", "B"], {"A": TRIPLE_3, "B": POINT_5}).to_dict()
    assert d == {
        "ready": True,
        "leaders": [{"name": "A", "hand": TRIPLE_3.to_dict(), "score": 303}],
        "topScore": 303,
    }


def test_evaluation_is_reproducible():
    results = {"C": TRIPLE_3, "A": TRIPLE_3, "B": TRIPLE_3}
    first = evaluate(["C", "B", "A"], results)
    for _ in range(5):
        assert evaluate(["C", "B", "A"], dict(results)) == first
