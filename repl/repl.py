from ceelo.errors import ScoreboardError
from ceelo.scoreboard import Scoreboard


def run_repl(board: Scoreboard, input_fn=input, print_fn=print):
    print_fn("Cee-Lo Scoreboard")
    print_fn("Type 'help' for commands. Type 'exit' to quit.\n")

    while True:
        snap = board.snapshot()
        prompt = f"[{len(snap.results)}/{len(snap.friends)} rolled]> "
        try:
            raw = input_fn(prompt).strip()
        except EOFError:
            break
        cmd = raw.lower()

        if cmd in ("quit", "exit"):
            break

        elif cmd == "help":
            print_fn("Commands:")
            print_fn("  state                  - roster, hands and leaderboard")
            print_fn("  roll <name>            - roll for one participant")
            print_fn("  reset                  - clear every hand")
            print_fn("  roster <a, b, ...>     - replace the roster (comma-separated)")

        elif cmd == "state":
            show_state(board, print_fn)

        elif cmd.startswith("roll "):
            name = raw.split(None, 1)[1].strip()
            try:
                result = board.roll(name)
            except ScoreboardError as e:
                print_fn(f"ERROR: {e}")
            else:
                print_fn(f"{name} rolled {list(result.hand.dice)} -> {result.hand.label}")
                if result.winner.ready:
                    print_fn(f"Round complete. Leader(s): {', '.join(result.winner.leader_names)}")

        elif cmd == "reset":
            board.clear()
            print_fn("Round reset.")

        elif cmd.startswith("roster "):
            names = raw.split(None, 1)[1].split(",")
            try:
                friends = board.set_roster(names)
            except ScoreboardError as e:
                print_fn(f"ERROR: {e}")
            else:
                print_fn("Roster: " + ", ".join(friends))

        elif cmd == "":
            continue

        else:
            print_fn(f"Unknown command: {raw}")


def show_state(board: Scoreboard, print_fn=print):
    snap = board.snapshot()
    for name in snap.friends:
        hand = snap.results.get(name)
        if hand is None:
            print_fn(f"  {name:<12} (not rolled)")
        else:
            print_fn(f"  {name:<12} {hand.dice} {hand.label}")

    winner = snap.winner
    if not winner.ready:
        print_fn("Leaderboard: waiting on rolls")
    else:
        print_fn(f"Leaderboard: {', '.join(winner.leader_names)} (score {winner.top_score})")


if __name__ == "__main__":
    from scenarios.default_roster import build_scoreboard

    run_repl(build_scoreboard())
