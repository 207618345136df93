"""
Suggest the next guess for a game in progress.

Each positional argument is one move already played, as GUESS=FEEDBACK:
  - per-slot feedback: 1234=CPWW   (C correct, P partial, W wrong)
  - peg counts:        1234=1,1    (correct, partial)

Example:
    python -m apps.cli.suggest 1234=CPWW 1506=CWWP 1967=CWCP --max 3
"""

from __future__ import annotations
import argparse
import json
import logging

from codebreaker.engine import (
    Aggregate, CodebreakerError, RULES, format_code, format_feedback,
)
from codebreaker.solvers import Advisor, AdvisorConfig


def parse_move(text: str):
    """'1234=CPWW' -> ('1234', 'CPWW'); '1234=1,1' -> ('1234', Aggregate(1, 1))."""
    guess, sep, fb = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected GUESS=FEEDBACK, got {text!r}")
    if "," in fb:
        c, _, p = fb.partition(",")
        try:
            return guess, Aggregate(int(c), int(p))
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad peg counts in {text!r}") from None
    return guess, fb


def main():
    ap = argparse.ArgumentParser(description="codebreaker: suggest the next guess")
    ap.add_argument("moves", nargs="*", type=parse_move, help="moves so far, GUESS=FEEDBACK")
    ap.add_argument("--max", type=int, default=5, dest="max_suggestions")
    ap.add_argument("--rule", choices=sorted(RULES), default="duplicate_aware")
    ap.add_argument("--max-depth", type=int)
    ap.add_argument("--show", type=int, default=10, help="list up to this many remaining codes")
    ap.add_argument("--json", action="store_true", help="print the suggestions as JSON only")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    advisor = Advisor(AdvisorConfig(rule=args.rule).with_overrides(max_depth=args.max_depth))
    session = advisor.new_session()
    try:
        for guess, fb in args.moves:
            session = advisor.submit(session, guess, fb)
            if not args.json:
                print(f"{format_code(session.guesses[-1])} {format_feedback(session.feedbacks[-1])}"
                      f" -> {len(session.candidates)} codes remain")
        session.raise_for_status()
    except CodebreakerError as e:
        raise SystemExit(f"error: {e}")

    if args.json:
        suggestions = [] if session.is_won else advisor.recommend(session, args.max_suggestions)
        print(json.dumps({
            "moves": session.moves,
            "solved": session.is_won,
            "remaining": [format_code(c) for c in session.candidates[: args.show]],
            "remaining_count": len(session.candidates),
            "suggestions": [s.as_dict() for s in suggestions],
        }, indent=2))
        return

    if session.is_won:
        print(f"Solved in {session.moves} moves.")
        return

    remaining = session.candidates
    print(f"\nAfter {session.moves} moves, {len(remaining)} codes remain")
    for code in remaining[: args.show]:
        print(f"  {format_code(code)}")
    if len(remaining) > args.show:
        print(f"  ... {len(remaining) - args.show} more")

    print("\nSuggestions:")
    for i, sug in enumerate(advisor.recommend(session, args.max_suggestions), 1):
        tag = "candidate" if sug.is_candidate else "probe"
        print(f"{i}. {format_code(sug.code)}  score={sug.score:g}  ({tag})")
        if sug.win_probabilities:
            for moves, p in sug.win_probabilities.items():
                print(f"     {moves} moves: {100 * p:5.1f}%")
            print(f"     expected: {sug.expected_moves:.2f}")


if __name__ == "__main__":
    main()
