"""
Experiment harness core primitives.

- run_case:  play a single game (one hidden secret) with a given solver.
- run_batch: play many games in sequence (optionally a sample prefix).
- Enforces the 10-move safety ceiling at the harness layer.

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or tests without changes.
"""

from __future__ import annotations
import logging
import time
from typing import Dict, Iterable, List, Sequence

from codebreaker.engine import (
    MAX_MOVES, Code, evaluate, format_code, is_solved, new_session, parse_code, submit,
)

log = logging.getLogger(__name__)

# Error labels recorded on failed games
TOO_MANY_MOVES = "too_many_moves"
NO_SOLUTIONS = "no_solutions"


def _assert_max_moves(max_moves: int) -> None:
    """Guardrail: the ceiling is a hard limit, never raised per run."""
    if not 1 <= max_moves <= MAX_MOVES:
        raise ValueError(f"max_moves must be within 1-{MAX_MOVES}; got {max_moves}")


def run_case(
        solver,
        secret: Sequence[int] | str,
        *,
        max_moves: int = MAX_MOVES,
        seed: int | None = None,
) -> Dict:
    """
    Execute one game until the solver wins or the move budget is exhausted.

    Args:
        solver:    an object implementing BaseSolver with next_guess(state)
        secret:    the hidden code for this case
        max_moves: at most MAX_MOVES (10)
        seed:      RNG seed to make solver tie-breaks reproducible

    Returns:
        dict with keys:
            success (bool), guesses (int), time_ms (float), error (str | None),
            history (list[(code, pattern)]), secret (str), solver_id (str)
    """
    _assert_max_moves(max_moves)
    secret = parse_code(secret)

    solver.reset(seed=seed)
    session = new_session(max_moves)
    history: List[tuple] = []
    error = None

    t0 = time.perf_counter()
    for turn in range(1, max_moves + 1):
        state = {
            "turn": turn,
            "session": session,
            "candidates": session.candidates,
        }
        guess = solver.next_guess(state)

        # Engine referees the guess against the hidden secret
        patt = evaluate(guess, secret, solver.rule)
        history.append((format_code(guess), patt))
        session = submit(session, guess, patt, rule=solver.rule, max_moves=max_moves)

        if is_solved(patt):
            break
        if not session.candidates:
            # cannot happen with honest feedback; record rather than loop on nothing
            error = NO_SOLUTIONS
            log.error("secret %s: candidate set emptied after %s", format_code(secret), history)
            break
    else:
        error = TOO_MANY_MOVES
        log.warning("secret %s: not solved within %d moves", format_code(secret), max_moves)

    dt = (time.perf_counter() - t0) * 1000.0
    return {
        "success": error is None,
        "guesses": len(history),
        "time_ms": dt,
        "error": error,
        "history": history,
        "secret": format_code(secret),
        "solver_id": solver.id,
    }


def run_batch(
        solver,
        secrets: Iterable[Sequence[int] | str],
        *,
        max_moves: int = MAX_MOVES,
        seed: int | None = None,
        sample: int | None = None,
) -> List[Dict]:
    """
    Run many cases back-to-back. If 'sample' is provided, only the first K
    secrets are used to speed up quick experiments.

    Each case's seed is derived from the base seed to make runs reproducible
    but not identical across cases (seed + index).
    """
    _assert_max_moves(max_moves)

    pool = list(secrets)
    if sample is not None:
        pool = pool[:sample]

    out: List[Dict] = []
    for idx, secret in enumerate(pool, start=1):
        case_seed = None if seed is None else (seed + idx)
        out.append(run_case(solver, secret, max_moves=max_moves, seed=case_seed))
    return out


def secret_range(start: int = 0, count: int = 10_000) -> List[Code]:
    """Codes start..start+count-1 in numeric order, e.g. secret_range(0, 100) -> 0000..0099."""
    if start < 0 or count < 0 or start + count > 10_000:
        raise ValueError(f"range {start}+{count} is outside 0000-9999")
    return [parse_code(f"{i:04d}") for i in range(start, start + count)]
