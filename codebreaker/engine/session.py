"""
Game session state.

A session is an immutable value: the guesses made so far, the feedback each
one received, and the cached candidate subset those pairs leave. Every
operation returns a new session; callers that want in-place updates rebind
their own variable.

Lifecycle:
  NOT_STARTED -> AWAITING_FEEDBACK   (propose: a guess has been chosen)
              -> AWAITING_NEXT_GUESS (submit: feedback recorded)
              -> WON                 (solved feedback)
              |  EXHAUSTED           (no candidate fits the history)
              |  OUT_OF_MOVES        (move ceiling reached unsolved)
WON, EXHAUSTED and OUT_OF_MOVES are terminal.
"""

from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple

from .constraints import all_codes, filter_candidates, replay
from .errors import GameOver, InconsistentHistory, SessionExhausted
from .feedback import ALPHABET, CODE_LENGTH, Code, Feedback, Rule, duplicate_aware, format_code, is_solved
from .validation import parse_code, validate_feedback

log = logging.getLogger(__name__)

# Safety ceiling on rounds per game; a session that reaches it unsolved is dead.
MAX_MOVES = 10

OPENING_BOOK: Tuple[Code, ...] = (
    (1, 2, 3, 4),
    (0, 1, 2, 3),
    (5, 6, 7, 8),
    (0, 2, 4, 6),
    (1, 3, 5, 7),
    (2, 4, 6, 8),
)


class Status(str, enum.Enum):
    NOT_STARTED = "not_started"
    AWAITING_FEEDBACK = "awaiting_feedback"
    AWAITING_NEXT_GUESS = "awaiting_next_guess"
    WON = "won"
    EXHAUSTED = "exhausted"
    OUT_OF_MOVES = "out_of_moves"


@dataclass(frozen=True)
class GameSession:
    guesses: Tuple[Code, ...] = ()
    feedbacks: Tuple[Feedback, ...] = ()
    candidates: Tuple[Code, ...] = ()
    pending: Optional[Code] = None
    max_moves: int = MAX_MOVES

    @property
    def moves(self) -> int:
        return len(self.guesses)

    @property
    def history(self) -> List[Tuple[Code, Feedback]]:
        return list(zip(self.guesses, self.feedbacks))

    @property
    def is_won(self) -> bool:
        return bool(self.feedbacks) and is_solved(self.feedbacks[-1])

    @property
    def status(self) -> Status:
        if self.is_won:
            return Status.WON
        if not self.candidates:
            return Status.EXHAUSTED
        if self.moves >= self.max_moves:
            return Status.OUT_OF_MOVES
        if self.pending is not None:
            return Status.AWAITING_FEEDBACK
        if not self.guesses:
            return Status.NOT_STARTED
        return Status.AWAITING_NEXT_GUESS

    def raise_for_status(self) -> None:
        """
        Raise if the session cannot continue.

        InconsistentHistory: the recorded feedback rules out every code.
        SessionExhausted:    the move ceiling was reached without a win.
        """
        if not self.candidates:
            raise InconsistentHistory(
                f"No code matches all {self.moves} recorded guesses; "
                f"check the feedback entered for {format_code(self.guesses[-1]) if self.guesses else '?'}"
            )
        if self.status is Status.OUT_OF_MOVES:
            raise SessionExhausted(f"No solution after {self.moves} moves (limit {self.max_moves})")


def new_session(max_moves: int = MAX_MOVES) -> GameSession:
    return GameSession(candidates=all_codes(), max_moves=max_moves)


def _check_open(session: GameSession) -> None:
    status = session.status
    if status is Status.OUT_OF_MOVES:
        session.raise_for_status()
    if status in (Status.WON, Status.EXHAUSTED):
        raise GameOver(f"Session is {status.value}")


def propose(session: GameSession, guess: Any) -> GameSession:
    """Record the guess the player is about to try, before feedback arrives."""
    _check_open(session)
    return replace(session, pending=parse_code(guess))


def submit(session: GameSession, guess: Any, feedback: Any, *,
           rule: Rule = duplicate_aware, max_moves: Optional[int] = None) -> GameSession:
    """
    Append one (guess, feedback) pair and narrow the candidate subset.

    `max_moves` overrides the ceiling carried by the session; the returned
    session keeps whichever ceiling was applied.

    Raises:
      InvalidCode / InvalidFeedback : bad input, nothing recorded
      GameOver                      : session already won or exhausted
      SessionExhausted              : the session already used its move ceiling

    An empty result is not an exception here: the returned session reports
    Status.EXHAUSTED and `raise_for_status()` raises InconsistentHistory, so
    the caller can still `undo` the bad entry.
    """
    code = parse_code(guess)
    fb = validate_feedback(feedback)

    if max_moves is not None:
        session = replace(session, max_moves=max_moves)
    _check_open(session)

    cands = filter_candidates(session.candidates, code, fb, rule)
    if not cands and not is_solved(fb):
        log.warning("feedback %s for %s leaves no candidates", fb, format_code(code))

    return replace(
        session,
        guesses=session.guesses + (code,),
        feedbacks=session.feedbacks + (fb,),
        candidates=cands,
        pending=None,
    )


def undo(session: GameSession, *, rule: Rule = duplicate_aware) -> GameSession:
    """Drop the last (guess, feedback) pair and rebuild the subset from scratch."""
    if not session.guesses:
        return session
    guesses = session.guesses[:-1]
    feedbacks = session.feedbacks[:-1]
    return replace(
        session,
        guesses=guesses,
        feedbacks=feedbacks,
        candidates=replay(zip(guesses, feedbacks), rule),
        pending=None,
    )


def opening_guesses() -> List[Code]:
    return list(OPENING_BOOK)


def random_secret(rng: Optional[random.Random] = None) -> Code:
    """Uniform random code, for practice harnesses only."""
    r = rng or random.Random()
    return tuple(r.choice(ALPHABET) for _ in range(CODE_LENGTH))  # type: ignore[return-value]
