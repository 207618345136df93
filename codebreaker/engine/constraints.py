"""
Candidate filtering given game history.

Given:
  - a pool of codes (the full 0000-9999 universe or an already narrowed subset)
  - one (guess, feedback) pair, or a history of them
  - the feedback rule in force

Return:
  - the codes that would have produced exactly the recorded feedback.

This is the only place a candidate subset shrinks. Output keeps the input
order, so the same input always yields the same tuple.
"""

from __future__ import annotations
import itertools
import logging
from typing import Iterable, Optional, Sequence, Tuple

from .feedback import ALPHABET, CODE_LENGTH, Aggregate, Code, Feedback, Rule, aggregate, duplicate_aware

log = logging.getLogger(__name__)

# History is a sequence of (guess, feedback) tuples recorded by a session.
History = Iterable[Tuple[Code, Feedback]]

_UNIVERSE: Optional[Tuple[Code, ...]] = None


def all_codes() -> Tuple[Code, ...]:
    """Every 4-digit code in ascending order. Built once; treat as read-only."""
    global _UNIVERSE
    if _UNIVERSE is None:
        _UNIVERSE = tuple(itertools.product(ALPHABET, repeat=CODE_LENGTH))
    return _UNIVERSE


def filter_candidates(
        candidates: Sequence[Code],
        guess: Code,
        feedback: Feedback,
        rule: Rule = duplicate_aware,
) -> Tuple[Code, ...]:
    """
    Keep only the candidates that show `feedback` for `guess`.

    Per-slot feedback is compared tag by tag. Aggregate feedback is compared
    on peg counts, which is weaker: it keeps every candidate whose pattern
    has the same number of C and P tags.
    """
    if isinstance(feedback, Aggregate):
        out = tuple(c for c in candidates if aggregate(rule(guess, c)) == feedback)
    else:
        out = tuple(c for c in candidates if rule(guess, c) == feedback)
    log.debug("filter %s/%s: %d -> %d", "".join(map(str, guess)), feedback, len(candidates), len(out))
    return out


def replay(history: History, rule: Rule = duplicate_aware,
           universe: Optional[Sequence[Code]] = None) -> Tuple[Code, ...]:
    """Re-derive a candidate subset by applying every recorded pair in order."""
    cands: Tuple[Code, ...] = tuple(universe) if universe is not None else all_codes()
    for g, fb in history:
        cands = filter_candidates(cands, g, fb, rule)
    return cands
