"""
Win-probability simulation.

For a guess g played as move `moves_so_far + 1`, estimate on which move the
game ends, assuming the secret is uniform over the candidates:

  - bucket 'CCCC'          -> solved on this move
  - bucket of one code     -> solved on the next move
  - bigger bucket          -> pick the best follow-up for that bucket and
                              recurse, weighted by the bucket's share
  - recursion budget spent -> terminal estimate: two more moves for buckets of
                              up to TERMINAL_SMALL codes, three otherwise

The terminal estimate is an approximation; every layer above it is exact for
the chosen follow-ups. The returned probabilities always sum to 1.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Callable, Dict, Sequence

from codebreaker.engine import SOLVED, Code
from codebreaker.engine.feedback import Rule, duplicate_aware

from .scorer import partition

TERMINAL_SMALL = 5

Chooser = Callable[[Sequence[Code]], Code]


def _first(candidates: Sequence[Code]) -> Code:
    return candidates[0]


def simulate(guess: Code, candidates: Sequence[Code], moves_so_far: int = 0,
             max_depth: int = 3, rule: Rule = duplicate_aware,
             chooser: Chooser = _first) -> Dict[int, float]:
    """
    Distribution over the move number that finishes the game.

    Args:
      guess        : the guess about to be played
      candidates   : codes still possible before playing it
      moves_so_far : guesses already made in this game
      max_depth    : how many further layers to expand exactly
      rule         : feedback rule in force
      chooser      : picks the follow-up guess for a bucket (defaults to its
                     first code; the advisor passes its best-guess lookup)

    Returns:
      {move_number: probability}, keys ascending.
    """
    n = len(candidates)
    if n == 0:
        return {}

    dist: Dict[int, float] = defaultdict(float)
    this_move = moves_so_far + 1

    for patt, group in partition(guess, candidates, rule).items():
        mass = len(group) / n
        if patt == SOLVED:
            dist[this_move] += mass
        elif len(group) == 1:
            dist[this_move + 1] += mass
        elif max_depth > 0:
            follow = chooser(group)
            sub = simulate(follow, group, this_move, max_depth - 1, rule, chooser)
            for move, p in sub.items():
                dist[move] += mass * p
        else:
            extra = 2 if len(group) <= TERMINAL_SMALL else 3
            dist[this_move + extra] += mass

    return {k: dist[k] for k in sorted(dist)}


def expected_moves(dist: Dict[int, float]) -> float:
    return sum(move * p for move, p in dist.items())
