"""
Random Consistent solver.

Strategy:
  - Choose uniformly at random from the CURRENT candidate set (codes still
    consistent with all feedback so far).

Notes:
  - Deterministic across runs with the same seed (via BaseSolver.rng).
  - This is a baseline to verify the pipeline; it does not try to maximize
    information gain. Every guess it plays could be the secret, so it also
    exercises the "any consistent guess converges" property of the filter.
"""

from __future__ import annotations

from codebreaker.engine import Code, GameSession
from .base import BaseSolver, register


@register
class RandomConsistentSolver(BaseSolver):
    id = "random_consistent"
    name = "Random Consistent"
    version = "1.0.0"

    def next_guess(self, state: dict) -> Code:
        """
        Pick any candidate uniformly at random (seeded RNG).

        Raises InconsistentHistory if no candidate is left.
        """
        session: GameSession = state["session"]
        session.raise_for_status()
        candidates = session.candidates
        return candidates[self.rng.randrange(len(candidates))]
