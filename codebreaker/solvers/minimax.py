"""
Minimax / entropy solver: plays the advisor's top pick every turn.

Large candidate sets are scored by worst-case bucket size, small ones by
normalized entropy (see scorer.py). The advisor, and therefore its score
cache, lives as long as the solver, so a batch of games reuses the opening
move's scores instead of recomputing them for every secret.
"""

from __future__ import annotations
from typing import Optional

from codebreaker.engine import Code, GameSession
from .advisor import Advisor
from .base import BaseSolver, register
from .config import AdvisorConfig


@register
class MinimaxEntropySolver(BaseSolver):
    id = "minimax_entropy"
    name = "Minimax + Entropy"
    version = "1.0.0"

    def __init__(self, config: Optional[AdvisorConfig] = None):
        super().__init__(config)
        self.advisor = Advisor(self.config)

    def next_guess(self, state: dict) -> Code:
        session: GameSession = state["session"]
        session.raise_for_status()
        return self.advisor.best_guess(session)
