"""
Advisor: the engine as callers see it.

One Advisor owns one configuration (feedback rule included) and one score
cache. Sessions are plain values passed in and out, so a single advisor can
serve any number of games; scores computed for one game are reused by the
next whenever the candidate subsets coincide (the opening move, typically).

    advisor = Advisor()
    s = advisor.new_session()
    s = advisor.submit(s, "1234", "CPWW")
    for sug in advisor.recommend(s, 3):
        print(format_code(sug.code), sug.score, sug.win_probabilities)
"""

from __future__ import annotations
import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from codebreaker.engine import Code, GameSession, get_rule
from codebreaker.engine import session as sessions

from .config import AdvisorConfig
from .ranker import Suggestion, best_guess, recommend
from .scorer import ScoreCache, cached_score, subset_signature
from .simulate import simulate

log = logging.getLogger(__name__)


class Advisor:
    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or AdvisorConfig()
        self.rule = get_rule(self.config.rule)
        self.cache = ScoreCache(self.config.cache_size)

    def new_session(self) -> GameSession:
        return sessions.new_session(self.config.max_moves)

    def submit(self, session: GameSession, guess: Any, feedback: Any) -> GameSession:
        return sessions.submit(session, guess, feedback, rule=self.rule,
                               max_moves=self.config.max_moves)

    def undo(self, session: GameSession) -> GameSession:
        return sessions.undo(session, rule=self.rule)

    def propose(self, session: GameSession, guess: Any) -> GameSession:
        return sessions.propose(session, guess)

    def recommend(self, session: GameSession, max_suggestions: int = 5) -> List[Suggestion]:
        out = recommend(session, max_suggestions, self.config, self.cache, self.rule)
        log.debug("recommend: %d suggestions, cache %d entries (%d hits / %d misses)",
                  len(out), len(self.cache), self.cache.hits, self.cache.misses)
        return out

    def best_guess(self, session: GameSession) -> Optional[Code]:
        return best_guess(session.candidates, session.moves, self.config, self.cache, self.rule)

    def score(self, guess: Code, candidates: Sequence[Code]) -> float:
        return cached_score(guess, candidates, subset_signature(candidates), self.cache, self.rule,
                            correct_pair_bonus=self.config.correct_pair_bonus,
                            entropy_limit=self.config.small_pool)

    def simulate(self, guess: Code, candidates: Sequence[Code], moves_so_far: int = 0,
                 max_depth: Optional[int] = None) -> Dict[int, float]:
        depth = self.config.max_depth if max_depth is None else max_depth

        def _chooser(group: Sequence[Code]) -> Code:
            return best_guess(group, moves_so_far + 1, self.config, self.cache, self.rule)

        return simulate(guess, candidates, moves_so_far, depth, self.rule, _chooser)

    @staticmethod
    def opening_guesses() -> List[Code]:
        return sessions.opening_guesses()

    @staticmethod
    def random_secret(rng: Optional[random.Random] = None) -> Code:
        return sessions.random_secret(rng)
