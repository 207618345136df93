from __future__ import annotations
from dataclasses import dataclass, replace

from codebreaker.engine import MAX_MOVES, RULES


@dataclass(frozen=True)
class AdvisorConfig:
    """Tuning knobs for the advisor. Defaults reproduce the reference behaviour."""
    rule: str = "duplicate_aware"     # feedback rule, fixed for the advisor's lifetime
    max_moves: int = MAX_MOVES        # rounds before a session is declared exhausted

    small_pool: int = 10              # <= this: entropy scoring, every candidate scored
    large_pool: int = 100             # > this: inject the fixed spread guesses
    sample_cap: int = 50              # candidates sampled into the pool when not small
    simulate_limit: int = 20          # attach win probabilities at or below this size
    max_depth: int = 3                # simulator recursion budget
    safe_guesses: int = 2             # extra separating guesses offered for 2-3 candidates
    correct_pair_bonus: bool = False  # 0.8x minimax score when a bucket has >= 2 Correct slots

    workers: int = 1                  # threads used to score the pool
    cache_size: int = 200_000         # max memoized scores

    def __post_init__(self):
        if self.rule not in RULES:
            raise ValueError(f"Unknown feedback rule: {self.rule}. Available: {sorted(RULES)}")
        if not 1 <= self.max_moves <= MAX_MOVES:
            raise ValueError(f"max_moves must be within 1-{MAX_MOVES}; got {self.max_moves}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0; got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1; got {self.workers}")

    def with_overrides(self, **kw) -> "AdvisorConfig":
        """Copy with some fields replaced; None values are ignored (handy for argparse)."""
        return replace(self, **{k: v for k, v in kw.items() if v is not None})
