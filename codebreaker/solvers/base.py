from __future__ import annotations
import random
from typing import Dict, Optional, Type

from codebreaker.engine import Code, get_rule

from .config import AdvisorConfig

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that solvers inherit ----
class BaseSolver:
    """
    A solver plays the guessing side of a game the harness referees.

    The harness calls reset() once per game, then next_guess(state) every turn
    with a dict holding:
      - "turn"       : 1-based move number about to be played
      - "session"    : the current GameSession (history + candidates)
      - "candidates" : shortcut for session.candidates
    """
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or AdvisorConfig()
        self.rule = get_rule(self.config.rule)
        self.rng = random.Random()

    def reset(self, *, seed: int | None = None) -> None:
        if seed is not None:
            self.rng.seed(seed)

    def next_guess(self, state: dict) -> Code:
        raise NotImplementedError("Override in subclass")
