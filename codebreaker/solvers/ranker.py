"""
Recommendation ranking.

Turns a session into a short, ordered list of suggested next guesses:

  0 candidates  -> []  (the history is contradictory; the session reports it)
  out of moves  -> []  (no further guess can be submitted)
  1 candidate   -> that code, certain win on this move
  2-3           -> every candidate (more repeated digits first on equal score)
                   plus up to `safe_guesses` non-candidates that split the set
                   into singletons, i.e. guarantee a win on the following move
  otherwise     -> score the generated pool, sort by (score, non-candidate
                   last, pool order), drop non-candidates that score far
                   behind the best, truncate, attach win probabilities when
                   the set is small enough to simulate cheaply
"""

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from codebreaker.engine import Code, GameSession, Status, format_code
from codebreaker.engine.feedback import Rule, duplicate_aware

from .config import AdvisorConfig
from .pool import candidate_pool, information_guesses
from .scorer import ScoreCache, bucket_sizes, cached_score, subset_signature
from .simulate import expected_moves, simulate

log = logging.getLogger(__name__)

FEW_CANDIDATES = 3
SHOW_ALL_CANDIDATES = 5
ENTROPY_TOLERANCE = 2
MINIMAX_TOLERANCE = 0.5


@dataclass(frozen=True)
class Suggestion:
    code: Code
    score: float
    is_candidate: bool
    win_probabilities: Optional[Dict[int, float]] = None

    @property
    def expected_moves(self) -> Optional[float]:
        if not self.win_probabilities:
            return None
        return expected_moves(self.win_probabilities)

    def as_dict(self) -> dict:
        d = asdict(self)
        d["code"] = format_code(self.code)
        d["expected_moves"] = self.expected_moves
        return d


def _repeats(code: Code) -> int:
    return len(code) - len(set(code))


def score_pool(pool: Sequence[Code], candidates: Sequence[Code], config: AdvisorConfig,
               cache: Optional[ScoreCache], rule: Rule = duplicate_aware) -> List[float]:
    """Score every pool entry; shards across threads when config.workers > 1."""
    sig = subset_signature(candidates)

    def _score(g: Code) -> float:
        return cached_score(g, candidates, sig, cache, rule,
                            correct_pair_bonus=config.correct_pair_bonus,
                            entropy_limit=config.small_pool)

    if config.workers > 1 and len(pool) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as ex:
            return list(ex.map(_score, pool))
    return [_score(g) for g in pool]


def _ranked(candidates: Sequence[Code], moves_made: int, config: AdvisorConfig,
            cache: Optional[ScoreCache], rule: Rule) -> List[Tuple[float, bool, int, Code]]:
    pool = candidate_pool(candidates, moves_made, config)
    scores = score_pool(pool, candidates, config, cache, rule)
    cset = set(candidates)
    rows = [(s, g in cset, i, g) for i, (g, s) in enumerate(zip(pool, scores))]
    rows.sort(key=lambda r: (r[0], not r[1], r[2]))
    log.debug("ranked pool of %d against %d candidates", len(pool), len(candidates))
    return rows


def best_guess(candidates: Sequence[Code], moves_made: int = 1,
               config: AdvisorConfig = AdvisorConfig(), cache: Optional[ScoreCache] = None,
               rule: Rule = duplicate_aware) -> Optional[Code]:
    """Single best guess by score, no simulation. None when nothing is left."""
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]
    return _ranked(candidates, moves_made, config, cache, rule)[0][3]


def _few_candidates(session: GameSession, max_suggestions: int, config: AdvisorConfig,
                    cache: Optional[ScoreCache], rule: Rule) -> List[Suggestion]:
    cands = session.candidates
    n = len(cands)
    m = session.moves
    scores = score_pool(cands, cands, config, cache, rule)

    order = sorted(range(n), key=lambda i: (scores[i], -_repeats(cands[i]), i))
    out = [
        Suggestion(cands[i], scores[i], True, {m + 1: 1 / n, m + 2: (n - 1) / n})
        for i in order
    ]

    room = min(config.safe_guesses, max(0, max_suggestions - n))
    worst = max(scores)
    cset = set(cands)
    for g in information_guesses(cands):
        if room <= 0:
            break
        if g in cset:
            continue
        # every candidate lands in its own bucket -> next move is certain
        if len(bucket_sizes(g, cands, rule)) == n:
            out.append(Suggestion(g, worst + 1, False, {m + 2: 1.0}))
            room -= 1
    return out


def recommend(session: GameSession, max_suggestions: int = 5,
              config: AdvisorConfig = AdvisorConfig(), cache: Optional[ScoreCache] = None,
              rule: Rule = duplicate_aware) -> List[Suggestion]:
    """Ordered suggestions for the next move. Read-only over `session`."""
    cands = session.candidates
    n = len(cands)
    m = session.moves

    if n == 0:
        log.warning("no candidates left after %d moves; history is inconsistent", m)
        return []
    if session.status is Status.OUT_OF_MOVES:
        log.info("move ceiling %d reached; nothing left to suggest", session.max_moves)
        return []
    if n == 1:
        return [Suggestion(cands[0], 0, True, {m + 1: 1.0})]
    if n <= FEW_CANDIDATES:
        return _few_candidates(session, max_suggestions, config, cache, rule)

    rows = _ranked(cands, m, config, cache, rule)
    best = rows[0][0]
    if n <= config.small_pool:
        limit = best + ENTROPY_TOLERANCE
    else:
        limit = best + max(1, best * MINIMAX_TOLERANCE)
    kept = [r for r in rows if r[1] or r[0] <= limit]

    top = kept[:max_suggestions]
    if n <= SHOW_ALL_CANDIDATES:
        shown = {r[3] for r in top}
        top += [r for r in kept[max_suggestions:] if r[1] and r[3] not in shown]

    if n > config.simulate_limit:
        return [Suggestion(g, s, is_cand) for s, is_cand, _, g in top]

    def _chooser(group: Sequence[Code]) -> Code:
        return best_guess(group, m + 1, config, cache, rule)

    return [
        Suggestion(g, s, is_cand, simulate(g, cands, m, config.max_depth, rule, _chooser))
        for s, is_cand, _, g in top
    ]
