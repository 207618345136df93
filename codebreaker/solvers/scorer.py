"""
Guess scoring: how much does playing `guess` narrow the current candidates?

For each guess g, partition the CURRENT candidates by the pattern g would
produce against each of them. Lower score is better.

  |candidates| <= 1   : 0, nothing left to learn
  |candidates| <= 10  : entropy regime. Shannon entropy of the bucket sizes,
                        normalized by log2(n), mapped onto 0..10:
                            round(10 * (1 - H / log2(n)))
                        An even split scores ~0, one dominant bucket ~10.
                        The limit is AdvisorConfig.small_pool (default 10).
  otherwise           : minimax regime. Size of the largest bucket, i.e. how
                        many codes survive in the worst case.

Scores are memoized in a ScoreCache keyed by (guess, subset signature). The
cache belongs to whoever creates it (normally an Advisor), so two games or two
tests never share entries by accident.
"""

from __future__ import annotations
import threading
from collections import OrderedDict, defaultdict
from math import log2
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from codebreaker.engine import Code, Pattern, format_code
from codebreaker.engine.feedback import CORRECT, Rule, duplicate_aware

ENTROPY_LIMIT = 10
# Subsets up to this size are keyed by their full contents
SMALL_SIGNATURE = 64
CORRECT_PAIR_FACTOR = 0.8


def partition(guess: Code, candidates: Sequence[Code],
              rule: Rule = duplicate_aware) -> Dict[Pattern, List[Code]]:
    """Group candidates by the pattern `guess` would show against each one."""
    buckets: Dict[Pattern, List[Code]] = defaultdict(list)
    _rule = rule
    for c in candidates:
        buckets[_rule(guess, c)].append(c)
    return buckets


def bucket_sizes(guess: Code, candidates: Sequence[Code],
                 rule: Rule = duplicate_aware) -> Dict[Pattern, int]:
    sizes: Dict[Pattern, int] = defaultdict(int)
    _rule = rule
    for c in candidates:
        sizes[_rule(guess, c)] += 1
    return sizes


def normalized_entropy(sizes: Sequence[int]) -> float:
    """Entropy of a bucket-size distribution divided by its maximum, log2(total)."""
    counts = np.asarray(sizes, dtype=float)
    n = counts.sum()
    if n <= 1:
        return 0.0
    p = counts / n
    H = float(-(p * np.log2(p)).sum())
    return H / log2(n)


def score_guess(guess: Code, candidates: Sequence[Code], rule: Rule = duplicate_aware,
                *, correct_pair_bonus: bool = False, entropy_limit: int = ENTROPY_LIMIT) -> float:
    """
    Score one guess against the candidate subset (lower is better).

    Subsets of up to `entropy_limit` codes are scored in the entropy regime.
    """
    n = len(candidates)
    if n <= 1:
        return 0

    sizes = bucket_sizes(guess, candidates, rule)

    if n <= entropy_limit:
        return round(10 * (1 - normalized_entropy(list(sizes.values()))))

    worst = max(sizes.values())
    if correct_pair_bonus and any(p.count(CORRECT) >= 2 for p in sizes):
        return worst * CORRECT_PAIR_FACTOR
    return worst


def subset_signature(candidates: Sequence[Code]) -> Hashable:
    """
    Cheap identity for a candidate subset.

    Small subsets are keyed by their joined contents. Large ones by size, the
    first and last code and the tuple hash, which avoids holding thousands of
    codes per cache key.
    """
    if len(candidates) <= SMALL_SIGNATURE:
        return ",".join(format_code(c) for c in candidates)
    return len(candidates), candidates[0], candidates[-1], hash(tuple(candidates))


class ScoreCache:
    """
    Bounded LRU map (guess, signature) -> score.

    Entries are pure functions of their key, so concurrent workers may write
    the same entry twice; the lock only protects the OrderedDict itself.
    """

    def __init__(self, maxsize: int = 200_000):
        self.maxsize = int(maxsize)
        self._data: "OrderedDict[Tuple[Code, Hashable], float]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: Tuple[Code, Hashable]) -> Optional[float]:
        with self._lock:
            val = self._data.get(key)
            if val is None:
                self.misses += 1
                return None
            self._data.move_to_end(key)
            self.hits += 1
            return val

    def put(self, key: Tuple[Code, Hashable], value: float) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = self.misses = 0


def cached_score(guess: Code, candidates: Sequence[Code], signature: Hashable,
                 cache: Optional[ScoreCache], rule: Rule = duplicate_aware,
                 *, correct_pair_bonus: bool = False, entropy_limit: int = ENTROPY_LIMIT) -> float:
    if cache is None:
        return score_guess(guess, candidates, rule, correct_pair_bonus=correct_pair_bonus,
                           entropy_limit=entropy_limit)
    key = (guess, signature)
    hit = cache.get(key)
    if hit is not None:
        return hit
    s = score_guess(guess, candidates, rule, correct_pair_bonus=correct_pair_bonus,
                    entropy_limit=entropy_limit)
    cache.put(key, s)
    return s
