"""
Which guesses are worth scoring?

Scoring every one of the 10,000 codes against every candidate is too slow for
interactive use, so the pool is assembled from a few cheap sources:

  - the candidates themselves (all of them when few remain, else a prefix
    sample so the true answer can always be played)
  - the opening book, on the first move only
  - synthesized information guesses when few candidates remain: distinct
    digits taken from the candidates (rarest first), padded with digits known
    to be absent
  - a fixed set of spread guesses when many candidates remain

Everything here is deterministic: the same candidates and move count always
produce the same pool in the same order.
"""

from __future__ import annotations
from collections import Counter
from typing import Iterable, List, Sequence

from codebreaker.engine import Code
from codebreaker.engine.feedback import ALPHABET, CODE_LENGTH
from codebreaker.engine.session import OPENING_BOOK

from .config import AdvisorConfig

SPREAD_GUESSES: tuple = (
    (0, 2, 4, 6),
    (1, 3, 5, 7),
    (2, 4, 6, 8),
    (3, 5, 7, 9),
    (0, 1, 8, 9),
    (2, 3, 6, 7),
    (4, 5, 2, 3),
    (6, 7, 0, 1),
    (8, 9, 4, 5),
    (1, 4, 7, 0),
)


def _unique_preserve_order(codes: Iterable[Code]) -> List[Code]:
    seen, out = set(), []
    for c in codes:
        if c not in seen:
            seen.add(c)
            out.append(c)
    return out


def information_guesses(candidates: Sequence[Code]) -> List[Code]:
    """
    Distinct-digit guesses built from digit statistics of the candidates.

      1) the first four digits seen, in order of first appearance
      2) the four rarest digits present (ties by digit value)
      3) the rarest present digits padded with absent ones, 3+1 and 2+2

    A guess that would repeat a digit is dropped; a repeat spends one of the
    four slots re-testing something already tested.
    """
    counts: Counter = Counter()
    first_seen: List[int] = []
    for code in candidates:
        for d in code:
            if d not in counts:
                first_seen.append(d)
            counts[d] += 1

    rarest = sorted(counts, key=lambda d: (counts[d], d))
    absent = [d for d in ALPHABET if d not in counts]

    raw: List[List[int]] = [first_seen[:CODE_LENGTH], rarest[:CODE_LENGTH]]
    for keep in (3, 2):
        if len(rarest) >= keep:
            raw.append(rarest[:keep] + absent[: CODE_LENGTH - keep])

    out: List[Code] = []
    for digits in raw:
        if len(digits) == CODE_LENGTH and len(set(digits)) == CODE_LENGTH:
            out.append(tuple(digits))  # type: ignore[arg-type]
    return _unique_preserve_order(out)


def candidate_pool(candidates: Sequence[Code], moves_made: int,
                   config: AdvisorConfig = AdvisorConfig()) -> List[Code]:
    """Assemble the de-duplicated list of guesses to score."""
    n = len(candidates)
    small = n <= config.small_pool

    parts: List[Code] = list(candidates) if small else list(candidates[: config.sample_cap])

    if moves_made == 0:
        parts.extend(OPENING_BOOK)

    if small:
        parts.extend(information_guesses(candidates))

    if n > config.large_pool:
        parts.extend(SPREAD_GUESSES)

    return _unique_preserve_order(parts)
