"""
Per-slot feedback for a single (guess, secret) pair.

Conventions:
  - 'C' : correct = right digit in the right slot
  - 'P' : partial = digit appears elsewhere in the secret
  - 'W' : wrong   = digit absent (or already fully accounted for)

Two rules are known for deciding Partial vs Wrong:

  membership       Partial whenever the digit occurs anywhere in the secret.
                   Can overstate Partial hits when a digit's occurrences are
                   already used up by Correct slots.
  duplicate_aware  Partial only while the secret still holds an occurrence of
                   the digit that is not matched by a Correct slot elsewhere
                   in the guess.

A deployment picks one rule and keeps it; mixing them in one game makes the
recorded patterns meaningless.
"""

from __future__ import annotations
from typing import Callable, Dict, Literal, NamedTuple, Sequence, Tuple, Union

CORRECT = "C"
PARTIAL = "P"
WRONG = "W"

# Each pattern character is one of 'C', 'P', 'W'
Tag = Literal["C", "P", "W"]

CODE_LENGTH = 4
ALPHABET = tuple(range(10))
SOLVED = CORRECT * CODE_LENGTH

Code = Tuple[int, int, int, int]
Pattern = str


class Aggregate(NamedTuple):
    """Peg counts: how many slots were Correct and how many were Partial."""
    correct: int
    partial: int


Feedback = Union[Pattern, Aggregate]
Rule = Callable[[Sequence[int], Sequence[int]], Pattern]


def membership(guess: Sequence[int], secret: Sequence[int]) -> Pattern:
    """
    Slot-by-slot rule with no duplicate accounting.

    Examples:
      membership((7, 8, 9, 0), (1, 4, 6, 7)) -> "PWWW"
      membership((1, 1, 2, 3), (1, 4, 6, 7)) -> "CPWW"
    """
    out = []
    for g, s in zip(guess, secret):
        if g == s:
            out.append(CORRECT)
        elif g in secret:
            out.append(PARTIAL)
        else:
            out.append(WRONG)
    return "".join(out)


def duplicate_aware(guess: Sequence[int], secret: Sequence[int]) -> Pattern:
    """
    Slot-by-slot rule that stops reporting Partial once every occurrence of a
    digit in the secret is already matched by a Correct slot.

    Algorithm (two-pass):
      1) mark exact matches.
      2) for every other slot compare the digit's count in the secret against
         the number of Correct slots holding that digit.

    Examples:
      duplicate_aware((1, 1, 2, 3), (1, 4, 6, 7)) -> "CWWW"
      duplicate_aware((7, 8, 9, 0), (1, 4, 6, 7)) -> "PWWW"
    """
    exact = [g == s for g, s in zip(guess, secret)]
    out = []
    for i, g in enumerate(guess):
        if exact[i]:
            out.append(CORRECT)
            continue
        total = secret.count(g)
        if total == 0:
            out.append(WRONG)
            continue
        placed = 0
        for j, other in enumerate(guess):
            if exact[j] and other == g:
                placed += 1
        out.append(PARTIAL if total > placed else WRONG)
    return "".join(out)


RULES: Dict[str, Rule] = {
    "duplicate_aware": duplicate_aware,
    "membership": membership,
}
DEFAULT_RULE = "duplicate_aware"


def get_rule(name: str) -> Rule:
    try:
        return RULES[name]
    except KeyError as e:
        raise ValueError(f"Unknown feedback rule: {name}. Available: {sorted(RULES)}") from e


def evaluate(guess: Sequence[int], secret: Sequence[int], rule: Rule = duplicate_aware) -> Pattern:
    """Pattern that `secret` shows for `guess` under `rule`."""
    return rule(guess, secret)


def aggregate(pattern: Pattern) -> Aggregate:
    """Collapse a per-slot pattern into peg counts (slot placement is lost)."""
    return Aggregate(pattern.count(CORRECT), pattern.count(PARTIAL))


def is_solved(feedback: Feedback) -> bool:
    if isinstance(feedback, Aggregate):
        return feedback.correct == CODE_LENGTH
    return feedback == SOLVED


def format_code(code: Sequence[int]) -> str:
    return "".join(str(d) for d in code)


def format_feedback(feedback: Feedback) -> str:
    if isinstance(feedback, Aggregate):
        return f"{feedback.correct}C{feedback.partial}P"
    return feedback
