"""
Input validation for codes and feedback.

This module answers the question: "Can the engine use this input as-is?"
Everything coming from a caller (UI, CLI, harness) goes through here before it
touches a candidate subset, so a bad value never filters anything.

A code is valid iff:
  - it has exactly 4 symbols
  - every symbol is a digit 0-9
It may be given as "1467", as (1, 4, 6, 7) or as ["1", "4", "6", "7"].

Feedback is valid iff it is either:
  - a per-slot pattern: 4 tags from C/P/W (case-insensitive), as a string
    ("CPWW") or a sequence of tag words (["correct", "partial", "wrong", "wrong"])
  - an aggregate: two counts in [0, 4] whose sum is at most 4
"""

from __future__ import annotations
from typing import Any, Sequence

from .errors import InvalidCode, InvalidFeedback
from .feedback import ALPHABET, CODE_LENGTH, CORRECT, PARTIAL, WRONG, Aggregate, Code, Feedback

# ASCII only: str.isdigit also accepts superscripts and other scripts' digits
DIGITS = "0123456789"

_TAG_WORDS = {
    "c": CORRECT, "correct": CORRECT,
    "p": PARTIAL, "partial": PARTIAL,
    "w": WRONG, "wrong": WRONG,
}


def parse_code(value: Any) -> Code:
    """
    Normalize `value` into a Code tuple or raise InvalidCode.

    Examples:
      parse_code("1467")        -> (1, 4, 6, 7)
      parse_code([0, 0, 1, 2])  -> (0, 0, 1, 2)
    """
    if isinstance(value, str):
        symbols: Sequence[Any] = value.strip()
    elif isinstance(value, Sequence):
        symbols = value
    else:
        raise InvalidCode(f"Code must be a string or a sequence of digits; got {type(value).__name__}")

    if len(symbols) != CODE_LENGTH:
        raise InvalidCode(f"Code must have exactly {CODE_LENGTH} digits; got {value!r}")

    digits = []
    for s in symbols:
        if isinstance(s, bool):
            raise InvalidCode(f"Not a digit: {s!r}")
        if isinstance(s, str):
            if len(s) != 1 or s not in DIGITS:
                raise InvalidCode(f"Not a digit: {s!r}")
            s = int(s)
        if not isinstance(s, int) or s not in ALPHABET:
            raise InvalidCode(f"Digits must be 0-9; got {s!r} in {value!r}")
        digits.append(s)
    return tuple(digits)  # type: ignore[return-value]


def validate_aggregate(correct: Any, partial: Any) -> Aggregate:
    if not isinstance(correct, int) or not isinstance(partial, int):
        raise InvalidFeedback(f"Aggregate counts must be integers; got ({correct!r}, {partial!r})")
    if not (0 <= correct <= CODE_LENGTH) or not (0 <= partial <= CODE_LENGTH):
        raise InvalidFeedback(f"Counts must be within 0-{CODE_LENGTH}; got ({correct}, {partial})")
    if correct + partial > CODE_LENGTH:
        raise InvalidFeedback(f"Total feedback cannot exceed {CODE_LENGTH}; got {correct} + {partial}")
    return Aggregate(correct, partial)


def validate_feedback(value: Any) -> Feedback:
    """
    Normalize `value` into a Pattern string or an Aggregate, or raise InvalidFeedback.

    Examples:
      validate_feedback("cpww")                  -> "CPWW"
      validate_feedback(Aggregate(1, 1))         -> Aggregate(correct=1, partial=1)
      validate_feedback(["correct"] + ["wrong"] * 3) -> "CWWW"
    """
    if isinstance(value, Aggregate):
        return validate_aggregate(value.correct, value.partial)

    if isinstance(value, str):
        tags: Sequence[Any] = list(value.strip())
    elif isinstance(value, Sequence):
        tags = value
    else:
        raise InvalidFeedback(f"Unsupported feedback type: {type(value).__name__}")

    if len(tags) != CODE_LENGTH:
        raise InvalidFeedback(f"Per-slot feedback needs exactly {CODE_LENGTH} tags; got {len(tags)}")

    out = []
    for t in tags:
        tag = _TAG_WORDS.get(str(t).strip().lower())
        if tag is None:
            raise InvalidFeedback(f"Unknown feedback tag {t!r}; use C/P/W")
        out.append(tag)
    return "".join(out)
