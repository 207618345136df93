from .feedback import (
    Aggregate, Code, Feedback, Pattern, RULES, SOLVED,
    aggregate, evaluate, format_code, format_feedback, get_rule, is_solved,
)
from .constraints import all_codes, filter_candidates, replay
from .validation import parse_code, validate_feedback
from .errors import (
    CodebreakerError, GameOver, InconsistentHistory, InvalidCode, InvalidFeedback, SessionExhausted,
)
from .session import (
    MAX_MOVES, GameSession, Status, new_session, opening_guesses, propose, random_secret, submit, undo,
)

__all__ = [
    "Aggregate", "Code", "Feedback", "Pattern", "RULES", "SOLVED",
    "aggregate", "evaluate", "format_code", "format_feedback", "get_rule", "is_solved",
    "all_codes", "filter_candidates", "replay",
    "parse_code", "validate_feedback",
    "CodebreakerError", "GameOver", "InconsistentHistory", "InvalidCode", "InvalidFeedback",
    "SessionExhausted",
    "MAX_MOVES", "GameSession", "Status", "new_session", "opening_guesses", "propose",
    "random_secret", "submit", "undo",
]
