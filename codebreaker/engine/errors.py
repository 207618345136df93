"""Exceptions raised by the engine. Callers catch CodebreakerError to get all of them."""


class CodebreakerError(Exception):
    pass


class InvalidCode(CodebreakerError, ValueError):
    """A code is not exactly four digits 0-9."""


class InvalidFeedback(CodebreakerError, ValueError):
    """Feedback is malformed; nothing was filtered and the session is unchanged."""


class InconsistentHistory(CodebreakerError):
    """No code fits every recorded (guess, feedback) pair; some feedback was entered wrong."""


class SessionExhausted(CodebreakerError):
    """The move ceiling was reached without solving the code."""


class GameOver(CodebreakerError):
    """The session is already won or exhausted and accepts no more moves."""
