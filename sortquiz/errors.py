# errors.py
#
# InvalidAction is the only learner-facing error. IllegalTarget marks a broken
# contract between the caller and an engine and is never shown to the learner.


class QuizError(Exception):
    """Base class for every error raised by the quiz engines."""


class InvalidAction(QuizError):
    """The learner's action is not the algorithm's correct next step."""

    def __init__(self, reason: str, message: str, details: dict = None):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.details = dict(details or {})

    def __eq__(self, other):
        if not isinstance(other, InvalidAction):
            return NotImplemented
        return (self.reason, self.message, self.details) == (other.reason, other.message, other.details)

    def __hash__(self):
        return hash((self.reason, self.message))

    def __repr__(self):
        return f"InvalidAction({self.reason!r}, {self.message!r}, {self.details!r})"


class IllegalTarget(QuizError, ValueError):
    """The caller referenced an index, slot or action the engine is not offering."""

    def __init__(self, target, eligible=(), message: str = None):
        self.target = target
        self.eligible = tuple(eligible)
        super().__init__(message or f"Target {target!r} is not eligible (eligible: {list(self.eligible)})")
