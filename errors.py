"""Exceptions raised by the task history core."""


class ValidationError(ValueError):
    """User input that cannot become a task, e.g. a blank title."""


class InvariantViolation(RuntimeError):
    """A caller handed the store a payload that would corrupt its state."""
