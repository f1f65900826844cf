"""Domain exceptions"""


class ValidationError(ValueError):
    """Raised when timer input is rejected. No state is mutated."""
    pass


class PersistenceError(Exception):
    """Raised when the key-value store cannot be read or written."""
    pass


class TimerNotFoundError(LookupError):
    """Raised when an operation names a timer id that is not registered."""

    def __init__(self, timer_id: str):
        super().__init__(f"Timer not found: {timer_id}")
        self.timer_id = timer_id
