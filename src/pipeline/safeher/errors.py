"""Exception types raised by the SafeHer core."""


class SafeHerError(Exception):
    """Base class for all SafeHer errors."""


class InputOutOfRange(SafeHerError, ValueError):
    """A coordinate lies outside the valid latitude/longitude bounds."""

    def __init__(self, field: str, value: float, lower: float, upper: float):
        self.field = field
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"{field} {value} outside [{lower}, {upper}]")


class InternalComputationFailure(SafeHerError):
    """Unexpected fault inside the risk scoring pipeline."""

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {cause}")


class DatasetError(SafeHerError):
    """The safe place dataset could not be read."""
