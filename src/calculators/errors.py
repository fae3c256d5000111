"""Exceptions raised by the withholding calculators."""


class InvalidInputError(ValueError):
    """A calculator precondition was violated (non-positive amount, out-of-range value)."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
