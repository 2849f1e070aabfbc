"""Exceptions raised by wicker.

Everything subclasses ``ValueError`` so callers that only care about bad input
can catch that.
"""


class WickerError(ValueError):
    """Base class for all wicker errors."""


class InvalidInputError(WickerError):
    """The entry list passed to a picker was empty or malformed."""


class InvalidWeightError(WickerError):
    """A weight was negative or non-finite, or the weights sum to nothing."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index
