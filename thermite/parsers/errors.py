class ScheduleCodecError(ValueError):
    """Base class for schedule codec contract violations."""


class ShapeError(ScheduleCodecError):
    """Raised when an input sequence does not have the fixed expected length."""

    def __init__(self, what, expected, actual):
        super().__init__(f"{what} must have exactly {expected} elements, got {actual}")
        self.expected = expected
        self.actual = actual


class RangeError(ScheduleCodecError):
    """Raised when a value does not fit the bit width it is packed into."""

    def __init__(self, what, index, value, maximum):
        if index is None:
            message = f"{what} {value!r} is outside [0, {maximum}]"
        else:
            message = f"{what} at index {index} is {value!r}, outside [0, {maximum}]"
        super().__init__(message)
        self.index = index
        self.value = value


def check_range(what, values, maximum):
    """Raises RangeError for the first value that is not an int in [0, maximum]."""
    for index, value in enumerate(values):
        if not isinstance(value, int) or not 0 <= value <= maximum:
            raise RangeError(what, index, value, maximum)
