"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class RetryExhaustedError(UtilError):
    """Raised when a retried operation keeps failing."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation} failed after {attempts} attempts: {last_error}"
        )
