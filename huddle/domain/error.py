"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input rejected before any write (empty text, missing identity, ...)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TransientStoreError(DomainError):
    """Store connectivity or availability failure.

    ``retryable`` tells callers whether repeating the operation may succeed.
    """

    def __init__(self, message: str, retryable: bool = True):
        self.retryable = retryable
        super().__init__(message)


class ThreadLoadError(DomainError):
    """Raised when a comment thread subscription fails to load."""

    def __init__(self, post_id: str, cause: Exception | None = None):
        self.post_id = post_id
        self.cause = cause
        super().__init__(f"Failed to load comments for post {post_id}")
