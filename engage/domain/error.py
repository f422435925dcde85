"""Domain layer errors.

Every error raised by the engagement core derives from DomainError and is
propagated to the immediate caller. The API layer maps each class to an
HTTP status in engage.interface.api.errors.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class UnauthorizedError(DomainError):
    """Raised when an operation requires a caller identity and none was resolved."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ValidationFailedError(DomainError):
    """Raised when comment content fails validation.

    The message is shown verbatim next to the comment composer.
    """

    pass


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the configured maximum."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Cannot reply further: replies are limited to {max_depth} level(s)"
        )


class ForbiddenError(DomainError):
    """Raised when a user attempts an action reserved for the owner."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not allowed to {action} on {resource} {resource_id}"
        )


class InvalidTargetError(DomainError):
    """Raised when a best answer target is not a top-level comment of the item."""

    pass


class TransientStoreFailure(DomainError):
    """Raised when the underlying store aborts a transaction.

    Safe to retry for like toggles. Retrying comment creation may produce a
    duplicate unless the caller deduplicates.
    """

    pass
