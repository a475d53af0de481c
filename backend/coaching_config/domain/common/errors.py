"""Domain error types."""
from typing import Optional


class DomainError(Exception):
    """Base domain error."""
    pass


class NotFoundError(DomainError):
    """Resource not found."""
    def __init__(self, resource: str, identifier):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id {identifier} not found")


class ValidationError(DomainError):
    """Validation error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthorizationError(DomainError):
    """Authorization error."""
    def __init__(self, message: str = "Not authorized"):
        self.message = message
        super().__init__(message)


class ConflictError(DomainError):
    """Resource conflict error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConflictingExpectationError(ConflictError):
    """An active expectation for the same resource and type overlaps the requested dates."""
    def __init__(self, conflicting_id: int, resource_id=None):
        self.conflicting_id = conflicting_id
        self.resource_id = resource_id
        super().__init__(
            f"Conflicting expectation for resource {resource_id}. Search id{{{conflicting_id}}}"
        )


class LockTimeoutError(DomainError):
    """The store lock could not be acquired in time."""
    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        self.message = f"Could not acquire store lock within {timeout_seconds:g}s; try again"
        super().__init__(self.message)


class IdentityNotFoundError(DomainError):
    """The caller has no resource id to stamp audit fields with."""
    def __init__(self, identity: Optional[str] = None):
        self.identity = identity
        self.message = f"No resource id found for {identity or 'current user'}"
        super().__init__(self.message)
