"""Domain error types."""


class DomainError(Exception):
    """Base domain error."""
    pass


class NotFoundError(DomainError):
    """Resource not found."""
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id {identifier} not found")


class ValidationError(DomainError):
    """Validation error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ImmutableFieldError(DomainError):
    """Attempt to change a protected field (e.g. the name of a default role)."""
    def __init__(self, resource: str, field: str, message: str | None = None):
        self.resource = resource
        self.field = field
        self.message = message or f"{resource} field '{field}' cannot be modified"
        super().__init__(self.message)


class AuthorizationError(DomainError):
    """Authorization error."""
    def __init__(self, message: str = "Not authorized"):
        self.message = message
        super().__init__(message)
