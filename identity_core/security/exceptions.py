"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthorizationError(SecurityError):
    """Raised when a user lacks the permission or role an action requires."""


class TenantIsolationError(SecurityError):
    """Raised when a user or request reaches into another tenant's records."""
