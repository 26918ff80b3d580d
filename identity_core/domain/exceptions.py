"""Domain exceptions for validation and tenant configuration."""

from dataclasses import dataclass
from typing import Sequence, Tuple


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


@dataclass(frozen=True)
class FieldViolation:
    """One violated rule on one field."""

    field: str
    message: str


class UserValidationError(DomainValidationError):
    """Raised with every violated field of a user record, not just the first."""

    def __init__(self, errors: Sequence[FieldViolation]) -> None:
        self.errors: Tuple[FieldViolation, ...] = tuple(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"User validation failed ({len(self.errors)} errors): {summary}")

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(e.field for e in self.errors))


class InvalidTenantError(DomainError):
    """Raised when tenant_id is invalid (e.g. empty)."""


class TenantNotConfiguredError(DomainError):
    """
    Raised when a record reaches its first write without a tenant_id.
    Signals a misconfigured caller; never retried.
    """
