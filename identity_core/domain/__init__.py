"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from identity_core.domain.exceptions import (
    DomainError,
    DomainValidationError,
    FieldViolation,
    InvalidTenantError,
    TenantNotConfiguredError,
    UserValidationError,
)
from identity_core.domain.models import (
    RecordEnvelope,
    User,
    UserPermission,
    UserRole,
    UserStatus,
)
from identity_core.domain.schemas import UserResponse
from identity_core.domain.validators import (
    validate_tenant_id,
    validate_user,
)

__all__ = [
    "DomainError",
    "DomainValidationError",
    "FieldViolation",
    "InvalidTenantError",
    "RecordEnvelope",
    "TenantNotConfiguredError",
    "User",
    "UserPermission",
    "UserResponse",
    "UserRole",
    "UserStatus",
    "UserValidationError",
    "validate_tenant_id",
    "validate_user",
]
