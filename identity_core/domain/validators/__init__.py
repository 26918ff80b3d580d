"""Domain validators. Pure validation functions."""

from identity_core.domain.validators.user_validator import (
    record_violations,
    user_violations,
    validate_tenant_id,
    validate_user,
)

__all__ = [
    "record_violations",
    "user_violations",
    "validate_tenant_id",
    "validate_user",
]
