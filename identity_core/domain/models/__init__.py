"""Domain models. Pure business entities."""

from identity_core.domain.models.enums import UserPermission, UserRole, UserStatus
from identity_core.domain.models.record import RecordEnvelope
from identity_core.domain.models.user import User

__all__ = [
    "RecordEnvelope",
    "User",
    "UserPermission",
    "UserRole",
    "UserStatus",
]
