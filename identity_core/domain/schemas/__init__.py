"""Domain schemas. Response shapes and serialization."""

from identity_core.domain.schemas.user import UserResponse

__all__ = [
    "UserResponse",
]
