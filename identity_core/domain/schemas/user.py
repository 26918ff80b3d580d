"""Pydantic schema for the externally exposed user shape. Never carries credentials."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from identity_core.domain.models.enums import UserPermission, UserRole, UserStatus
from identity_core.domain.models.user import User


class UserResponse(BaseModel):
    """Response schema for user read. password_hash and reset/verification tokens are never included."""

    model_config = ConfigDict(frozen=True)

    id: Optional[uuid.UUID]
    tenant_id: str
    external_id: Optional[str] = None
    email: str
    first_name: str
    last_name: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    timezone: Optional[str] = None
    locale: Optional[str] = None
    role: UserRole
    status: UserStatus
    permissions: List[UserPermission] = Field(default_factory=list)
    last_login_at: Optional[datetime] = None
    login_count: int = 0
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    version: int

    # Derived
    full_name: str
    display_name_or_full: str
    is_email_verified: bool
    is_admin: bool
    is_locked: bool
    can_be_deleted: bool

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            tenant_id=user.tenant_id,
            external_id=user.external_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            phone=user.phone,
            timezone=user.timezone,
            locale=user.locale,
            role=user.role,
            status=user.status,
            permissions=sorted(user.permissions, key=lambda p: p.value),
            last_login_at=user.last_login_at,
            login_count=user.login_count,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
            version=user.version,
            full_name=user.full_name,
            display_name_or_full=user.display_name_or_full_name(),
            is_email_verified=user.is_email_verified,
            is_admin=user.is_admin,
            is_locked=user.is_locked,
            can_be_deleted=user.is_deletable,
        )
