# identity_core/infrastructure/database/queries.py

import uuid
from typing import Optional

from sqlalchemy import Select, func, select

from identity_core.domain.models.enums import UserRole, UserStatus
from identity_core.domain.validators.user_validator import validate_tenant_id
from identity_core.infrastructure.database.models import UserModel

# Every builder takes the tenant explicitly; there is no ambient tenant filter.


def _scoped(tenant_id: str, include_deleted: bool) -> Select:
    validate_tenant_id(tenant_id)
    stmt = select(UserModel).where(UserModel.tenant_id == tenant_id)
    if not include_deleted:
        stmt = stmt.where(UserModel.deleted_at.is_(None))
    return stmt


def select_users(
    tenant_id: str,
    *,
    status: Optional[UserStatus] = None,
    role: Optional[UserRole] = None,
    include_deleted: bool = False,
) -> Select:
    stmt = _scoped(tenant_id, include_deleted)
    if status is not None:
        stmt = stmt.where(UserModel.status == status.value)
    if role is not None:
        stmt = stmt.where(UserModel.role == role.value)
    return stmt.order_by(UserModel.created_at, UserModel.id)


def select_user_by_id(
    tenant_id: str,
    user_id: uuid.UUID,
    *,
    include_deleted: bool = False,
) -> Select:
    return _scoped(tenant_id, include_deleted).where(UserModel.id == user_id)


def select_user_by_email(
    tenant_id: str,
    email: str,
    *,
    include_deleted: bool = False,
) -> Select:
    """Case-insensitive email lookup within one tenant."""
    return _scoped(tenant_id, include_deleted).where(
        func.lower(UserModel.email) == email.strip().lower()
    )
