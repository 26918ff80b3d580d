"""Translate between User snapshots and UserModel rows."""

from datetime import datetime, timezone
from typing import Optional

from identity_core.domain.models.enums import UserPermission, UserRole, UserStatus
from identity_core.domain.models.record import RecordEnvelope
from identity_core.domain.models.user import User
from identity_core.domain.validators.user_validator import validate_user
from identity_core.infrastructure.database.exceptions import PersistenceError, StaleRecordError
from identity_core.infrastructure.database.models import UserModel, UserPermissionModel

# Plain columns copied one-to-one between the snapshot and the row
_USER_COLUMNS = (
    "external_id",
    "email",
    "password_hash",
    "password_reset_token",
    "password_reset_expires_at",
    "email_verification_token",
    "email_verified_at",
    "first_name",
    "last_name",
    "display_name",
    "avatar_url",
    "phone",
    "timezone",
    "locale",
    "last_login_at",
    "last_login_ip",
    "login_count",
    "failed_login_attempts",
    "account_locked_until",
    "preferences",
    "notes",
)

_ENVELOPE_COLUMNS = (
    "deleted",
    "deleted_at",
    "deleted_by",
    "created_at",
    "updated_at",
    "created_by",
    "last_modified_by",
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Some drivers (SQLite) hand back naive datetimes; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def user_to_orm(user: User, existing: Optional[UserModel] = None) -> UserModel:
    """
    Copy a validated snapshot onto a row. With `existing`, the snapshot must carry
    the row's current version, otherwise StaleRecordError is raised.
    """
    validate_user(user)
    if existing is None:
        row = UserModel(id=user.id, tenant_id=user.tenant_id)
    else:
        if user.id != existing.id:
            raise PersistenceError(f"Snapshot {user.id} cannot be applied to row {existing.id}")
        if user.tenant_id != existing.tenant_id:
            raise PersistenceError(f"tenant_id of user {user.id} is immutable")
        if user.version != existing.version:
            raise StaleRecordError(
                f"User {user.id} was modified concurrently "
                f"(snapshot version {user.version}, stored version {existing.version})"
            )
        row = existing

    record = user.record
    for name in _ENVELOPE_COLUMNS:
        setattr(row, name, getattr(record, name))
    row.metadata_ = record.metadata
    for name in _USER_COLUMNS:
        setattr(row, name, getattr(user, name))
    row.role = user.role.value
    row.status = user.status.value
    _sync_permissions(row, user.permissions)
    return row


def _sync_permissions(row: UserModel, permissions) -> None:
    wanted = {p.value for p in permissions}
    for grant in list(row.permission_grants):
        if grant.permission not in wanted:
            row.permission_grants.remove(grant)
    present = {grant.permission for grant in row.permission_grants}
    for value in sorted(wanted - present):
        row.permission_grants.append(UserPermissionModel(permission=value))


def user_from_orm(row: UserModel) -> User:
    record = RecordEnvelope(
        tenant_id=row.tenant_id,
        id=row.id,
        deleted=bool(row.deleted),
        deleted_at=_as_utc(row.deleted_at),
        deleted_by=row.deleted_by,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
        created_by=row.created_by,
        last_modified_by=row.last_modified_by,
        version=row.version or 0,
        metadata=row.metadata_,
    )
    return User(
        record=record,
        external_id=row.external_id,
        email=row.email,
        password_hash=row.password_hash,
        password_reset_token=row.password_reset_token,
        password_reset_expires_at=_as_utc(row.password_reset_expires_at),
        email_verification_token=row.email_verification_token,
        email_verified_at=_as_utc(row.email_verified_at),
        first_name=row.first_name,
        last_name=row.last_name,
        display_name=row.display_name,
        avatar_url=row.avatar_url,
        phone=row.phone,
        timezone=row.timezone,
        locale=row.locale,
        role=UserRole(row.role),
        status=UserStatus(row.status),
        permissions=frozenset(UserPermission(g.permission) for g in row.permission_grants),
        last_login_at=_as_utc(row.last_login_at),
        last_login_ip=row.last_login_ip,
        login_count=row.login_count or 0,
        failed_login_attempts=row.failed_login_attempts or 0,
        account_locked_until=_as_utc(row.account_locked_until),
        preferences=row.preferences,
        notes=row.notes,
    )
