"""User domain model: identity, credentials state, role and permissions. No ORM."""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import FrozenSet, Iterable, Optional

from identity_core.domain.models.enums import ADMIN_ROLES, UserPermission, UserRole, UserStatus
from identity_core.domain.models.record import RecordEnvelope, utcnow
from identity_core.domain.validators.user_validator import validate_user

# Recommend a password change once the record has been idle this long
PASSWORD_MAX_AGE = timedelta(days=90)

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOCALE = "en"


@dataclass(frozen=True, eq=False)
class User:
    """
    Authenticated principal of a tenant.

    Identity and audit fields live on the composed RecordEnvelope and are exposed
    as read-only properties. Every with_*() helper returns a new snapshot with
    updated_at refreshed; the original is never mutated.
    """

    record: RecordEnvelope
    email: str
    password_hash: str
    first_name: str
    last_name: str
    external_id: Optional[str] = None

    password_reset_token: Optional[str] = None
    password_reset_expires_at: Optional[datetime] = None
    email_verification_token: Optional[str] = None
    email_verified_at: Optional[datetime] = None

    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    timezone: Optional[str] = DEFAULT_TIMEZONE
    locale: Optional[str] = DEFAULT_LOCALE

    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    permissions: FrozenSet[UserPermission] = frozenset()

    last_login_at: Optional[datetime] = None
    last_login_ip: Optional[str] = None
    login_count: int = 0
    failed_login_attempts: int = 0
    account_locked_until: Optional[datetime] = None

    preferences: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        # Stored lower-cased so (tenant_id, email) uniqueness is case-insensitive
        if isinstance(self.email, str):
            object.__setattr__(self, "email", self.email.strip().lower())
        if not isinstance(self.permissions, frozenset):
            object.__setattr__(self, "permissions", frozenset(self.permissions))

    @classmethod
    def create(
        cls,
        *,
        tenant_id: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        actor: Optional[str] = None,
        metadata: Optional[str] = None,
        **attributes,
    ) -> "User":
        """
        Build a new user with a fresh identifier and default role/status/counters.
        Raises UserValidationError listing every violated field.
        """
        now = utcnow()
        record = RecordEnvelope(
            tenant_id=tenant_id,
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            created_by=actor,
            last_modified_by=actor,
            metadata=metadata,
        )
        user = cls(
            record=record,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            **attributes,
        )
        validate_user(user)
        return user

    # ------------------------------------------------------------------
    # Envelope fields
    # ------------------------------------------------------------------

    @property
    def id(self) -> Optional[uuid.UUID]:
        return self.record.id

    @property
    def tenant_id(self) -> str:
        return self.record.tenant_id

    @property
    def created_at(self) -> datetime:
        return self.record.created_at

    @property
    def updated_at(self) -> datetime:
        return self.record.updated_at

    @property
    def created_by(self) -> Optional[str]:
        return self.record.created_by

    @property
    def last_modified_by(self) -> Optional[str]:
        return self.record.last_modified_by

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self.record.deleted_at

    @property
    def deleted_by(self) -> Optional[str]:
        return self.record.deleted_by

    @property
    def version(self) -> int:
        return self.record.version

    @property
    def metadata(self) -> Optional[str]:
        return self.record.metadata

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def username(self) -> str:
        return self.email

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None

    @property
    def is_password_reset_valid(self) -> bool:
        return (
            self.password_reset_token is not None
            and self.password_reset_expires_at is not None
            and self.password_reset_expires_at > utcnow()
        )

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_locked(self) -> bool:
        return self.account_locked_until is not None and self.account_locked_until > utcnow()

    @property
    def is_deletable(self) -> bool:
        return self.role != UserRole.SUPER_ADMIN and self.status != UserStatus.SYSTEM

    @property
    def is_account_non_expired(self) -> bool:
        return self.deleted_at is None

    @property
    def is_account_non_locked(self) -> bool:
        return not self.is_locked

    @property
    def is_credentials_non_expired(self) -> bool:
        return True

    @property
    def is_enabled(self) -> bool:
        return self.status == UserStatus.ACTIVE and self.deleted_at is None

    @property
    def authorities(self) -> FrozenSet[str]:
        """Claim set for access checks: ROLE_<role> plus every granted permission name."""
        return frozenset({f"ROLE_{self.role.value}"} | {p.value for p in self.permissions})

    def display_name_or_full_name(self) -> str:
        if self.display_name and self.display_name.strip():
            return self.display_name
        return self.full_name

    def should_update_password(self) -> bool:
        return self.updated_at < utcnow() - PASSWORD_MAX_AGE

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def has_permission(self, permission: UserPermission) -> bool:
        """Admins implicitly hold every permission."""
        return permission in self.permissions or self.is_admin

    def has_any_permission(self, *permissions: UserPermission) -> bool:
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, *permissions: UserPermission) -> bool:
        return all(self.has_permission(p) for p in permissions)

    def can_access_tenant(self, tenant_id: str) -> bool:
        """Super-admins bypass tenant isolation."""
        return self.tenant_id == tenant_id or self.role == UserRole.SUPER_ADMIN

    # ------------------------------------------------------------------
    # Copy-on-write transformations
    # ------------------------------------------------------------------

    def _evolve(self, record: Optional[RecordEnvelope] = None, **changes) -> "User":
        """New snapshot with the changes applied; raises UserValidationError if it is invalid."""
        user = replace(self, record=record if record is not None else self.record.touch(), **changes)
        validate_user(user)
        return user

    def with_password(self, password_hash: str) -> "User":
        return self._evolve(password_hash=password_hash)

    def with_last_login(self, ip: str) -> "User":
        now = utcnow()
        return self._evolve(
            record=self.record.touch(at=now),
            last_login_at=now,
            last_login_ip=ip,
            login_count=self.login_count + 1,
            failed_login_attempts=0,
        )

    def with_failed_login(self) -> "User":
        return self._evolve(failed_login_attempts=self.failed_login_attempts + 1)

    def with_email_verified(self) -> "User":
        now = utcnow()
        return self._evolve(
            record=self.record.touch(at=now),
            email_verified_at=now,
            email_verification_token=None,
        )

    def with_password_reset(self, token: str, expires_at: datetime) -> "User":
        return self._evolve(password_reset_token=token, password_reset_expires_at=expires_at)

    def with_status(self, status: UserStatus) -> "User":
        return self._evolve(status=status)

    def with_role(self, role: UserRole) -> "User":
        return self._evolve(role=role)

    def with_permissions(self, permissions: Iterable[UserPermission]) -> "User":
        return self._evolve(permissions=frozenset(permissions))

    def with_lock_until(self, lock_until: Optional[datetime]) -> "User":
        return self._evolve(account_locked_until=lock_until)

    def with_metadata(self, metadata: Optional[str]) -> "User":
        return self._evolve(record=self.record.with_metadata(metadata))

    def with_preferences(self, preferences: Optional[str]) -> "User":
        return self._evolve(preferences=preferences)

    def soft_delete(self, actor: str) -> "User":
        return self._evolve(record=self.record.mark_as_deleted(actor), status=UserStatus.DELETED)

    def restore(self, actor: str) -> "User":
        return self._evolve(record=self.record.restore(actor), status=UserStatus.ACTIVE)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, User):
            return NotImplemented
        return self.record == other.record

    def __hash__(self) -> int:
        return hash(self.record)

    def __repr__(self) -> str:
        return (
            f"User(id={self.id}, tenant_id={self.tenant_id!r}, email={self.email!r}, "
            f"role={self.role.value}, status={self.status.value})"
        )
