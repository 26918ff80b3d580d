# identity_core/infrastructure/database/models.py

import logging
import uuid

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    event,
    inspect,
)
from sqlalchemy.orm import declared_attr, relationship

from identity_core.domain.exceptions import TenantNotConfiguredError
from identity_core.domain.models.enums import UserRole, UserStatus
from identity_core.domain.models.record import ensure_tenant_assigned, utcnow
from identity_core.infrastructure.database.session import Base
from identity_core.security.auditor import AuditorProvider

logger = logging.getLogger(__name__)


class BaseModel(Base):
    """Envelope columns shared by every table. `version` drives optimistic locking."""

    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    tenant_id = Column(String(100), nullable=False, index=True)

    deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    created_by = Column(String(100), nullable=True)
    last_modified_by = Column(String(100), nullable=True)

    version = Column(Integer, nullable=False)

    metadata_ = Column("metadata", Text, nullable=True)

    @declared_attr
    def __mapper_args__(cls):
        return {"version_id_col": cls.version}


class UserModel(BaseModel):
    """ORM model for users. (tenant_id, email) is unique; permissions live in user_permissions."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
        Index("idx_users_email", "email"),
        Index("idx_users_external_id", "external_id"),
        Index("idx_users_status", "status"),
        Index("idx_users_role", "role"),
        Index("idx_users_last_login", "last_login_at"),
    )

    external_id = Column(String(255), nullable=True)

    email = Column(String(255), nullable=False)
    password_hash = Column(String(60), nullable=False)
    password_reset_token = Column(String(255), nullable=True)
    password_reset_expires_at = Column(DateTime(timezone=True), nullable=True)
    email_verification_token = Column(String(255), nullable=True)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    phone = Column(String(20), nullable=True)
    timezone = Column(String(50), nullable=True, default="UTC")
    locale = Column(String(10), nullable=True, default="en")

    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    status = Column(String(20), nullable=False, default=UserStatus.ACTIVE.value)

    last_login_at = Column(DateTime(timezone=True), nullable=True)
    last_login_ip = Column(String(45), nullable=True)
    login_count = Column(BigInteger, nullable=False, default=0)
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    account_locked_until = Column(DateTime(timezone=True), nullable=True)

    preferences = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    permission_grants = relationship(
        "UserPermissionModel",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class UserPermissionModel(Base):
    """One granted permission per row; the composite key keeps membership unique."""

    __tablename__ = "user_permissions"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    permission = Column(String(40), primary_key=True)

    user = relationship("UserModel", back_populates="permission_grants")


@event.listens_for(BaseModel, "before_insert", propagate=True)
def _before_insert(mapper, connection, target) -> None:
    try:
        ensure_tenant_assigned(target.tenant_id)
    except TenantNotConfiguredError:
        logger.error(
            "persist_without_tenant",
            extra={"table": mapper.local_table.name, "record_id": str(target.id)},
        )
        raise
    auditor = AuditorProvider().current_auditor()
    if target.created_by is None:
        target.created_by = auditor
    if target.last_modified_by is None:
        target.last_modified_by = auditor


@event.listens_for(BaseModel, "before_update", propagate=True)
def _before_update(mapper, connection, target) -> None:
    if not inspect(target).attrs.last_modified_by.history.has_changes():
        target.last_modified_by = AuditorProvider().current_auditor()
