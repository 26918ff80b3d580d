"""Record envelope shared by every persisted record. Pure domain, no ORM."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional

from identity_core.domain.exceptions import TenantNotConfiguredError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_tenant_assigned(tenant_id: Optional[str]) -> None:
    """Fail-safe before a first write; tenant assignment itself belongs to the caller."""
    if not tenant_id or not tenant_id.strip():
        raise TenantNotConfiguredError("Tenant ID must be set before persisting a record")


@dataclass(frozen=True, eq=False)
class RecordEnvelope:
    """
    Identity, tenant tag, soft-delete state, audit stamps, optimistic-lock version
    and opaque metadata. Composed by value into concrete records.

    Lifecycle methods return a new envelope; nothing is mutated in place.
    """

    tenant_id: str = ""
    id: Optional[uuid.UUID] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    last_modified_by: Optional[str] = None
    version: int = 0
    metadata: Optional[str] = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)

    def mark_as_deleted(self, actor: Optional[str] = None) -> "RecordEnvelope":
        """Soft delete. Calling it again only refreshes the timestamp and actor."""
        now = utcnow()
        return replace(
            self,
            deleted=True,
            deleted_at=now,
            deleted_by=actor,
            last_modified_by=actor,
            updated_at=now,
        )

    def restore(self, actor: Optional[str] = None) -> "RecordEnvelope":
        return replace(
            self,
            deleted=False,
            deleted_at=None,
            deleted_by=None,
            last_modified_by=actor,
            updated_at=utcnow(),
        )

    def touch(self, actor: Optional[str] = None, *, at: Optional[datetime] = None) -> "RecordEnvelope":
        """Refresh updated_at; attribution changes only when an actor is given."""
        changes: dict[str, Any] = {"updated_at": at or utcnow()}
        if actor is not None:
            changes["last_modified_by"] = actor
        return replace(self, **changes)

    def with_metadata(self, metadata: Optional[str]) -> "RecordEnvelope":
        return replace(self.touch(), metadata=metadata)

    def is_new(self) -> bool:
        """True until an identifier is assigned (insert vs update path)."""
        return self.id is None

    def ensure_persistable(self) -> None:
        """Pre-persist guard. Raises TenantNotConfiguredError when tenant_id is blank."""
        ensure_tenant_assigned(self.tenant_id)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)
