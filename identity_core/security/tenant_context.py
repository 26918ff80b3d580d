"""Strict tenant isolation. No cross-tenant access except for super-admins. No HTTP."""

import logging

from identity_core.core.context import tenant_id_ctx
from identity_core.domain.models.user import User
from identity_core.security.exceptions import TenantIsolationError

logger = logging.getLogger(__name__)


class TenantContext:
    """Validate that the acting tenant matches the resource tenant."""

    @staticmethod
    def current_tenant() -> str:
        """Tenant bound to the current request/task. Raises TenantIsolationError if none is bound."""
        tenant_id = tenant_id_ctx.get()
        if not tenant_id or not tenant_id.strip():
            raise TenantIsolationError("No tenant bound to the current context")
        return tenant_id

    @staticmethod
    def validate_access(resource_tenant: str, request_tenant: str) -> None:
        """
        If mismatch, raise TenantIsolationError.
        Blank tenants on either side are rejected outright.
        """
        if not resource_tenant or not request_tenant:
            raise TenantIsolationError(
                "Tenant isolation: resource_tenant and request_tenant must be non-empty"
            )
        if resource_tenant != request_tenant:
            raise TenantIsolationError(
                f"Tenant isolation: access denied. "
                f"Resource tenant '{resource_tenant}' does not match request tenant '{request_tenant}'"
            )

    @staticmethod
    def validate_user_access(user: User, tenant_id: str) -> None:
        """Raise TenantIsolationError unless user.can_access_tenant(tenant_id)."""
        if not tenant_id:
            raise TenantIsolationError("Tenant isolation: target tenant must be non-empty")
        if not user.can_access_tenant(tenant_id):
            raise TenantIsolationError(
                f"Tenant isolation: user {user.id} of tenant '{user.tenant_id}' "
                f"may not access tenant '{tenant_id}'"
            )
        if user.tenant_id != tenant_id:
            logger.info(
                "cross_tenant_access",
                extra={"user_id": str(user.id), "home_tenant": user.tenant_id, "target_tenant": tenant_id},
            )
