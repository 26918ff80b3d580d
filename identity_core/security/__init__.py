"""Security: permission guards, tenant isolation, actor attribution. No HTTP."""

from identity_core.security.auditor import AuditorProvider
from identity_core.security.rbac import AuthorizationService
from identity_core.security.tenant_context import TenantContext

__all__ = [
    "AuditorProvider",
    "AuthorizationService",
    "TenantContext",
]
