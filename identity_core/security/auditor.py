"""Current-actor attribution for created_by / last_modified_by."""

import logging
from typing import Optional

from identity_core.config.settings import AppSettings, get_settings
from identity_core.core.context import actor_id_ctx, tenant_id_ctx

logger = logging.getLogger(__name__)


class AuditorProvider:
    """
    Resolves the acting identity as "<tenant>:<actor>" from the request context.
    Falls back to the configured system actor and default tenant.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self._settings = settings or get_settings()

    def current_auditor(self) -> str:
        tenant_id = tenant_id_ctx.get()
        if not tenant_id:
            logger.warning("auditor_without_tenant", extra={"fallback": self._settings.default_tenant})
            tenant_id = self._settings.default_tenant
        actor_id = actor_id_ctx.get() or self._settings.system_actor
        return f"{tenant_id}:{actor_id}"
