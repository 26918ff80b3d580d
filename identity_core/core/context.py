# identity_core/core/context.py

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
tenant_id_ctx = contextvars.ContextVar("tenant_id", default=None)
actor_id_ctx = contextvars.ContextVar("actor_id", default=None)


@contextmanager
def use_context(
    tenant_id: str,
    actor_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> Iterator[None]:
    """Bind tenant/actor/correlation for the block; previous values are restored on exit."""
    tenant_token = tenant_id_ctx.set(tenant_id)
    actor_token = actor_id_ctx.set(actor_id)
    correlation_token = correlation_id_ctx.set(correlation_id)
    try:
        yield
    finally:
        correlation_id_ctx.reset(correlation_token)
        actor_id_ctx.reset(actor_token)
        tenant_id_ctx.reset(tenant_token)
