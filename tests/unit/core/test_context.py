"""Context binding restores previous values on exit, including on error."""

import pytest

from identity_core.core.context import actor_id_ctx, tenant_id_ctx, use_context


def test_use_context_binds_and_restores():
    assert tenant_id_ctx.get() is None
    with use_context("tenant-1", actor_id="alice"):
        assert tenant_id_ctx.get() == "tenant-1"
        assert actor_id_ctx.get() == "alice"
        with use_context("tenant-2"):
            assert tenant_id_ctx.get() == "tenant-2"
            assert actor_id_ctx.get() is None
        assert tenant_id_ctx.get() == "tenant-1"
        assert actor_id_ctx.get() == "alice"
    assert tenant_id_ctx.get() is None


def test_use_context_restores_after_exception():
    with pytest.raises(RuntimeError):
        with use_context("tenant-1", actor_id="alice"):
            raise RuntimeError("boom")
    assert tenant_id_ctx.get() is None
    assert actor_id_ctx.get() is None
