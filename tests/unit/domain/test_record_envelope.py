"""Record envelope: soft-delete lifecycle, identity, pre-persist guard."""

import uuid
from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from identity_core.domain.exceptions import TenantNotConfiguredError
from identity_core.domain.models.record import RecordEnvelope, utcnow


def test_new_envelope_has_no_id_and_matching_timestamps():
    env = RecordEnvelope(tenant_id="t1")
    assert env.is_new()
    assert env.updated_at == env.created_at
    assert env.deleted is False
    assert env.deleted_at is None
    assert env.version == 0


def test_envelope_with_id_is_not_new():
    assert not RecordEnvelope(tenant_id="t1", id=uuid.uuid4()).is_new()


def test_mark_as_deleted_sets_triple_and_actor():
    env = RecordEnvelope(tenant_id="t1", id=uuid.uuid4())
    deleted = env.mark_as_deleted("admin1")
    assert deleted.deleted is True
    assert deleted.deleted_at is not None
    assert deleted.deleted_by == "admin1"
    assert deleted.last_modified_by == "admin1"
    assert deleted.updated_at >= env.updated_at


def test_mark_as_deleted_does_not_mutate_original():
    env = RecordEnvelope(tenant_id="t1")
    env.mark_as_deleted("admin1")
    assert env.deleted is False
    assert env.deleted_at is None


def test_mark_as_deleted_twice_refreshes_timestamp_and_actor():
    first = RecordEnvelope(tenant_id="t1").mark_as_deleted("a")
    second = first.mark_as_deleted("b")
    assert second.deleted is True
    assert second.deleted_by == "b"
    assert second.last_modified_by == "b"
    assert second.deleted_at >= first.deleted_at


def test_mark_as_deleted_then_restore_clears_deleted_state():
    env = RecordEnvelope(tenant_id="t1").mark_as_deleted("admin1").restore("admin2")
    assert env.deleted is False
    assert env.deleted_at is None
    assert env.deleted_by is None
    assert env.last_modified_by == "admin2"


def test_touch_keeps_attribution_without_actor():
    env = RecordEnvelope(tenant_id="t1", last_modified_by="alice")
    assert env.touch().last_modified_by == "alice"
    assert env.touch("bob").last_modified_by == "bob"


def test_with_metadata_replaces_opaque_value():
    env = RecordEnvelope(tenant_id="t1", metadata='{"a": 1}')
    assert env.with_metadata('{"b": 2}').metadata == '{"b": 2}'
    assert env.metadata == '{"a": 1}'


def test_envelope_is_frozen():
    env = RecordEnvelope(tenant_id="t1")
    with pytest.raises(FrozenInstanceError):
        env.tenant_id = "t2"


@pytest.mark.parametrize("tenant_id", ["", "   "])
def test_ensure_persistable_rejects_blank_tenant(tenant_id):
    with pytest.raises(TenantNotConfiguredError) as exc_info:
        RecordEnvelope(tenant_id=tenant_id).ensure_persistable()
    assert "Tenant ID" in exc_info.value.message


def test_ensure_persistable_accepts_tenant():
    RecordEnvelope(tenant_id="t1").ensure_persistable()


def test_equality_by_identifier():
    record_id = uuid.uuid4()
    a = RecordEnvelope(tenant_id="t1", id=record_id)
    b = RecordEnvelope(tenant_id="t1", id=record_id, created_at=utcnow() - timedelta(days=1))
    assert a == b
    assert hash(a) == hash(b)
    assert a != RecordEnvelope(tenant_id="t1", id=uuid.uuid4())


def test_envelope_without_id_equals_only_itself():
    a = RecordEnvelope(tenant_id="t1")
    b = RecordEnvelope(tenant_id="t1")
    assert a == a
    assert a != b
    assert len({a, b}) == 2


def test_envelope_not_equal_to_other_types():
    env = RecordEnvelope(tenant_id="t1", id=uuid.uuid4())
    assert env != env.id
