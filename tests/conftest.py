"""Shared fixtures: user factory and a throwaway SQLite database."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from identity_core.domain.models.user import User
from identity_core.infrastructure.database import models  # noqa: F401  (registers tables)
from identity_core.infrastructure.database.session import Base

# 60 characters, shaped like a bcrypt hash
PASSWORD_HASH = "$2b$12$" + "x" * 53


@pytest.fixture
def password_hash():
    return PASSWORD_HASH


@pytest.fixture
def make_user():
    def _make(**overrides) -> User:
        params = {
            "tenant_id": "tenant-1",
            "email": "jane.doe@acme.io",
            "password_hash": PASSWORD_HASH,
            "first_name": "Jane",
            "last_name": "Doe",
        }
        params.update(overrides)
        return User.create(**params)

    return _make


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'identity.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s
