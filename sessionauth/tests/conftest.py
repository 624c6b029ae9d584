from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sessionauth.application.services.credential_store import CredentialStore
from sessionauth.application.services.session_authenticator import SessionAuthenticator
from sessionauth.infrastructure.db import Base
from sessionauth.infrastructure.db import models  # noqa: F401

from fakes import DeterministicHasher, DictSessionStore, InMemoryAccountStore, SeededRandom


@pytest.fixture()
def accounts() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture()
def sessions() -> DictSessionStore:
    return DictSessionStore()


@pytest.fixture()
def credentials(accounts: InMemoryAccountStore) -> CredentialStore:
    return CredentialStore(
        accounts=accounts,
        password_hasher=DeterministicHasher(),
        random_source=SeededRandom(),
    )


@pytest.fixture()
def authenticator(credentials: CredentialStore, sessions: DictSessionStore) -> SessionAuthenticator:
    return SessionAuthenticator(
        credentials=credentials,
        sessions=sessions,
        secret_key="test-secret",
    )


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
