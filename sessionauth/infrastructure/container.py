# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sessionauth.application.services.credential_store import CredentialStore
from sessionauth.application.services.password_hashing import Argon2PasswordHasher
from sessionauth.application.services.randomness import SecretsRandomSource
from sessionauth.application.services.session_authenticator import SessionAuthenticator
from sessionauth.domain.accounts.entities import IdentifierField
from sessionauth.domain.accounts.repositories import PasswordHasher, SessionStore
from sessionauth.infrastructure.db import build_engine, build_session_factory
from sessionauth.infrastructure.repositories.accounts.sqlalchemy_account_store import (
    SqlAlchemyAccountStore,
)
from sessionauth.infrastructure.session.flask_session_store import FlaskSessionStore
from sessionauth.interfaces.http.auth import redirect_to_entry
from sessionauth.interfaces.http.controllers.accounts_controller import AccountsController
from sessionauth.shared.config import AppConfig, load_config


class Container:
    """Builds every collaborator once; pass overrides to swap one out."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        session_factory: Callable[[], Session] | None = None,
        password_hasher: PasswordHasher | None = None,
        session_store: SessionStore | None = None,
    ) -> None:
        self.config = config or load_config()
        self._session_factory = session_factory
        self._password_hasher = password_hasher
        self._session_store = session_store

    @cached_property
    def identifier_field(self) -> IdentifierField:
        return IdentifierField(self.config.auth.identifier_field)

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> Callable[[], Session]:
        return self._session_factory or build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or Argon2PasswordHasher(self.config.hashing)

    @cached_property
    def random_source(self) -> SecretsRandomSource:
        return SecretsRandomSource()

    @cached_property
    def account_store(self) -> SqlAlchemyAccountStore:
        return SqlAlchemyAccountStore(self.session_factory)

    @cached_property
    def session_store(self) -> SessionStore:
        return self._session_store or FlaskSessionStore()

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(
            accounts=self.account_store,
            password_hasher=self.password_hasher,
            random_source=self.random_source,
            salt_length=self.config.auth.salt_length,
        )

    @cached_property
    def session_authenticator(self) -> SessionAuthenticator:
        endpoint = self.config.auth.accounts_endpoint
        return SessionAuthenticator(
            credentials=self.credential_store,
            sessions=self.session_store,
            secret_key=self.config.secret_key,
            on_unauthenticated=lambda: redirect_to_entry(endpoint),
        )

    @cached_property
    def accounts_controller(self) -> AccountsController:
        return AccountsController(
            authenticator=self.session_authenticator,
            identifier_field=self.identifier_field,
            entry_endpoint=self.config.auth.accounts_endpoint,
        )
