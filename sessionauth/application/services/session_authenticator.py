# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable
from typing import Any, TypeVar

from sessionauth.application.services.credential_store import CredentialStore
from sessionauth.domain.accounts.entities import (
    SESSION_USER_ID,
    SESSION_USER_TOKEN,
    Account,
    AuthState,
    IdentifierField,
)
from sessionauth.domain.accounts.exceptions import AccountExistsError, InvalidCredentialsError
from sessionauth.domain.accounts.repositories import SessionStore
from sessionauth.domain.accounts.validation import validate_account_form
from sessionauth.shared.errors.base import ValidationFailedError
from sessionauth.shared.logging import logger

T = TypeVar("T")


def _no_effect() -> None:
    return None


class SessionAuthenticator:
    """Login, account creation and per-request login state.

    Nothing is cached between calls: every check re-reads the session store
    and the account record, so a changed ``password_hash`` revokes sessions.
    """

    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionStore,
        secret_key: str,
        on_unauthenticated: Callable[[], Any] = _no_effect,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions
        self._secret_key = secret_key.encode("utf-8")
        self._on_unauthenticated = on_unauthenticated

    def session_token(self, account: Account) -> str:
        material = f"{account.id}{account.password_hash}".encode("utf-8")
        return hmac.new(self._secret_key, material, hashlib.sha256).hexdigest()

    def login(self, field: IdentifierField, identifier: str, password: str) -> Account:
        account = self._credentials.find_by_identifier(field, identifier)
        if account is None:
            # Unknown identifiers pay the same hashing cost as a wrong password.
            self._credentials.hash(self._credentials.generate_salt() + password)
        if (
            account is None
            or account.identifier(field) != identifier
            or not self._credentials.verify_password(account, password)
        ):
            logger.info(f"auth.login: rejected field={field.value}")
            raise InvalidCredentialsError()

        self._establish_session(account)
        logger.info(f"auth.login: ok account_id={account.id}")
        return account

    def create_account(
        self,
        field: IdentifierField,
        identifier: str | None,
        password: str | None,
        confirmation: str | None,
    ) -> Account:
        value, errors = validate_account_form(field, identifier, password, confirmation)
        if errors:
            logger.info(f"auth.create_account: invalid form, {len(errors)} error(s)")
            raise ValidationFailedError(errors)

        try:
            account_id = self._credentials.create_account(value, field, password or "")
        except AccountExistsError as exc:
            raise ValidationFailedError(exc.messages) from exc

        account = self._credentials.find_by_id(account_id)
        if account is None:
            raise RuntimeError(f"account {account_id} missing right after insert")
        logger.info(f"auth.create_account: ok account_id={account.id}")
        return account

    def current_account(self) -> Account | None:
        user_id = self._sessions.get(SESSION_USER_ID)
        user_token = self._sessions.get(SESSION_USER_TOKEN)
        if not user_id or not user_token:
            return None

        try:
            account_id = int(user_id)
        except (TypeError, ValueError):
            logger.warning("auth.check: malformed user_id in session")
            return None

        account = self._credentials.find_by_id(account_id)
        if account is None:
            logger.info(f"auth.check: account {account_id} no longer exists")
            return None

        expected = self.session_token(account)
        if not hmac.compare_digest(expected.encode("utf-8"), str(user_token).encode("utf-8")):
            logger.info(f"auth.check: stale or tampered token for account_id={account_id}")
            return None
        return account

    def is_authenticated(self) -> bool:
        return self.current_account() is not None

    def state(self) -> AuthState:
        if self.is_authenticated():
            return AuthState.AUTHENTICATED
        return AuthState.ANONYMOUS

    def require_authentication(self, on_failure: Callable[[], T] | None = None) -> T | None:
        """Run ``on_failure`` (or the configured effect) for anonymous callers.

        Returns the effect's result, or ``None`` when the caller is logged in.
        """
        if self.is_authenticated():
            return None
        effect = on_failure or self._on_unauthenticated
        return effect()

    def _establish_session(self, account: Account) -> None:
        self._sessions.set(SESSION_USER_ID, account.id)
        self._sessions.set(SESSION_USER_TOKEN, self.session_token(account))
