# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

from sessionauth.domain.accounts.entities import Account, IdentifierField
from sessionauth.domain.accounts.repositories import AccountStore
from sessionauth.infrastructure.db.models import AccountRow
from sessionauth.infrastructure.unit_of_work import unit_of_work_scope
from sessionauth.shared.errors.base import DuplicateKeyError, StoreUnavailableError
from sessionauth.shared.logging import logger

# Failures to reach the database at all, as opposed to failed statements.
_UNAVAILABLE = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)

_COLUMNS = {
    IdentifierField.EMAIL: AccountRow.email,
    IdentifierField.USERNAME: AccountRow.username,
}


def _to_domain(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        salt=row.salt,
        password_hash=row.password_hash,
        email=row.email,
        username=row.username,
        created_at=row.created_at,
    )


class SqlAlchemyAccountStore(AccountStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @contextmanager
    def _scope(self) -> Iterator[Session]:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                yield session
        except _UNAVAILABLE as exc:
            cause = getattr(exc, "orig", None) or exc
            logger.error(f"accounts.store: database unavailable ({type(cause).__name__})")
            raise StoreUnavailableError("accounts", reason=str(cause)) from exc

    def find_by_id(self, account_id: int) -> Account | None:
        with self._scope() as session:
            row = session.get(AccountRow, account_id)
            return _to_domain(row) if row else None

    def find_by_field(self, field: IdentifierField, value: str) -> Account | None:
        with self._scope() as session:
            row = session.scalars(
                select(AccountRow).where(_COLUMNS[field] == value).limit(1)
            ).first()
            return _to_domain(row) if row else None

    def insert(self, account: Account) -> int:
        row = AccountRow(
            email=account.email,
            username=account.username,
            salt=account.salt,
            password_hash=account.password_hash,
        )
        if account.created_at is not None:
            row.created_at = account.created_at
        try:
            with self._scope() as session:
                session.add(row)
                session.flush()
                account_id = row.id
        except IntegrityError as exc:
            field = "email" if account.email is not None else "username"
            logger.info(f"accounts.store: unique constraint hit on {field}")
            raise DuplicateKeyError(field) from exc
        logger.debug(f"accounts.store: inserted account_id={account_id}")
        return account_id
