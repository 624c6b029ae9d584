# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac
import string

from sessionauth.domain.accounts.entities import Account, IdentifierField
from sessionauth.domain.accounts.exceptions import AccountExistsError
from sessionauth.domain.accounts.repositories import AccountStore, PasswordHasher, RandomSource
from sessionauth.shared.errors.base import DuplicateKeyError
from sessionauth.shared.logging import logger

SALT_ALPHABET = string.ascii_letters + string.digits
DEFAULT_SALT_LENGTH = 7


class CredentialStore:
    """Salted password credentials on top of an :class:`AccountStore`."""

    def __init__(
        self,
        *,
        accounts: AccountStore,
        password_hasher: PasswordHasher,
        random_source: RandomSource,
        salt_length: int = DEFAULT_SALT_LENGTH,
    ) -> None:
        if salt_length < 1:
            raise ValueError("salt_length must be positive")
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._random = random_source
        self._salt_length = salt_length

    def generate_salt(self) -> str:
        return "".join(self._random.choice(SALT_ALPHABET) for _ in range(self._salt_length))

    def hash(self, material: str) -> str:
        return self._password_hasher.hash(material)

    def create_account(self, identifier: str, field: IdentifierField, password: str) -> int:
        if self._accounts.find_by_field(field, identifier) is not None:
            logger.info(f"credentials.create: rejected, {field.value} already taken")
            raise AccountExistsError(field.value)

        salt = self.generate_salt()
        account = Account.new(
            field,
            identifier,
            salt=salt,
            password_hash=self.hash(salt + password),
        )
        try:
            account_id = self._accounts.insert(account)
        except DuplicateKeyError as exc:
            # Lost the race against a concurrent insert of the same identifier.
            logger.info(f"credentials.create: duplicate key on insert for {field.value}")
            raise AccountExistsError(field.value) from exc

        logger.info(f"credentials.create: ok account_id={account_id}")
        return account_id

    def find_by_identifier(self, field: IdentifierField, value: str) -> Account | None:
        return self._accounts.find_by_field(field, value)

    def find_by_id(self, account_id: int) -> Account | None:
        return self._accounts.find_by_id(account_id)

    def verify_password(self, account: Account, password: str) -> bool:
        candidate = self.hash(account.salt + password)
        return hmac.compare_digest(candidate.encode("utf-8"), account.password_hash.encode("utf-8"))
