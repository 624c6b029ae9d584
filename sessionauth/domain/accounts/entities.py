# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum


class IdentifierField(StrEnum):
    EMAIL = "email"
    USERNAME = "username"


class AuthState(StrEnum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


# Session store keys holding the login state of the current caller.
SESSION_USER_ID = "user_id"
SESSION_USER_TOKEN = "user_token"


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    salt: str
    password_hash: str
    email: str | None = None
    username: str | None = None
    created_at: datetime | None = None

    def identifier(self, field: IdentifierField) -> str | None:
        if field is IdentifierField.EMAIL:
            return self.email
        return self.username

    @classmethod
    def new(
        cls, field: IdentifierField, value: str, *, salt: str, password_hash: str
    ) -> Account:
        """Build an unsaved account; the store assigns ``id`` on insert."""
        values = {field.value: value}
        return cls(
            id=0,
            salt=salt,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
            **values,
        )

    def with_id(self, account_id: int) -> Account:
        return replace(self, id=account_id)
