# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, Protocol

from .entities import Account, IdentifierField


class AccountStore(Protocol):
    def find_by_id(self, account_id: int) -> Account | None: ...
    def find_by_field(self, field: IdentifierField, value: str) -> Account | None: ...
    def insert(self, account: Account) -> int: ...


class SessionStore(Protocol):
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...


class RandomSource(Protocol):
    def choice(self, alphabet: str) -> str: ...


class PasswordHasher(Protocol):
    def hash(self, material: str) -> str: ...
