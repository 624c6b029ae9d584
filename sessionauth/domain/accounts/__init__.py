# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    SESSION_USER_ID,
    SESSION_USER_TOKEN,
    Account,
    AuthState,
    IdentifierField,
)
from .exceptions import AccountExistsError, InvalidCredentialsError
from .repositories import AccountStore, PasswordHasher, RandomSource, SessionStore

__all__ = [
    "SESSION_USER_ID",
    "SESSION_USER_TOKEN",
    "Account",
    "AccountExistsError",
    "AccountStore",
    "AuthState",
    "IdentifierField",
    "InvalidCredentialsError",
    "PasswordHasher",
    "RandomSource",
    "SessionStore",
]
