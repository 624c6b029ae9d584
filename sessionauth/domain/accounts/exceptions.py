# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from sessionauth.shared.errors.base import DomainError

INVALID_LOGIN_MESSAGE = "The login credentials you provided are invalid."
ACCOUNT_EXISTS_MESSAGE = "An account with that {field} already exists."


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__(context={"messages": [INVALID_LOGIN_MESSAGE]})


class AccountExistsError(DomainError):
    code = "account_exists"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str) -> None:
        super().__init__(
            context={
                "field": field,
                "messages": [ACCOUNT_EXISTS_MESSAGE.format(field=field)],
            }
        )
