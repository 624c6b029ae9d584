# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from sessionauth.application.services.session_authenticator import SessionAuthenticator
from sessionauth.domain.accounts.entities import IdentifierField
from sessionauth.domain.accounts.exceptions import InvalidCredentialsError
from sessionauth.infrastructure.observability import record_auth_event
from sessionauth.interfaces.http.auth import auth_required
from sessionauth.interfaces.http.dto.accounts import (
    AccountDTO,
    AuthStatusDTO,
    AuthSuccessDTO,
    CreateAccountRequestDTO,
    LoginRequestDTO,
)
from sessionauth.shared.errors import ValidationFailedError
from sessionauth.shared.errors.validation import raise_validation_error
from sessionauth.shared.logging import logger


def _payload() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


class AccountsController:
    def __init__(
        self,
        *,
        authenticator: SessionAuthenticator,
        identifier_field: IdentifierField,
        entry_endpoint: str = "accounts",
    ) -> None:
        self._authenticator = authenticator
        self._field = identifier_field
        self._entry_endpoint = entry_endpoint

    def index(self) -> tuple[Response, int]:
        payload = AuthStatusDTO(
            authenticated=self._authenticator.is_authenticated(),
            identifier_field=self._field,
        )
        return jsonify(payload.model_dump(mode="json")), 200

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreateAccountRequestDTO.model_validate(_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            account = self._authenticator.create_account(
                self._field, dto.identifier(self._field), dto.password, dto.passwordconf
            )
        except ValidationFailedError:
            record_auth_event("create", success=False)
            raise
        record_auth_event("create", success=True)
        logger.info(f"accounts.create: ok account_id={account.id}")
        body = AuthSuccessDTO(account=AccountDTO.from_account(account))
        return jsonify(body.model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            account = self._authenticator.login(
                self._field, dto.identifier(self._field) or "", dto.password
            )
        except InvalidCredentialsError:
            record_auth_event("login", success=False)
            raise
        record_auth_event("login", success=True)
        body = AuthSuccessDTO(account=AccountDTO.from_account(account))
        return jsonify(body.model_dump()), 200

    def me(self) -> tuple[Response, int]:
        account = self._authenticator.current_account()
        if account is None:
            # Session was invalidated between the guard and this read.
            return jsonify({"error": "unauthorized"}), 401
        return jsonify(AccountDTO.from_account(account).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("accounts", __name__, url_prefix="/" + self._entry_endpoint.strip("/"))
        bp.add_url_rule("", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/create", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=auth_required(self._authenticator, self._entry_endpoint)(self.me),
            methods=["GET"],
        )
        return bp
