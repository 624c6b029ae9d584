# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import session

from sessionauth.domain.accounts.repositories import SessionStore


class FlaskSessionStore(SessionStore):
    """Session store over ``flask.session`` for the request being served.

    Values end up in Flask's signed session cookie, so one instance can be
    shared by every request.
    """

    def get(self, key: str) -> Any | None:
        return session.get(key)

    def set(self, key: str, value: Any) -> None:
        # Expiry comes from PERMANENT_SESSION_LIFETIME.
        session.permanent = True
        session[key] = value
