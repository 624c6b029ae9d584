# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import Response, redirect, request

from sessionauth.application.services.session_authenticator import SessionAuthenticator
from sessionauth.shared.logging import logger


def redirect_to_entry(endpoint: str) -> Response:
    """Redirect to the accounts entry point, e.g. ``accounts`` -> ``/accounts``."""
    return redirect("/" + endpoint.strip("/"))


def auth_required(authenticator: SessionAuthenticator, endpoint: str):
    def decorator(f):
        @wraps(f)
        def inner(*a, **kw):
            denied = authenticator.require_authentication(lambda: redirect_to_entry(endpoint))
            if denied is not None:
                logger.warning(
                    f"Anonymous access to {request.method} {request.path}, redirecting"
                )
                return denied
            return f(*a, **kw)

        return inner

    return decorator
