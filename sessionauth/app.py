# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import timedelta

from flask import Flask, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from sessionauth.infrastructure.container import Container
from sessionauth.infrastructure.db import init_db
from sessionauth.shared.errors import register_error_handler
from sessionauth.shared.logging import logger, setup_logging
from sessionauth.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None, *, init_database: bool = True) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(debug_mode=config.debug_logging)
    if init_database:
        init_db(container.engine)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
        PERMANENT_SESSION_LIFETIME=timedelta(seconds=config.security.session_lifetime),
    )
    app.extensions["sessionauth"] = container

    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.accounts_controller.as_blueprint())

    if config.metrics_enabled:

        @app.get("/metrics")
        def _metrics():
            return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(
        f"app: ready identifier_field={container.identifier_field.value} env={config.app_env}"
    )
    return app
