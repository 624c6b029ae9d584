# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from sessionauth.shared.config.settings import DatabaseConfig
from sessionauth.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    if config.url.startswith("sqlite"):
        return create_engine(
            config.url,
            echo=False,
            connect_args={
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            },
        )
    return create_engine(
        config.url,
        echo=False,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    from sessionauth.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ensured on {engine.url.render_as_string(hide_password=True)}")
