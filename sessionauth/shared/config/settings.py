# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///accounts.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")


class AuthConfig(BaseSettings):
    identifier_field: str = Field("email", alias="AUTH_IDENTIFIER_FIELD")
    # Historical salt length; widen for new deployments.
    salt_length: int = Field(7, ge=1, le=64, alias="AUTH_SALT_LENGTH")
    accounts_endpoint: str = Field("accounts", alias="AUTH_ACCOUNTS_ENDPOINT")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("identifier_field", mode="before")
    @classmethod
    def _normalise_field(cls, value: str) -> str:
        value = str(value).strip().lower()
        if value not in ("email", "username"):
            raise ValueError("identifier field must be 'email' or 'username'")
        return value


class HashingConfig(BaseSettings):
    time_cost: int = Field(3, ge=1, alias="HASH_TIME_COST")
    memory_cost: int = Field(65536, ge=8, alias="HASH_MEMORY_COST")
    parallelism: int = Field(4, ge=1, alias="HASH_PARALLELISM")
    hash_len: int = Field(32, ge=16, alias="HASH_LENGTH")
    salt: str = Field("sessionauth.password.v1", min_length=8, alias="HASH_SALT")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    session_lifetime: int = Field(60 * 60 * 24 * 7, ge=60, alias="SESSION_LIFETIME")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_secure(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _hashing_config_factory() -> HashingConfig:
    return HashingConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    metrics_enabled: bool = Field(False, alias="METRICS_ENABLED")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    hashing: HashingConfig = Field(default_factory=_hashing_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", "metrics_enabled", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY signs the session cookie and must be a strong random value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if not self.security.cookie_secure:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: Cookie Secure flag is DISABLED (use HTTPS!)\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "HashingConfig", "SecurityConfig", "load_config"]
