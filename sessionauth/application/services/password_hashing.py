"""Password hashing strategies."""

from __future__ import annotations

from argon2.low_level import Type, hash_secret_raw

from sessionauth.domain.accounts.repositories import PasswordHasher
from sessionauth.shared.config import HashingConfig


class Argon2PasswordHasher(PasswordHasher):
    """Deterministic Argon2id digest of ``salt + password`` material.

    The per-account salt travels inside the material, the configured salt is
    shared by the whole deployment. Equal material always gives an equal hex
    digest, which is what stored-hash comparison and session tokens rely on.
    """

    def __init__(self, config: HashingConfig) -> None:
        self._salt = config.salt.encode("utf-8")
        self._time_cost = config.time_cost
        self._memory_cost = config.memory_cost
        self._parallelism = config.parallelism
        self._hash_len = config.hash_len

    def hash(self, material: str) -> str:
        digest = hash_secret_raw(
            secret=material.encode("utf-8"),
            salt=self._salt,
            time_cost=self._time_cost,
            memory_cost=self._memory_cost,
            parallelism=self._parallelism,
            hash_len=self._hash_len,
            type=Type.ID,
        )
        return digest.hex()
