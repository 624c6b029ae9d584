# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from sessionauth.domain.accounts.repositories import RandomSource


class SecretsRandomSource(RandomSource):
    def choice(self, alphabet: str) -> str:
        return secrets.choice(alphabet)
