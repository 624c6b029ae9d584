# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.credential_store import CredentialStore
from .services.session_authenticator import SessionAuthenticator

__all__ = [
    "CredentialStore",
    "SessionAuthenticator",
]
