from __future__ import annotations

import pytest

from sessionauth.application.services.credential_store import CredentialStore
from sessionauth.application.services.session_authenticator import SessionAuthenticator
from sessionauth.domain.accounts.entities import (
    SESSION_USER_ID,
    SESSION_USER_TOKEN,
    AuthState,
    IdentifierField,
)
from sessionauth.domain.accounts.exceptions import INVALID_LOGIN_MESSAGE, InvalidCredentialsError
from sessionauth.shared.errors.base import StoreUnavailableError, ValidationFailedError

from fakes import DeterministicHasher, DictSessionStore, InMemoryAccountStore, SeededRandom

EMAIL = IdentifierField.EMAIL
USERNAME = IdentifierField.USERNAME


def test_create_then_login_returns_same_account(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    created = authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    assert sessions.data == {}

    account = authenticator.login(EMAIL, "a@x.com", "secret1")

    assert account.id == created.id
    assert sessions.data[SESSION_USER_ID] == created.id
    assert sessions.data[SESSION_USER_TOKEN] == authenticator.session_token(account)
    assert authenticator.is_authenticated() is True
    assert authenticator.state() is AuthState.AUTHENTICATED


def test_create_account_does_not_log_in(authenticator: SessionAuthenticator) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    assert authenticator.is_authenticated() is False
    assert authenticator.state() is AuthState.ANONYMOUS


def test_create_account_trims_identifier(authenticator: SessionAuthenticator) -> None:
    account = authenticator.create_account(USERNAME, "  abcd  ", "pw", "pw")

    assert account.username == "abcd"


def test_login_failures_are_indistinguishable(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        authenticator.login(EMAIL, "a@x.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_account:
        authenticator.login(EMAIL, "nope@x.com", "secret1")

    assert wrong_password.value.to_dict() == unknown_account.value.to_dict()
    assert wrong_password.value.messages == [INVALID_LOGIN_MESSAGE]
    assert sessions.data == {}


def test_unknown_identifier_still_hashes_the_password(
    accounts: InMemoryAccountStore, sessions: DictSessionStore
) -> None:
    class CountingHasher(DeterministicHasher):
        def __init__(self) -> None:
            self.calls: list[str] = []

        def hash(self, material: str) -> str:
            self.calls.append(material)
            return super().hash(material)

    hasher = CountingHasher()
    authenticator = SessionAuthenticator(
        credentials=CredentialStore(
            accounts=accounts, password_hasher=hasher, random_source=SeededRandom()
        ),
        sessions=sessions,
        secret_key="test-secret",
    )
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    hasher.calls.clear()

    with pytest.raises(InvalidCredentialsError):
        authenticator.login(EMAIL, "nope@x.com", "secret1")
    unknown_calls = len(hasher.calls)
    with pytest.raises(InvalidCredentialsError):
        authenticator.login(EMAIL, "a@x.com", "wrong")

    assert unknown_calls == 1
    assert len(hasher.calls) == 2
    assert hasher.calls[0].endswith("secret1")


def test_login_requires_exact_identifier_match(
    credentials: CredentialStore, sessions: DictSessionStore
) -> None:
    class CaseInsensitiveStore(InMemoryAccountStore):
        # Mimics a database collation that ignores case on lookups.
        def find_by_field(self, field, value):
            for account in self._accounts.values():
                stored = account.identifier(field)
                if stored is not None and stored.lower() == value.lower():
                    return account
            return None

    store = CaseInsensitiveStore()
    credentials = CredentialStore(
        accounts=store,
        password_hasher=credentials._password_hasher,
        random_source=credentials._random,
    )
    authenticator = SessionAuthenticator(
        credentials=credentials, sessions=sessions, secret_key="test-secret"
    )
    authenticator.create_account(USERNAME, "Alice", "secret1", "secret1")

    with pytest.raises(InvalidCredentialsError):
        authenticator.login(USERNAME, "alice", "secret1")
    assert authenticator.login(USERNAME, "Alice", "secret1").username == "Alice"


def test_login_by_other_field_is_rejected(authenticator: SessionAuthenticator) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    with pytest.raises(InvalidCredentialsError):
        authenticator.login(USERNAME, "a@x.com", "secret1")


def test_duplicate_identifier_becomes_validation_error(authenticator: SessionAuthenticator) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    with pytest.raises(ValidationFailedError) as excinfo:
        authenticator.create_account(EMAIL, "a@x.com", "other12", "other12")

    assert excinfo.value.messages == ["An account with that email already exists."]


def test_create_account_collects_every_field_error(authenticator: SessionAuthenticator) -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        authenticator.create_account(USERNAME, "ab", "secret1", "")

    assert excinfo.value.code == "validation_error"
    assert excinfo.value.messages == [
        "The username field must be at least 4 characters in length.",
        "The password field does not match the password confirmation field.",
        "The password confirmation field is required.",
    ]


def test_username_length_boundary(authenticator: SessionAuthenticator) -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        authenticator.create_account(USERNAME, "ab", "pw", "pw")
    assert "at least 4 characters" in excinfo.value.messages[0]

    account = authenticator.create_account(USERNAME, "abcd", "pw", "pw")
    assert account.username == "abcd"


def test_missing_session_keys_mean_anonymous(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    assert authenticator.is_authenticated() is False

    sessions.set(SESSION_USER_ID, 1)
    assert authenticator.is_authenticated() is False

    sessions.data = {SESSION_USER_TOKEN: "anything"}
    assert authenticator.is_authenticated() is False


def test_tampered_token_is_rejected(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    account = authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    authenticator.login(EMAIL, "a@x.com", "secret1")

    sessions.set(SESSION_USER_TOKEN, "0" * 64)

    assert authenticator.is_authenticated() is False
    assert authenticator.current_account() is None
    assert account.id == sessions.get(SESSION_USER_ID)


def test_token_from_another_account_is_rejected(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    other = authenticator.create_account(EMAIL, "b@x.com", "secret2", "secret2")
    authenticator.login(EMAIL, "a@x.com", "secret1")

    sessions.set(SESSION_USER_ID, other.id)

    assert authenticator.is_authenticated() is False


def test_session_for_deleted_account_is_rejected(
    authenticator: SessionAuthenticator,
    accounts: InMemoryAccountStore,
) -> None:
    account = authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    authenticator.login(EMAIL, "a@x.com", "secret1")

    del accounts._accounts[account.id]

    assert authenticator.is_authenticated() is False


def test_password_hash_change_revokes_session(
    authenticator: SessionAuthenticator,
    accounts: InMemoryAccountStore,
    sessions: DictSessionStore,
) -> None:
    account = authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    authenticator.login(EMAIL, "a@x.com", "secret1")
    assert authenticator.is_authenticated() is True

    accounts.change_password_hash(account.id, "hashed:somethingelse")

    assert authenticator.is_authenticated() is False


def test_cleared_session_is_anonymous(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    authenticator.login(EMAIL, "a@x.com", "secret1")

    sessions.data.clear()

    assert authenticator.is_authenticated() is False


def test_malformed_user_id_is_anonymous(
    authenticator: SessionAuthenticator, sessions: DictSessionStore
) -> None:
    sessions.set(SESSION_USER_ID, "not-a-number")
    sessions.set(SESSION_USER_TOKEN, "token")

    assert authenticator.is_authenticated() is False


def test_require_authentication_runs_effect_only_for_anonymous(
    authenticator: SessionAuthenticator,
) -> None:
    calls: list[str] = []

    assert authenticator.require_authentication(lambda: calls.append("redirect") or "redirected") == "redirected"
    assert calls == ["redirect"]

    authenticator.create_account(EMAIL, "a@x.com", "secret1", "secret1")
    authenticator.login(EMAIL, "a@x.com", "secret1")

    assert authenticator.require_authentication(lambda: calls.append("redirect")) is None
    assert calls == ["redirect"]


def test_require_authentication_uses_configured_effect(
    credentials: CredentialStore, sessions: DictSessionStore
) -> None:
    authenticator = SessionAuthenticator(
        credentials=credentials,
        sessions=sessions,
        secret_key="test-secret",
        on_unauthenticated=lambda: "/accounts",
    )

    assert authenticator.require_authentication() == "/accounts"


def test_session_token_depends_on_secret_key(
    credentials: CredentialStore, sessions: DictSessionStore
) -> None:
    first = SessionAuthenticator(credentials=credentials, sessions=sessions, secret_key="one")
    second = SessionAuthenticator(credentials=credentials, sessions=sessions, secret_key="two")
    account = first.create_account(EMAIL, "a@x.com", "secret1", "secret1")

    assert first.session_token(account) == first.session_token(account)
    assert first.session_token(account) != second.session_token(account)


def test_store_outage_propagates(sessions: DictSessionStore, credentials: CredentialStore) -> None:
    class DownStore(InMemoryAccountStore):
        def find_by_id(self, account_id):
            raise StoreUnavailableError("accounts")

    broken = CredentialStore(
        accounts=DownStore(),
        password_hasher=credentials._password_hasher,
        random_source=credentials._random,
    )
    authenticator = SessionAuthenticator(credentials=broken, sessions=sessions, secret_key="k")
    sessions.set(SESSION_USER_ID, 1)
    sessions.set(SESSION_USER_TOKEN, "token")

    with pytest.raises(StoreUnavailableError) as excinfo:
        authenticator.is_authenticated()
    assert excinfo.value.code == "store_unavailable"
