from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sessionauth.domain.accounts.entities import Account, IdentifierField


class _IdentifierPayload(BaseModel):
    email: str | None = Field(default=None, max_length=1024)
    username: str | None = Field(default=None, max_length=1024)

    model_config = ConfigDict(extra="ignore")

    def identifier(self, field: IdentifierField) -> str | None:
        return getattr(self, field.value)


class CreateAccountRequestDTO(_IdentifierPayload):
    # Rule checks (required, lengths, matching) happen in the authenticator
    # so every broken field is reported, not only the first.
    password: str | None = Field(default=None, max_length=1024)
    passwordconf: str | None = Field(default=None, max_length=1024)


class LoginRequestDTO(_IdentifierPayload):
    password: str = Field(min_length=1, max_length=1024)


class AccountDTO(BaseModel):
    id: int
    email: str | None = None
    username: str | None = None

    @classmethod
    def from_account(cls, account: Account) -> AccountDTO:
        return cls(id=account.id, email=account.email, username=account.username)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    account: AccountDTO


class AuthStatusDTO(BaseModel):
    authenticated: bool
    identifier_field: IdentifierField
