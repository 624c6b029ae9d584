# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Form rules for account creation.

Each rule set yields at most one message per field, in the order the fields
are checked: identifier, password, password confirmation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .entities import IdentifierField

EMAIL_PATTERN = re.compile(
    r"^([a-z0-9+_\-]+)(\.[a-z0-9+_\-]+)*@([a-z0-9\-]+\.)+[a-z]{2,6}$",
    re.IGNORECASE,
)

REQUIRED = "The {label} field is required."
MIN_LENGTH = "The {label} field must be at least {length} characters in length."
MAX_LENGTH = "The {label} field can not exceed {length} characters in length."
VALID_EMAIL = "The {label} field must contain a valid email address."
MATCHES = "The {label} field does not match the {other} field."

PASSWORD_LABEL = "password"
CONFIRMATION_LABEL = "password confirmation"


@dataclass(slots=True, frozen=True)
class IdentifierRules:
    label: str
    min_length: int | None = None
    max_length: int | None = None
    email: bool = False

    def check(self, value: str) -> str | None:
        if not value:
            return REQUIRED.format(label=self.label)
        if self.min_length is not None and len(value) < self.min_length:
            return MIN_LENGTH.format(label=self.label, length=self.min_length)
        if self.max_length is not None and len(value) > self.max_length:
            return MAX_LENGTH.format(label=self.label, length=self.max_length)
        if self.email and not EMAIL_PATTERN.match(value):
            return VALID_EMAIL.format(label=self.label)
        return None


IDENTIFIER_RULES: dict[IdentifierField, IdentifierRules] = {
    IdentifierField.USERNAME: IdentifierRules("username", min_length=4, max_length=20),
    IdentifierField.EMAIL: IdentifierRules("email", max_length=120, email=True),
}


def validate_account_form(
    field: IdentifierField,
    identifier: str | None,
    password: str | None,
    confirmation: str | None,
) -> tuple[str, list[str]]:
    """Return the trimmed identifier and every rule violation found."""
    value = (identifier or "").strip()
    password = password or ""
    confirmation = confirmation or ""
    errors: list[str] = []

    identifier_error = IDENTIFIER_RULES[field].check(value)
    if identifier_error:
        errors.append(identifier_error)

    if not password:
        errors.append(REQUIRED.format(label=PASSWORD_LABEL))
    elif password != confirmation:
        errors.append(MATCHES.format(label=PASSWORD_LABEL, other=CONFIRMATION_LABEL))

    if not confirmation:
        errors.append(REQUIRED.format(label=CONFIRMATION_LABEL))

    return value, errors
