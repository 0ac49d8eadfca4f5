# app/core/passwords.py

import re
from dataclasses import dataclass


MIN_LENGTH = 5

_UPPERCASE = re.compile(r"[A-Z]")
_SPECIAL = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")


@dataclass(frozen=True)
class PasswordCheck:
    has_length: bool
    has_uppercase: bool
    has_special: bool

    @property
    def valid(self) -> bool:
        return self.has_length and self.has_uppercase and self.has_special

    def problems(self) -> list[str]:
        messages = []
        if not self.has_length:
            messages.append(f"At least {MIN_LENGTH} characters")
        if not self.has_uppercase:
            messages.append("One UPPERCASE letter")
        if not self.has_special:
            messages.append("One special character (!@#$%^&*...)")
        return messages


def check_password(password: str) -> PasswordCheck:
    """
    Registration rule applied before any request is sent.
    """
    return PasswordCheck(
        has_length=len(password) >= MIN_LENGTH,
        has_uppercase=bool(_UPPERCASE.search(password)),
        has_special=bool(_SPECIAL.search(password)),
    )
