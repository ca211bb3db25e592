"""Scrypt helpers for storing account passwords."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt


SALT_SIZE = 16
KEY_SIZE = 32
HASH_SCHEME = "scrypt"


@dataclass
class PasswordHasher:
    """Derives and checks salted scrypt password hashes."""

    n: int = 2**14
    r: int = 8
    p: int = 1

    def _kdf(self, salt: bytes) -> Scrypt:
        return Scrypt(salt=salt, length=KEY_SIZE, n=self.n, r=self.r, p=self.p)

    def hash_password(self, password: str) -> str:
        """Return a `scrypt$salt$key` string for the given password."""
        salt = os.urandom(SALT_SIZE)
        key = self._kdf(salt).derive(password.encode("utf-8"))
        return "$".join(
            [
                HASH_SCHEME,
                base64.urlsafe_b64encode(salt).decode("utf-8"),
                base64.urlsafe_b64encode(key).decode("utf-8"),
            ]
        )

    def verify_password(self, password: str, encoded: str) -> bool:
        """Check a password against a stored hash."""
        try:
            scheme, salt_b64, key_b64 = encoded.split("$")
        except ValueError:
            return False
        if scheme != HASH_SCHEME:
            return False

        salt = base64.urlsafe_b64decode(salt_b64.encode("utf-8"))
        expected = base64.urlsafe_b64decode(key_b64.encode("utf-8"))
        try:
            self._kdf(salt).verify(password.encode("utf-8"), expected)
        except InvalidKey:
            return False
        return True


def mask_email(email: str) -> str:
    """Mask the local part of an email like demo@x.com => d***@x.com."""
    local, sep, domain = email.partition("@")
    if not sep:
        return "*" * len(email)
    if not local:
        return f"@{domain}"
    return f"{local[0]}***@{domain}"
