"""Account domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """A registered user. The password is only kept as a salted hash."""

    email: str
    password_hash: str
    name: str
