from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    username: str
    password_hash: str
    role: Role = Role.STUDENT


@dataclass(frozen=True)
class UserSummary:
    """Public view of a user; never carries the password hash."""

    user_id: int
    username: str
    role: Role

    @classmethod
    def of(cls, user: User) -> "UserSummary":
        return cls(user_id=user.user_id, username=user.username, role=user.role)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user_id: int
    role: Role
