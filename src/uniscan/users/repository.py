from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Credential store contract.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    ``create_user`` raises ``UniquenessViolation`` when the username is taken.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, username: str, password_hash: str, role: Role) -> User:
        raise NotImplementedError
