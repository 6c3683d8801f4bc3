from __future__ import annotations

import logging
from typing import Optional, Union

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import MAX_USERNAME_LENGTH
from ..core.enums import Role
from ..core.exceptions import DuplicateUsername, InvalidCredentials, UniquenessViolation, ValidationError
from ..security.passwords import PasswordHasher
from ..security.tokens import TokenService
from .model import LoginResult, UserSummary
from .repository import UserRepository

logger = logging.getLogger(__name__)


def parse_role(value: Union[Role, str, None]) -> Role:
    if value is None or (isinstance(value, str) and not value.strip()):
        return Role.STUDENT
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        raise ValidationError("Role is invalid")
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise ValidationError("Role must be 'student' or 'admin'")


class AuthService:
    """Use cases: register an account, log in."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    def register(self, username: str, password: str, role: Union[Role, str, None] = None) -> UserSummary:
        username = require_non_empty(username, "Username")
        require_max_length(username, "Username", MAX_USERNAME_LENGTH)
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required")
        role = parse_role(role)

        if self._users.get_by_username(username):
            raise DuplicateUsername()

        password_hash = self._hasher.hash(password)
        try:
            user = self._users.create_user(username=username, password_hash=password_hash, role=role)
        except UniquenessViolation:
            # Lost a race with a concurrent registration of the same name.
            raise DuplicateUsername()

        logger.info("Registered user %s (id=%s, role=%s)", user.username, user.user_id, user.role.value)
        return UserSummary.of(user)

    def login(self, username: str, password: str) -> LoginResult:
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidCredentials()

        user = self._users.get_by_username(username.strip()) if username.strip() else None
        if user is None:
            self._hasher.verify_dummy(password)
            logger.warning("Failed login for unknown username: %s", username)
            raise InvalidCredentials()

        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login for user: %s", user.username)
            raise InvalidCredentials()

        token = self._tokens.issue(user.user_id, user.role)
        logger.info("Successful login for user: %s", user.username)
        return LoginResult(token=token, user_id=user.user_id, role=user.role)

    def get_summary(self, user_id: int) -> Optional[UserSummary]:
        user = self._users.get_by_id(user_id)
        return UserSummary.of(user) if user else None
