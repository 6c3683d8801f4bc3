from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_PASSWORD_SALT_LENGTH


class PasswordHasher:
    """Salted one-way password hashing.

    Every call to ``hash`` draws a fresh salt, so hashing the same password
    twice gives different strings that both verify.
    """

    def __init__(
        self,
        *,
        method: str = DEFAULT_PASSWORD_HASH_METHOD,
        salt_length: int = DEFAULT_PASSWORD_SALT_LENGTH,
    ):
        self._method = method
        self._salt_length = int(salt_length)
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self._method, salt_length=self._salt_length)

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return check_password_hash(password_hash, plaintext)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def verify_dummy(self, plaintext: str) -> bool:
        """Spend the same work as a real check and always fail.

        Used when the user does not exist so login timing stays the same.
        """
        self.verify(plaintext, self._dummy_hash)
        return False
