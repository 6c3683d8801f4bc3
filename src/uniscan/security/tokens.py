from __future__ import annotations

from dataclasses import dataclass

from jose import JWTError, jwt

from ..common.datetime_utils import Clock, now_local
from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS, TOKEN_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import TokenExpired, TokenInvalid


@dataclass(frozen=True)
class Identity:
    """Who the bearer of a verified token is."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class TokenService:
    """Issues and verifies signed, time-limited identity tokens (JWT)."""

    def __init__(
        self,
        secret_key: str,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Clock = now_local,
        algorithm: str = TOKEN_ALGORITHM,
    ):
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        if int(ttl_seconds) <= 0:
            raise ValueError("Token lifetime must be positive")
        self._secret_key = secret_key
        self._ttl_seconds = int(ttl_seconds)
        self._clock = clock
        self._algorithm = algorithm

    def issue(self, user_id: int, role: Role) -> str:
        issued_at = self._clock().timestamp()
        # exp keeps the sub-second part so the lifetime is never shortened.
        claims = {
            "sub": str(user_id),
            "role": Role(role).value,
            "iat": int(issued_at),
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        if not isinstance(token, str) or not token:
            raise TokenInvalid()

        # Expiry is checked below against the injected clock.
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise TokenInvalid() from exc

        try:
            expires_at = float(claims["exp"])
            identity = Identity(user_id=int(claims["sub"]), role=Role(claims["role"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalid() from exc

        if self._clock().timestamp() >= expires_at:
            raise TokenExpired()
        return identity
