from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .core.constants import (
    DEFAULT_PASSWORD_HASH_METHOD,
    DEFAULT_PASSWORD_SALT_LENGTH,
    DEFAULT_TOKEN_TTL_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .security.gate import AuthGate
from .security.passwords import PasswordHasher
from .security.tokens import TokenService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    hasher: PasswordHasher
    tokens: TokenService
    auth_gate: AuthGate

    auth_service: AuthService
    attendance_service: AttendanceService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    signing_key: str,
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    password_salt_length: int = DEFAULT_PASSWORD_SALT_LENGTH,
    clock: Clock = now_local,
) -> Container:
    """Assemble services around the given repositories."""
    hasher = PasswordHasher(method=password_hash_method, salt_length=password_salt_length)
    tokens = TokenService(signing_key, ttl_seconds=token_ttl_seconds, clock=clock)

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        hasher=hasher,
        tokens=tokens,
        auth_gate=AuthGate(tokens),
        auth_service=AuthService(users_repo, hasher, tokens),
        attendance_service=AttendanceService(attendance_repo, clock=clock),
    )


def build_container(*, db_config: Mapping[str, Any], settings: Any) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        signing_key=str(getattr(settings, "JWT_SECRET")),
        token_ttl_seconds=int(getattr(settings, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)),
        password_hash_method=str(getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD)),
        password_salt_length=int(getattr(settings, "PASSWORD_SALT_LENGTH", DEFAULT_PASSWORD_SALT_LENGTH)),
    )
