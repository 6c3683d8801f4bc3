from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional

from ..common.datetime_utils import Clock, now_local
from ..core.exceptions import DuplicateUsername, UniquenessViolation
from .connection import DBConfig, DatabaseConnection

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

DEMO_USERS = (
    ("student1", "pass123", "student"),
    ("student2", "pass123", "student"),
    ("admin", "admin123", "admin"),
)
DEMO_CODE = "KABARAK2025"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for the schema file (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: Mapping[str, Any]) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, Any], *, schema_path: Optional[Path] = None) -> None:
    ensure_database_exists(db_config)
    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")

    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s", schema_path or SCHEMA_PATH)


def list_tables(db_config: Mapping[str, Any]) -> List[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [str(row[0]) for row in cur.fetchall()]
    finally:
        conn.close()


def seed_demo_data(container: "Container", *, clock: Clock = now_local) -> None:
    """Create demo accounts and a couple of attendance records.

    Safe to run repeatedly: existing users and records are left alone.
    """
    for username, password, role in DEMO_USERS:
        try:
            container.auth_service.register(username, password, role)
        except DuplicateUsername:
            logger.info("Demo user %s already exists", username)

    now = clock()
    scans = (("student1", now), ("student2", now - timedelta(days=1)))
    for username, scanned_at in scans:
        user = container.users_repo.get_by_username(username)
        if user is None:
            continue
        try:
            container.attendance_repo.create(student_id=user.user_id, code_data=DEMO_CODE, scanned_at=scanned_at)
        except UniquenessViolation:
            logger.info("Demo attendance for %s on %s already exists", username, scanned_at.date())
