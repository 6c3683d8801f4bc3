from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.exceptions import StoreUnavailable, UniquenessViolation
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error as exc:
        logger.warning("Rollback failed: %s", exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` for one unit of work and commit on success.

    Driver errors are translated: a duplicate key becomes
    ``UniquenessViolation``, anything else ``StoreUnavailable``.
    """
    try:
        conn = conn_factory.connect()
    except mysql_errors.Error as exc:
        logger.error("Database connection failed: %s", exc)
        raise StoreUnavailable() from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.IntegrityError as exc:
        _rollback_quietly(conn)
        if exc.errno == MYSQL_DUPLICATE_KEY_ERRNO:
            raise UniquenessViolation(exc.msg) from exc
        logger.error("Integrity error: %s", exc)
        raise StoreUnavailable() from exc
    except mysql_errors.Error as exc:
        _rollback_quietly(conn)
        logger.error("Database operation failed: %s", exc)
        raise StoreUnavailable() from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
