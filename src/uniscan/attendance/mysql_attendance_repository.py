from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        student_id=int(row["student_id"]),
        code_data=row["code_data"],
        scanned_at=row["scanned_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_student_and_code(
        self,
        *,
        student_id: int,
        code_data: str,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, code_data, scanned_at
                FROM attendance_records
                WHERE student_id=%s AND code_data=%s AND scanned_at >= %s AND scanned_at < %s
                LIMIT 1
                """,
                (student_id, code_data, start, end),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def create(self, *, student_id: int, code_data: str, scanned_at: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, code_data, scanned_at)
                VALUES(%s,%s,%s)
                """,
                (student_id, code_data, scanned_at),
            )
            return AttendanceRecord(
                attendance_id=int(cur.lastrowid),
                student_id=student_id,
                code_data=code_data,
                scanned_at=scanned_at,
            )

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, code_data, scanned_at
                FROM attendance_records
                WHERE student_id=%s
                ORDER BY scanned_at DESC, attendance_id DESC
                """,
                (student_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
