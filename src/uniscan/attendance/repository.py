from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Append-only attendance ledger.

    ``create`` raises ``UniquenessViolation`` if the student already has a
    record for the same code on the same calendar day.
    """

    def find_for_student_and_code(
        self,
        *,
        student_id: int,
        code_data: str,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, student_id: int, code_data: str, scanned_at: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        """All records of a student, newest first."""
        raise NotImplementedError
