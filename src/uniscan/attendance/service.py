from __future__ import annotations

import logging
from typing import List

from ..common.datetime_utils import Clock, day_bounds, now_local
from ..common.validators import require_max_length
from ..core.constants import MAX_CODE_DATA_LENGTH
from ..core.exceptions import AlreadyMarked, Forbidden, UniquenessViolation, ValidationError
from ..security.tokens import Identity
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: mark attendance for a scanned code, read a student's history."""

    def __init__(self, attendance: AttendanceRepository, *, clock: Clock = now_local):
        self._attendance = attendance
        self._clock = clock

    def mark_attendance(self, student_id: int, code_data: str) -> AttendanceRecord:
        """Record that ``student_id`` scanned ``code_data`` now.

        ``student_id`` must be the authenticated identity, never a value taken
        from the request body. At most one record per student, code and
        calendar day: a repeat raises ``AlreadyMarked`` and writes nothing.
        """
        if not isinstance(code_data, str) or not code_data:
            raise ValidationError("Code data is required")
        require_max_length(code_data, "Code data", MAX_CODE_DATA_LENGTH)

        now = self._clock()
        start, end = day_bounds(now)

        existing = self._attendance.find_for_student_and_code(
            student_id=student_id, code_data=code_data, start=start, end=end
        )
        if existing:
            logger.info("Duplicate attendance: student %s already marked for this code today", student_id)
            raise AlreadyMarked()

        try:
            record = self._attendance.create(student_id=student_id, code_data=code_data, scanned_at=now)
        except UniquenessViolation:
            # A concurrent scan won between our check and insert.
            logger.info("Duplicate attendance rejected by store for student %s", student_id)
            raise AlreadyMarked()

        logger.info("Attendance recorded: student %s (record %s)", student_id, record.attendance_id)
        return record

    def get_history(self, requester: Identity, student_id: int) -> List[AttendanceRecord]:
        """Records of ``student_id``, most recent first.

        Students may only read their own history; admins may read anyone's.
        """
        if not requester.is_admin and requester.user_id != student_id:
            logger.warning("User %s denied history of student %s", requester.user_id, student_id)
            raise Forbidden("You can only view your own attendance history")

        records = list(self._attendance.list_for_student(student_id))
        records.sort(key=lambda r: r.scanned_at, reverse=True)
        return records
