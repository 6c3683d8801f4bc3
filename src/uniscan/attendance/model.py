from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one scanned attendance event."""

    attendance_id: int
    student_id: int
    code_data: str
    scanned_at: datetime
