from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from uniscan.attendance.service import AttendanceService
from uniscan.core.exceptions import AlreadyMarked

from tests.fakes import InMemoryAttendance

WORKERS = 8


class StaleReads(InMemoryAttendance):
    """Every duplicate check misses, as when all reads happen before any insert."""

    def find_for_student_and_code(self, **kwargs):
        return None


def _race(service: AttendanceService):
    barrier = threading.Barrier(WORKERS)

    def mark():
        barrier.wait()
        try:
            service.mark_attendance(1, "EVENT42")
            return "recorded"
        except AlreadyMarked:
            return "already_marked"

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        return [f.result() for f in [pool.submit(mark) for _ in range(WORKERS)]]


@pytest.mark.parametrize("repo_cls", [InMemoryAttendance, StaleReads])
def test_simultaneous_marks_store_exactly_one(repo_cls, clock):
    repo = repo_cls()

    outcomes = _race(AttendanceService(repo, clock=clock))

    assert outcomes.count("recorded") == 1
    assert outcomes.count("already_marked") == WORKERS - 1
    assert len(repo.records) == 1
