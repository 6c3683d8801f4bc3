from __future__ import annotations

from datetime import datetime

import pytest

from uniscan.attendance.service import AttendanceService
from uniscan.core.enums import Role
from uniscan.core.exceptions import AlreadyMarked, Forbidden, StoreUnavailable, ValidationError
from uniscan.security.tokens import Identity

from tests.fakes import InMemoryAttendance


@pytest.fixture
def service(attendance_repo, clock):
    return AttendanceService(attendance_repo, clock=clock)


def test_mark_twice_same_day_keeps_one_record(service, attendance_repo, clock):
    first = service.mark_attendance(1, "EVENT42")
    clock.advance(hours=5)

    with pytest.raises(AlreadyMarked):
        service.mark_attendance(1, "EVENT42")

    assert attendance_repo.records == [first]


def test_mark_on_two_days_keeps_two_records(service, attendance_repo, clock):
    service.mark_attendance(1, "EVENT42")
    clock.advance(days=1)
    service.mark_attendance(1, "EVENT42")

    assert len(attendance_repo.records) == 2


def test_day_boundary_is_local_midnight(service, attendance_repo, clock):
    clock.set(datetime(2026, 3, 2, 23, 59, 59))
    service.mark_attendance(1, "EVENT42")

    clock.set(datetime(2026, 3, 3, 0, 0, 0))
    service.mark_attendance(1, "EVENT42")

    assert [r.scanned_at.day for r in attendance_repo.records] == [2, 3]


def test_record_timestamp_is_now(service, fixed_now):
    record = service.mark_attendance(1, "EVENT42")

    assert record.scanned_at == fixed_now
    assert record.student_id == 1
    assert record.code_data == "EVENT42"


def test_different_codes_or_students_do_not_collide(service, attendance_repo):
    service.mark_attendance(1, "EVENT42")
    service.mark_attendance(1, "EVENT43")
    service.mark_attendance(2, "EVENT42")

    assert len(attendance_repo.records) == 3


def test_code_data_is_opaque(service):
    payload = '{"event": "EVENT42", "room": 12}'
    assert service.mark_attendance(1, payload).code_data == payload


def test_trailing_spaces_make_a_different_code(service, attendance_repo):
    service.mark_attendance(1, "EVENT42")
    service.mark_attendance(1, "EVENT42 ")

    assert [r.code_data for r in attendance_repo.records] == ["EVENT42", "EVENT42 "]


@pytest.mark.parametrize("code_data", ["", None, 42, "x" * 513])
def test_invalid_code_data(service, attendance_repo, code_data):
    with pytest.raises(ValidationError):
        service.mark_attendance(1, code_data)

    assert attendance_repo.records == []


def test_store_rejection_is_already_marked(clock):
    class StaleReads(InMemoryAttendance):
        def find_for_student_and_code(self, **kwargs):
            return None

    repo = StaleReads()
    service = AttendanceService(repo, clock=clock)
    service.mark_attendance(1, "EVENT42")

    with pytest.raises(AlreadyMarked):
        service.mark_attendance(1, "EVENT42")

    assert len(repo.records) == 1


def test_store_failure_propagates(clock):
    class DownStore(InMemoryAttendance):
        def create(self, **kwargs):
            raise StoreUnavailable()

    with pytest.raises(StoreUnavailable):
        AttendanceService(DownStore(), clock=clock).mark_attendance(1, "EVENT42")


def test_history_is_newest_first(service, clock):
    for code in ("A", "B", "C"):
        service.mark_attendance(1, code)
        clock.advance(minutes=10)
    clock.advance(days=1)
    service.mark_attendance(1, "A")

    history = service.get_history(Identity(1, Role.STUDENT), 1)

    assert [r.code_data for r in history] == ["A", "C", "B", "A"]
    assert all(a.scanned_at >= b.scanned_at for a, b in zip(history, history[1:]))


def test_history_only_contains_requested_student(service):
    service.mark_attendance(1, "EVENT42")
    service.mark_attendance(2, "EVENT42")

    history = service.get_history(Identity(2, Role.STUDENT), 2)

    assert [r.student_id for r in history] == [2]


def test_history_of_other_student_is_forbidden(service):
    service.mark_attendance(1, "EVENT42")

    with pytest.raises(Forbidden):
        service.get_history(Identity(2, Role.STUDENT), 1)


def test_admin_can_read_any_history(service):
    service.mark_attendance(1, "EVENT42")

    history = service.get_history(Identity(99, Role.ADMIN), 1)

    assert len(history) == 1


def test_empty_history(service):
    assert service.get_history(Identity(1, Role.STUDENT), 1) == []
