from __future__ import annotations

from datetime import timedelta

from uniscan.core.enums import Role
from uniscan.database.bootstrap import DEMO_CODE, seed_demo_data


def test_seed_creates_demo_users_and_scans(container, users_repo, attendance_repo, clock, fixed_now):
    seed_demo_data(container, clock=clock)

    student1 = users_repo.get_by_username("student1")
    student2 = users_repo.get_by_username("student2")
    admin = users_repo.get_by_username("admin")
    assert [student1.role, student2.role, admin.role] == [Role.STUDENT, Role.STUDENT, Role.ADMIN]

    records = attendance_repo.records
    assert {(r.student_id, r.code_data, r.scanned_at) for r in records} == {
        (student1.user_id, DEMO_CODE, fixed_now),
        (student2.user_id, DEMO_CODE, fixed_now - timedelta(days=1)),
    }


def test_seed_can_run_twice(container, users_repo, attendance_repo, clock):
    seed_demo_data(container, clock=clock)
    seed_demo_data(container, clock=clock)

    assert sorted(u.username for u in users_repo.users) == ["admin", "student1", "student2"]
    assert len(attendance_repo.records) == 2
    assert len({r.scanned_at.date() for r in attendance_repo.records}) == 2


def test_seeded_accounts_can_log_in(container, clock):
    seed_demo_data(container, clock=clock)

    assert container.auth_service.login("student1", "pass123").role == Role.STUDENT
    assert container.auth_service.login("admin", "admin123").role == Role.ADMIN
