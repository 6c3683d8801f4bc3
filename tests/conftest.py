from __future__ import annotations

from datetime import datetime

import pytest

from uniscan.container import wire_services
from uniscan.main import create_app

from tests.fakes import FakeClock, InMemoryAttendance, InMemoryUsers

TEST_SIGNING_KEY = "test-signing-key"
# Cheap hashing keeps the suite fast.
TEST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, attendance_repo, clock):
    return wire_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        signing_key=TEST_SIGNING_KEY,
        password_hash_method=TEST_HASH_METHOD,
        password_salt_length=8,
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="uniscan.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
