"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from uniscan.config import get_settings_module
from uniscan.container import build_container
from uniscan.core.exceptions import AlreadyMarked


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    result = container.auth_service.login("student1", "pass123")
    identity = container.auth_gate.authenticate(f"Bearer {result.token}")

    try:
        record = container.attendance_service.mark_attendance(identity.user_id, "EVENT42")
        print("marked:", record)
    except AlreadyMarked as e:
        print("skipped:", e)

    for record in container.attendance_service.get_history(identity, identity.user_id):
        print(record.scanned_at.isoformat(), record.code_data)


if __name__ == "__main__":
    main()
