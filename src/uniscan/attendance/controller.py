from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body
from ..container import Container
from ..security.gate import current_identity, token_required
from .model import AttendanceRecord


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "studentId": record.student_id,
        "qrCodeData": record.code_data,
        "timestamp": record.scanned_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_gate)

    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = json_body()
        code_data = data.get("qrCodeData", data.get("codeData", data.get("code_data")))

        # Identity always comes from the token, never from the body.
        record = container.attendance_service.mark_attendance(current_identity().user_id, code_data)
        return jsonify({"message": "Attendance validated and saved!", "record": record_to_dict(record)}), 201

    @app.route("/attendance/<int:student_id>", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history(student_id: int):
        records = container.attendance_service.get_history(current_identity(), student_id)
        return jsonify([record_to_dict(r) for r in records])
