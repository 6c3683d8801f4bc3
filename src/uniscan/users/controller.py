from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body
from ..container import Container
from ..core.exceptions import Unauthenticated
from ..security.gate import current_identity, token_required
from .model import UserSummary


def summary_to_dict(summary: UserSummary) -> dict:
    return {
        "userId": summary.user_id,
        "username": summary.username,
        "role": summary.role.value,
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_gate)

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        summary = container.auth_service.register(
            data.get("username"),
            data.get("password"),
            data.get("role"),
        )
        return jsonify({"message": "User registered successfully", "user": summary_to_dict(summary)}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        result = container.auth_service.login(data.get("username"), data.get("password"))
        return jsonify({"token": result.token, "role": result.role.value, "userId": result.user_id})

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        summary = container.auth_service.get_summary(current_identity().user_id)
        if summary is None:
            raise Unauthenticated("Account no longer exists")
        return jsonify(summary_to_dict(summary))
