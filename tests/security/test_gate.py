from __future__ import annotations

import pytest
from flask import Flask, jsonify

from uniscan.core.enums import Role
from uniscan.core.exceptions import TokenExpired, TokenInvalid, Unauthenticated
from uniscan.main import register_error_handlers
from uniscan.security.gate import AuthGate, current_identity, extract_token, token_required
from uniscan.security.tokens import TokenService


@pytest.fixture
def tokens(clock):
    return TokenService("gate-key", clock=clock)


@pytest.fixture
def gate(tokens):
    return AuthGate(tokens)


def test_extract_bearer_and_bare_tokens():
    assert extract_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_token("bearer   abc") == "abc"
    assert extract_token("abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_missing_header_is_unauthenticated(gate, header):
    with pytest.raises(Unauthenticated):
        gate.authenticate(header)


def test_other_scheme_is_invalid():
    with pytest.raises(TokenInvalid):
        extract_token("Basic dXNlcjpwYXNz")


def test_gate_resolves_identity(gate, tokens):
    identity = gate.authenticate(f"Bearer {tokens.issue(5, Role.STUDENT)}")
    assert identity.user_id == 5
    assert identity.role == Role.STUDENT


def test_gate_rejects_expired_token(gate, tokens, clock):
    token = tokens.issue(5, Role.STUDENT)
    clock.advance(hours=25)

    with pytest.raises(TokenExpired):
        gate.authenticate(token)


def _protected_app(gate):
    app = Flask(__name__)
    calls = []

    @app.route("/protected")
    @token_required(gate)
    def protected():
        calls.append(current_identity())
        return jsonify({"userId": current_identity().user_id})

    register_error_handlers(app)
    return app, calls


def test_decorator_never_runs_view_without_valid_token(gate):
    app, calls = _protected_app(gate)
    client = app.test_client()

    missing = client.get("/protected")
    forged = client.get("/protected", headers={"Authorization": "Bearer not-a-token"})

    assert missing.status_code == 401
    assert missing.get_json()["error"] == "unauthenticated"
    assert forged.status_code == 401
    assert calls == []


def test_decorator_binds_identity(gate, tokens):
    app, calls = _protected_app(gate)

    resp = app.test_client().get("/protected", headers={"Authorization": tokens.issue(9, Role.ADMIN)})

    assert resp.status_code == 200
    assert resp.get_json() == {"userId": 9}
    assert calls[0].is_admin


def test_current_identity_outside_gate_is_unauthenticated():
    app = Flask(__name__)
    with app.test_request_context("/"):
        with pytest.raises(Unauthenticated):
            current_identity()
