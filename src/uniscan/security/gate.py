from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import g, request

from ..core.exceptions import TokenInvalid, Unauthenticated
from .tokens import Identity, TokenService

logger = logging.getLogger(__name__)


def extract_token(header: Optional[str]) -> str:
    """Pull the bearer value out of an ``Authorization`` header.

    Both ``Bearer <token>`` and a bare token are accepted.
    """
    if header is None or not header.strip():
        raise Unauthenticated("No token provided")

    scheme, _, rest = header.strip().partition(" ")
    if not rest:
        return scheme
    if scheme.lower() != "bearer":
        raise TokenInvalid("Unsupported authorization scheme")
    token = rest.strip()
    if not token:
        raise Unauthenticated("No token provided")
    return token


class AuthGate:
    """Resolves the identity behind a request credential, or rejects it."""

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def authenticate(self, header: Optional[str]) -> Identity:
        try:
            return self._tokens.verify(extract_token(header))
        except Unauthenticated as exc:
            logger.info("Rejected request credential: %s", exc.__class__.__name__)
            raise


def token_required(gate: AuthGate):
    """View decorator: authenticate first, expose the identity as ``g.identity``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = gate.authenticate(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_identity() -> Identity:
    identity = g.get("identity")
    if identity is None:
        raise Unauthenticated()
    return identity
