from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..core.exceptions import ValidationError


def json_body() -> Dict[str, Any]:
    """Request JSON as a dict; anything else is a validation error."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
